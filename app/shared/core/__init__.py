"""
Core utilities package for the VideoTube API.
Provides security, the error hierarchy and the success envelope.
"""

from .security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    SecurityManager,
    get_security_manager,
)

from .exceptions import (
    ApiError,
    AuthenticationError,
    ConflictError,
    DatabaseError,
    InvalidTokenError,
    MediaUploadError,
    NotFoundError,
    PayloadTooLargeError,
    RepositoryError,
    StorageError,
    TokenIssuanceError,
    ValidationError,
)

from .responses import ApiResponse

__all__ = [
    # Security
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "SecurityManager",
    "get_security_manager",
    
    # Exceptions
    "ApiError",
    "AuthenticationError",
    "ConflictError",
    "DatabaseError",
    "InvalidTokenError",
    "MediaUploadError",
    "NotFoundError",
    "PayloadTooLargeError",
    "RepositoryError",
    "StorageError",
    "TokenIssuanceError",
    "ValidationError",
    
    # Responses
    "ApiResponse",
]
