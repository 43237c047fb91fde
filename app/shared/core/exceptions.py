# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the VideoTube API uses to say
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization into the uniform failure envelope.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, security, storage, error handling middleware

from typing import Any, Dict, List, Optional

from fastapi import status


class ApiError(Exception):
    """
    Base exception class for the VideoTube API.

    Every failure raised by a handler, service or repository is an ApiError
    carrying the HTTP status code and message that end up in the failure
    envelope. All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str = "Something went wrong",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        errors: Optional[List[Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the failure envelope."""
        body: Dict[str, Any] = {
            "statusCode": self.status_code,
            "data": None,
            "message": self.message,
            "success": False,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class ValidationError(ApiError):
    """
    Exception raised for missing or blank required input.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Any]] = None
    ):
        if field and not errors:
            errors = [{"field": field, "message": message}]
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            errors=errors,
            error_code="VALIDATION_ERROR"
        )


class MediaUploadError(ValidationError):
    """
    Exception raised when a staged file cannot be accepted or forwarded
    to the media host.
    """

    def __init__(self, message: str = "Error while uploading file", field: Optional[str] = None):
        super().__init__(message=message, field=field)
        self.error_code = "MEDIA_UPLOAD_ERROR"


class PayloadTooLargeError(ApiError):
    """
    Exception raised when a request body exceeds the configured limit.
    """

    def __init__(self, message: str = "Request body too large", limit: Optional[int] = None):
        errors = [{"limit": limit}] if limit is not None else None
        super().__init__(
            message=message,
            status_code=413,
            errors=errors,
            error_code="PAYLOAD_TOO_LARGE"
        )


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationError(ApiError):
    """
    Exception raised when credentials are missing or a password is wrong.
    """

    def __init__(self, message: str = "Unauthorized request"):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="AUTHENTICATION_ERROR"
        )


class InvalidTokenError(ApiError):
    """
    Exception raised when a token fails signature, expiry or type checks,
    names an account that no longer exists, or is not the stored refresh token.
    """

    def __init__(self, message: str = "Invalid token"):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="INVALID_TOKEN"
        )


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class NotFoundError(ApiError):
    """
    Exception raised when requested resource is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None
    ):
        errors = None
        if resource_type or resource_id:
            errors = [{"resource_type": resource_type, "resource_id": resource_id}]
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            errors=errors,
            error_code="NOT_FOUND"
        )


class ConflictError(ApiError):
    """
    Exception raised when a unique field (username, email) is already taken.
    """

    def __init__(self, message: str = "Resource already exists", fields: Optional[List[str]] = None):
        errors = [{"field": name} for name in fields] if fields else None
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            errors=errors,
            error_code="CONFLICT_ERROR"
        )


# =============================================================================
# INTERNAL EXCEPTIONS
# =============================================================================

class TokenIssuanceError(ApiError):
    """
    Exception raised when a freshly signed refresh token cannot be persisted.
    """

    def __init__(self, message: str = "Token generation failed"):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="TOKEN_ISSUANCE_ERROR"
        )


class RepositoryError(ApiError):
    """
    Exception raised for repository operation failures.
    """

    def __init__(self, message: str = "Repository operation failed", operation: Optional[str] = None):
        errors = [{"operation": operation}] if operation else None
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            errors=errors,
            error_code="REPOSITORY_ERROR"
        )


class DatabaseError(ApiError):
    """
    Exception raised when the database connection or session is unusable.
    """

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="DATABASE_ERROR"
        )


class StorageError(ApiError):
    """
    Exception raised when the media host cannot be reached or configured.
    """

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="STORAGE_ERROR"
        )
