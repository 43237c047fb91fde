# 📄 File: app/modules/user_management/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the request and response shapes used by the users API
# 🧪 Purpose (Technical Summary):
# Package initialization exporting Pydantic API schemas
# 🔗 Dependencies:
# user_schemas.py
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/users.py

from .user_schemas import (
    ChangePasswordRequest,
    ChannelProfileResponse,
    LoginData,
    LoginRequest,
    OwnerResponse,
    RefreshTokenRequest,
    TokenPairData,
    UpdateAccountRequest,
    UserResponse,
    WatchedVideoResponse,
)

__all__ = [
    "ChangePasswordRequest",
    "ChannelProfileResponse",
    "LoginData",
    "LoginRequest",
    "OwnerResponse",
    "RefreshTokenRequest",
    "TokenPairData",
    "UpdateAccountRequest",
    "UserResponse",
    "WatchedVideoResponse",
]
