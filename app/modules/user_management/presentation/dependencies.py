# 📄 File: app/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# This file hands each users API request the tools it needs (database access, the picture host,
# the login checker) and makes sure only logged-in people reach the private pages.
# 🧪 Purpose (Technical Summary):
# Module-specific FastAPI dependencies: repository and service wiring, request-scoped upload
# staging, and the authentication gate (cookie or Bearer access token) with an optional variant.
# 🔗 Dependencies:
# FastAPI, app.shared.core.*, app.shared.infrastructure.*, domain services, repository implementations
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.presentation.api.v1.users, API tests (dependency overrides)

"""
User Management Module Dependencies

- Repository wiring over the request-scoped database session
- Domain service construction
- Upload staging that cleans up the temp directory after every request
- verify_jwt: the authentication gate
- get_optional_user: the same gate, but anonymous when no valid token is presented
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.repositories import (
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
)
from app.modules.user_management.domain.services import AuthService, UserService
from app.modules.user_management.infrastructure.database import (
    SubscriptionRepositoryImpl,
    UserRepositoryImpl,
    VideoRepositoryImpl,
)
from app.shared.config.settings import Settings, get_app_settings
from app.shared.core.exceptions import AuthenticationError, InvalidTokenError, StorageError
from app.shared.core.security import SecurityManager, get_security_manager
from app.shared.infrastructure.database.session import get_db_session
from app.shared.infrastructure.storage.file_manager import UploadStager
from app.shared.infrastructure.storage.media_host import MediaHost
from app.shared.utils.logging import user_id_var

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"

# Security scheme for the users module; the cookie is checked first
bearer_scheme = HTTPBearer(auto_error=False)


# =========================================================================
# APPLICATION STATE
# =========================================================================

def get_security(request: Request) -> SecurityManager:
    return getattr(request.app.state, "security", None) or get_security_manager()


def get_media_host(request: Request) -> MediaHost:
    media_host = getattr(request.app.state, "media_host", None)
    if media_host is None:
        raise StorageError("Media host not configured")
    return media_host


# =========================================================================
# REPOSITORIES AND SERVICES
# =========================================================================

def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepositoryImpl(session)


def get_subscription_repository(session: AsyncSession = Depends(get_db_session)) -> SubscriptionRepository:
    return SubscriptionRepositoryImpl(session)


def get_video_repository(session: AsyncSession = Depends(get_db_session)) -> VideoRepository:
    return VideoRepositoryImpl(session)


def get_auth_service(
    user_repository: UserRepository = Depends(get_user_repository),
    security: SecurityManager = Depends(get_security),
) -> AuthService:
    return AuthService(user_repository, security)


def get_user_service(
    user_repository: UserRepository = Depends(get_user_repository),
    subscription_repository: SubscriptionRepository = Depends(get_subscription_repository),
    video_repository: VideoRepository = Depends(get_video_repository),
    media_host: MediaHost = Depends(get_media_host),
    security: SecurityManager = Depends(get_security),
) -> UserService:
    return UserService(
        user_repository,
        subscription_repository,
        video_repository,
        media_host,
        security,
    )


async def get_upload_stager(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[UploadStager, None]:
    """
    Request-scoped upload stager.

    Whatever the media host did not consume is removed when the request ends,
    including when the request was rejected before any upload.
    """
    stager = UploadStager.from_settings(settings)
    try:
        yield stager
    finally:
        stager.discard_all()


# =========================================================================
# AUTHENTICATION GATE
# =========================================================================

def extract_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Access token from the accessToken cookie, else the Bearer header."""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


async def verify_jwt(
    request: Request,
    token: Optional[str] = Depends(extract_access_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Require an authenticated caller.

    Raises:
        AuthenticationError: No token presented
        InvalidTokenError: Token invalid, expired, or its account is gone
    """
    user = await auth_service.resolve_access_token(token)
    request.state.user = user
    user_id_var.set(user.id)
    return user


async def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(extract_access_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    """Authenticated caller if a valid token is presented, otherwise None."""
    if not token:
        return None
    try:
        user = await auth_service.resolve_access_token(token)
    except (AuthenticationError, InvalidTokenError) as e:
        logger.debug(f"Optional authentication ignored an unusable token: {e.message}")
        return None
    request.state.user = user
    user_id_var.set(user.id)
    return user
