# 📄 File: app/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles logging in, logging out, keeping a login session alive with a refresh token,
# changing passwords, and checking who is calling a protected page
# 🧪 Purpose (Technical Summary):
# Domain service implementing credential verification, access/refresh token issuance and
# single-active-refresh-token rotation on top of UserRepository and SecurityManager
# 🔗 Dependencies:
# Domain models, repositories, app.shared.core.security, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# Users API endpoints, authentication dependencies (verify_jwt)

import logging
from typing import Optional, Tuple

from ..models.user import User, normalize_email, normalize_username
from ..repositories.user_repository import UserRepository
from app.shared.core.exceptions import (
    ApiError,
    AuthenticationError,
    InvalidTokenError,
    NotFoundError,
    TokenIssuanceError,
    ValidationError,
)
from app.shared.core.security import REFRESH_TOKEN_TYPE, SecurityManager

logger = logging.getLogger(__name__)


class AuthService:
    """
    Domain service for authentication business logic.

    Business rules:
    - An account holds at most one active refresh token; issuing a new pair overwrites it
    - A refresh token is accepted only if it equals the stored value
    - Logout clears the stored refresh token, so refresh after logout fails
    - Passwords are only ever stored as bcrypt hashes
    """

    def __init__(self, user_repository: UserRepository, security: SecurityManager):
        self.user_repository = user_repository
        self.security = security

    async def issue_tokens(self, user: User) -> Tuple[str, str]:
        """
        Sign a new access/refresh pair and persist the refresh token.

        Returns:
            Tuple of (access_token, refresh_token)

        Raises:
            TokenIssuanceError: If the refresh token cannot be stored
        """
        access_token = self.security.create_access_token({
            "sub": user.id,
            "email": user.email,
            "username": user.username,
            "fullName": user.full_name,
        })
        refresh_token = self.security.create_refresh_token({"sub": user.id})

        try:
            current = await self.user_repository.get_by_id(user.id)
            if current is None:
                raise TokenIssuanceError()
            await self.user_repository.set_refresh_token(user.id, refresh_token)
        except TokenIssuanceError:
            logger.error(f"Token issuance failed: user {user.id} no longer exists")
            raise
        except ApiError as e:
            logger.error(f"Token issuance failed for user {user.id}: {e.message}")
            raise TokenIssuanceError() from e

        return access_token, refresh_token

    async def login(
        self,
        password: str,
        username: Optional[str] = None,
        email: Optional[str] = None
    ) -> Tuple[User, str, str]:
        """
        Verify credentials and start a session.

        Returns:
            Tuple of (sanitized user, access_token, refresh_token)
        """
        username = normalize_username(username) if username else None
        email = normalize_email(email) if email else None
        if not username and not email:
            raise ValidationError("Username or email is required")

        user = await self.user_repository.find_by_username_or_email(username=username, email=email)
        if user is None:
            logger.info(f"Login failed: no account for {username or email}")
            raise NotFoundError("User not found")

        if not await self.security.verify_password_async(password or "", user.password_hash):
            logger.warning(f"Login failed: invalid credentials for user {user.id}")
            raise AuthenticationError("Invalid user credentials")

        access_token, refresh_token = await self.issue_tokens(user)
        logger.info(f"User {user.id} logged in")
        return user.sanitized(), access_token, refresh_token

    async def logout(self, user_id: str) -> None:
        await self.user_repository.clear_refresh_token(user_id)
        logger.info(f"User {user_id} logged out")

    async def refresh(self, incoming_token: Optional[str]) -> Tuple[str, str]:
        """
        Rotate a refresh token.

        Raises:
            AuthenticationError: No token presented
            InvalidTokenError: Bad signature/expiry, unknown subject, or token
                different from the stored one (already rotated or logged out)
        """
        if not incoming_token:
            raise AuthenticationError("Unauthorized request")

        payload = self.security.verify_token(incoming_token, REFRESH_TOKEN_TYPE)

        user = await self.user_repository.get_by_id(payload["sub"])
        if user is None:
            raise InvalidTokenError("Invalid refresh token")

        if incoming_token != user.refresh_token:
            logger.warning(f"Refresh token reuse or stale token for user {user.id}")
            raise InvalidTokenError("Refresh token is expired or used")

        tokens = await self.issue_tokens(user)
        logger.info(f"Refresh token rotated for user {user.id}")
        return tokens

    async def change_password(self, user_id: str, old_password: str, new_password: str) -> None:
        if not old_password or not old_password.strip() or not new_password or not new_password.strip():
            raise ValidationError("Old and new password are required")

        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if not await self.security.verify_password_async(old_password, user.password_hash):
            logger.info(f"Password change rejected for user {user_id}: wrong old password")
            raise ValidationError("Invalid old password")

        password_hash = await self.security.hash_password_async(new_password)
        await self.user_repository.update_password_hash(user_id, password_hash)
        logger.info(f"Password changed for user {user_id}")

    async def resolve_access_token(self, token: Optional[str]) -> User:
        """
        Resolve an access token to the sanitized account it belongs to.

        Raises:
            AuthenticationError: No token
            InvalidTokenError: Token fails verification or names no account
        """
        if not token:
            raise AuthenticationError("Unauthorized request")

        payload = self.security.verify_token(token)
        user = await self.user_repository.get_by_id(payload["sub"])
        if user is None:
            raise InvalidTokenError("Invalid Access Token")
        return user.sanitized()
