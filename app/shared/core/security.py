"""
Security utilities for JWT signing/verification and password hashing.
Access and refresh tokens are signed with separate secrets.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from ..config.settings import Settings, get_settings
from .exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class SecurityManager:
    """
    Centralized security manager for authentication.
    Handles JWT tokens and password hashing.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.access_secret = self.settings.ACCESS_TOKEN_SECRET
        self.refresh_secret = self.settings.REFRESH_TOKEN_SECRET
        self.access_token_expire = timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.refresh_token_expire = timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS)
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.settings.BCRYPT_ROUNDS,
        )

    # =========================================================================
    # TOKENS
    # =========================================================================

    def _encode(
        self,
        data: Dict[str, Any],
        secret: str,
        token_type: str,
        expires_delta: timedelta
    ) -> str:
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + expires_delta,
            "iat": now,
            "jti": uuid4().hex,
            "type": token_type,
        })
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create JWT access token with user data and expiration.

        Args:
            data: Token payload data, must contain "sub"
            expires_delta: Custom expiration time

        Returns:
            str: Encoded JWT token
        """
        token = self._encode(
            data,
            self.access_secret,
            ACCESS_TOKEN_TYPE,
            expires_delta or self.access_token_expire,
        )
        logger.debug(f"Access token created for user: {data.get('sub')}")
        return token

    def create_refresh_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create JWT refresh token with extended expiration.

        Args:
            data: Token payload data, must contain "sub"
            expires_delta: Custom expiration time

        Returns:
            str: Encoded JWT refresh token
        """
        token = self._encode(
            data,
            self.refresh_secret,
            REFRESH_TOKEN_TYPE,
            expires_delta or self.refresh_token_expire,
        )
        logger.debug(f"Refresh token created for user: {data.get('sub')}")
        return token

    def verify_token(self, token: str, token_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify
            token_type: Expected token type (access/refresh)

        Returns:
            dict: Decoded token payload

        Raises:
            InvalidTokenError: If the token is tampered, expired, signed with
                another secret, of the wrong type, or has no subject
        """
        secret = self.refresh_secret if token_type == REFRESH_TOKEN_TYPE else self.access_secret

        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT validation failed ({token_type}): {e}")
            raise InvalidTokenError(str(e) or f"Invalid {token_type} token") from e

        if payload.get("type") != token_type:
            logger.warning(f"Token type mismatch. Expected: {token_type}, Got: {payload.get('type')}")
            raise InvalidTokenError(f"Invalid {token_type} token")

        if not payload.get("sub"):
            logger.warning("Token missing subject (user_id)")
            raise InvalidTokenError(f"Invalid {token_type} token")

        return payload

    # =========================================================================
    # PASSWORDS
    # =========================================================================

    def get_password_hash(self, password: str) -> str:
        """Hash password using bcrypt."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify password against hash.

        A missing or unparseable hash never verifies.
        """
        if not hashed_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error(f"Password verification error: {e}")
            return False

    async def hash_password_async(self, password: str) -> str:
        """Hash off the event loop; bcrypt is CPU bound."""
        return await run_in_threadpool(self.get_password_hash, password)

    async def verify_password_async(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        return await run_in_threadpool(self.verify_password, plain_password, hashed_password)


@lru_cache()
def get_security_manager() -> SecurityManager:
    """
    Get cached security manager instance.

    Returns:
        SecurityManager: Singleton security manager built from settings
    """
    return SecurityManager(get_settings())
