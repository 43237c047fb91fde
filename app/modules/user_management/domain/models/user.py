# 📄 File: app/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in VideoTube: their login name, email, display name,
# pictures, and the secret bits (password hash, current session token) we never show anyone.
# 🧪 Purpose (Technical Summary):
# Domain model for the Account entity with normalization rules for username/email
# and a sanitized() projection that strips credential fields.
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid
# 🔄 Connected Modules / Calls From:
# user_service.py, auth_service.py, user_repository.py, authentication dependency

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_username(username: str) -> str:
    return username.strip().lower()


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(BaseModel):
    """
    User domain model representing a VideoTube account.

    - id: unique immutable identifier
    - username: unique, lower-cased
    - email: unique, lower-cased
    - full_name: display name
    - avatar / avatar_public_id: media URL and provider identifier
    - cover_image / cover_image_public_id: optional, same pair
    - password_hash: bcrypt hash, never serialized to clients
    - refresh_token: the single active refresh token, if any
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str
    email: str
    full_name: str

    avatar: str
    avatar_public_id: Optional[str] = None
    cover_image: Optional[str] = None
    cover_image_public_id: Optional[str] = None

    password_hash: Optional[str] = None
    refresh_token: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = normalize_username(v)
        if not v:
            raise ValueError("Username is required")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = normalize_email(v)
        if not v:
            raise ValueError("Email is required")
        return v

    def sanitized(self) -> "User":
        """Copy without password hash and refresh token."""
        return self.model_copy(update={"password_hash": None, "refresh_token": None})

    def __str__(self) -> str:
        return f"User(id={self.id}, username={self.username})"
