# 📄 File: app/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# This file defines the shapes of what apps send to the users API (login details, new passwords,
# profile changes) and what they get back (account, tokens, channel page, watch history).
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas with camelCase aliases. Response schemas are built from
# domain models and never carry password hashes or refresh tokens.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - app.modules.user_management.domain.models (domain read models)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.users (endpoints)
# - FastAPI automatic request validation and response serialization

"""
Users API Schemas

Request Schemas:
- LoginRequest, RefreshTokenRequest, ChangePasswordRequest, UpdateAccountRequest

Response Schemas:
- UserResponse: Sanitized account
- LoginData, TokenPairData: Session tokens
- ChannelProfileResponse: Channel page with subscription aggregates
- WatchedVideoResponse / OwnerResponse: Watch history entries
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.modules.user_management.domain.models import ChannelProfile, User, Video, VideoOwner


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# REQUESTS
# =============================================================================

class LoginRequest(CamelModel):
    """Either username or email identifies the account."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class RefreshTokenRequest(CamelModel):
    refresh_token: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    old_password: Optional[str] = None
    new_password: Optional[str] = None


class UpdateAccountRequest(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None


# =============================================================================
# RESPONSES
# =============================================================================

class UserResponse(CamelModel):
    """Sanitized account."""

    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenPairData(CamelModel):
    access_token: str
    refresh_token: str


class LoginData(TokenPairData):
    user: UserResponse


class ChannelProfileResponse(CamelModel):
    id: str
    full_name: str
    username: str
    email: str
    avatar: str
    cover_image: Optional[str] = None
    created_at: datetime
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool

    @classmethod
    def from_domain(cls, profile: ChannelProfile) -> "ChannelProfileResponse":
        return cls(**profile.model_dump())


class OwnerResponse(CamelModel):
    id: str
    full_name: str
    username: str
    avatar: str

    @classmethod
    def from_domain(cls, owner: VideoOwner) -> "OwnerResponse":
        return cls(**owner.model_dump())


class WatchedVideoResponse(CamelModel):
    id: str
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner: Optional[OwnerResponse] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, video: Video) -> "WatchedVideoResponse":
        return cls(
            id=video.id,
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            title=video.title,
            description=video.description,
            duration=video.duration,
            views=video.views,
            is_published=video.is_published,
            owner=OwnerResponse.from_domain(video.owner) if video.owner else None,
            created_at=video.created_at,
            updated_at=video.updated_at,
        )
