# 📄 File: app/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# This file contains the business logic for VideoTube accounts - signing up with a profile picture,
# updating name, email and pictures, showing a channel page, and listing what someone has watched.
# 🧪 Purpose (Technical Summary):
# Domain service implementing registration, profile/media updates, channel profile aggregation
# and watch history resolution over typed repositories and the MediaHost port.
# 🔗 Dependencies:
# User domain models, repositories, MediaHost, SecurityManager, exceptions
# 🔄 Connected Modules / Calls From:
# Users API endpoints (presentation/api/v1/users.py), service unit tests

import logging
from pathlib import Path
from typing import List, Optional

from ..models.channel import ChannelProfile
from ..models.user import User, normalize_email, normalize_username
from ..models.video import Video
from ..repositories.subscription_repository import SubscriptionRepository
from ..repositories.user_repository import UserRepository
from ..repositories.video_repository import VideoRepository
from app.shared.core.exceptions import (
    ApiError,
    ConflictError,
    MediaUploadError,
    NotFoundError,
    ValidationError,
)
from app.shared.core.security import SecurityManager
from app.shared.infrastructure.storage.media_host import MediaAsset, MediaHost

logger = logging.getLogger(__name__)

AVATAR_FOLDER = "avatars"
COVER_IMAGE_FOLDER = "covers"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class UserService:
    """
    Domain service for account business logic.

    Business rules:
    - Username and email are unique and compared lower-cased
    - An avatar is mandatory at registration, a cover image is optional
    - Replacing an avatar or cover image deletes the previous asset on a best-effort basis
    - Responses only ever carry sanitized accounts
    """

    def __init__(
        self,
        user_repository: UserRepository,
        subscription_repository: SubscriptionRepository,
        video_repository: VideoRepository,
        media_host: MediaHost,
        security: SecurityManager
    ):
        self.user_repository = user_repository
        self.subscription_repository = subscription_repository
        self.video_repository = video_repository
        self.media_host = media_host
        self.security = security

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    async def register(
        self,
        username: Optional[str],
        email: Optional[str],
        full_name: Optional[str],
        password: Optional[str],
        avatar_path: Optional[Path],
        cover_image_path: Optional[Path] = None
    ) -> User:
        """
        Create an account with uploaded media.

        Args:
            username, email, full_name, password: Raw form fields
            avatar_path: Staged avatar file, required
            cover_image_path: Staged cover image file, optional

        Returns:
            The created account, sanitized

        Raises:
            ValidationError: Blank field, missing avatar, or avatar upload failure
            ConflictError: Username or email already taken
        """
        if any(_is_blank(value) for value in (username, email, full_name, password)):
            raise ValidationError("All fields are required")

        username = normalize_username(username)
        email = normalize_email(email)

        existing = await self.user_repository.find_by_username_or_email(username=username, email=email)
        if existing is not None:
            logger.info(f"Registration rejected: {username} / {email} already taken")
            raise ConflictError("User with email or username already exists", fields=["username", "email"])

        if avatar_path is None:
            raise ValidationError("Avatar file is required", field="avatar")

        avatar = await self.media_host.upload(avatar_path, AVATAR_FOLDER)

        cover_image: Optional[MediaAsset] = None
        if cover_image_path is not None:
            try:
                cover_image = await self.media_host.upload(cover_image_path, COVER_IMAGE_FOLDER)
            except MediaUploadError as e:
                logger.warning(f"Cover image upload failed for {username}, continuing without it: {e.message}")

        password_hash = await self.security.hash_password_async(password)

        user = User(
            username=username,
            email=email,
            full_name=full_name.strip(),
            avatar=avatar.url,
            avatar_public_id=avatar.public_id,
            cover_image=cover_image.url if cover_image else None,
            cover_image_public_id=cover_image.public_id if cover_image else None,
            password_hash=password_hash,
        )
        try:
            created = await self.user_repository.create(user)
        except ApiError:
            await self._discard_assets(avatar, cover_image)
            raise

        logger.info(f"Registered user {created.id} ({created.username})")
        return created.sanitized()

    # =========================================================================
    # PROFILE AND MEDIA
    # =========================================================================

    async def update_account(self, user_id: str, full_name: Optional[str], email: Optional[str]) -> User:
        if _is_blank(full_name) or _is_blank(email):
            raise ValidationError("All fields are required")

        email = normalize_email(email)
        if await self.user_repository.email_taken_by_other(email, user_id):
            raise ConflictError("User with this email already exists", fields=["email"])

        updated = await self.user_repository.update_account_details(user_id, full_name.strip(), email)
        if updated is None:
            raise NotFoundError("User not found")

        logger.info(f"Account details updated for user {user_id}")
        return updated.sanitized()

    async def update_avatar(self, user_id: str, avatar_path: Optional[Path]) -> User:
        if avatar_path is None:
            raise ValidationError("Avatar file is missing", field="avatar")

        return await self._replace_media(
            user_id,
            avatar_path,
            AVATAR_FOLDER,
            previous_id=lambda user: user.avatar_public_id,
            update=self.user_repository.update_avatar,
        )

    async def update_cover_image(self, user_id: str, cover_image_path: Optional[Path]) -> User:
        if cover_image_path is None:
            raise ValidationError("Cover image file is missing", field="coverImage")

        return await self._replace_media(
            user_id,
            cover_image_path,
            COVER_IMAGE_FOLDER,
            previous_id=lambda user: user.cover_image_public_id,
            update=self.user_repository.update_cover_image,
        )

    async def _replace_media(self, user_id: str, local_path: Path, folder: str, previous_id, update) -> User:
        current = await self.user_repository.get_by_id(user_id)
        if current is None:
            raise NotFoundError("User not found")
        old_public_id = previous_id(current)

        asset = await self.media_host.upload(local_path, folder)

        try:
            updated = await update(user_id, asset.url, asset.public_id)
        except ApiError:
            await self._discard_assets(asset)
            raise
        if updated is None:
            await self._discard_assets(asset)
            raise NotFoundError("User not found")

        if old_public_id and old_public_id != asset.public_id:
            await self._discard_public_ids(old_public_id)

        logger.info(f"Replaced {folder} asset for user {user_id}")
        return updated.sanitized()

    async def _discard_assets(self, *assets: Optional[MediaAsset]) -> None:
        """Best-effort removal of uploaded assets that never got attached to an account."""
        await self._discard_public_ids(*(asset.public_id for asset in assets if asset is not None))

    async def _discard_public_ids(self, *public_ids: str) -> None:
        for public_id in public_ids:
            try:
                await self.media_host.delete(public_id)
            except ApiError as e:
                logger.warning(f"Could not delete media asset {public_id}: {e.message}")

    # =========================================================================
    # READ MODELS
    # =========================================================================

    async def get_channel_profile(self, username: Optional[str], viewer_id: Optional[str] = None) -> ChannelProfile:
        """
        Build the public channel view of an account.

        Args:
            username: Channel handle, matched case-insensitively
            viewer_id: Requesting account, None for anonymous requests
        """
        if _is_blank(username):
            raise ValidationError("Username is missing")

        channel = await self.user_repository.get_by_username(normalize_username(username))
        if channel is None:
            raise NotFoundError("Channel does not exist")

        subscribers_count = await self.subscription_repository.count_subscribers(channel.id)
        subscribed_to_count = await self.subscription_repository.count_subscriptions(channel.id)
        is_subscribed = False
        if viewer_id:
            is_subscribed = await self.subscription_repository.is_subscribed(viewer_id, channel.id)

        return ChannelProfile(
            id=channel.id,
            username=channel.username,
            full_name=channel.full_name,
            email=channel.email,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            created_at=channel.created_at,
            subscribers_count=subscribers_count,
            channels_subscribed_to_count=subscribed_to_count,
            is_subscribed=is_subscribed,
        )

    async def get_watch_history(self, user_id: str) -> List[Video]:
        """Resolve the ordered history; ids of deleted videos are skipped, repeats are kept."""
        video_ids = await self.user_repository.get_watch_history_ids(user_id)
        if not video_ids:
            return []

        videos = await self.video_repository.get_by_ids_with_owners(video_ids)
        history = [videos[video_id] for video_id in video_ids if video_id in videos]

        if len(history) != len(video_ids):
            logger.debug(f"Watch history for {user_id}: {len(video_ids) - len(history)} entries point to missing videos")
        return history
