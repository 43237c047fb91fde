# 📄 File: tests/conftest.py
# 🧭 Purpose (Layman Explanation):
# Prepares a safe pretend world for the tests: fake databases kept in memory, a fake picture
# host, a tiny real image, and a ready-to-call copy of the VideoTube API.
# 🧪 Purpose (Technical Summary):
# Test environment bootstrap (env vars set before any app import), in-memory repository and
# media host fakes implementing the domain ports, and TestClient fixtures wired through
# FastAPI dependency overrides.
# 🔗 Dependencies:
# pytest, pytest-asyncio, fastapi.testclient (httpx), Pillow
# 🔄 Connected Modules / Calls From:
# Every test module under tests/

import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="videotube-tests-")

os.environ.update({
    "ENVIRONMENT": "test",
    "LOG_LEVEL": "WARNING",
    "LOG_FORMAT": "text",
    "ACCESS_TOKEN_SECRET": "test-access-secret-0123456789abcdef0123456789",
    "REFRESH_TOKEN_SECRET": "test-refresh-secret-fedcba9876543210fedcba98",
    "BCRYPT_ROUNDS": "4",
    "SUPABASE_URL": "https://example.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "test-service-role-key",
    "DATABASE_URL": f"sqlite+aiosqlite:///{_TEST_ROOT}/default.db",
    "COOKIE_SECURE": "true",
    "STATIC_DIR": os.path.join(_TEST_ROOT, "public"),
    "UPLOAD_TEMP_DIR": os.path.join(_TEST_ROOT, "public", "temp"),
})

import io
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.main import create_application
from app.modules.user_management.domain.models import Subscription, User, Video, VideoOwner
from app.modules.user_management.domain.repositories import (
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
)
from app.modules.user_management.domain.services import AuthService, UserService
from app.modules.user_management.presentation.dependencies import (
    get_media_host,
    get_subscription_repository,
    get_user_repository,
    get_video_repository,
)
from app.shared.config.settings import Settings
from app.shared.core.exceptions import ConflictError, MediaUploadError, StorageError
from app.shared.core.security import SecurityManager
from app.shared.infrastructure.storage.media_host import MediaAsset, MediaHost

API = "/api/v1/users"


# =========================================================================
# FAKES
# =========================================================================

class FakeUserRepository(UserRepository):
    """Dictionary-backed accounts and watch histories."""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.watch_history: Dict[str, List[str]] = {}

    async def create(self, user: User) -> User:
        for existing in self.users.values():
            if existing.username == user.username or existing.email == user.email:
                raise ConflictError("User with email or username already exists")
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    async def find_by_username_or_email(self, username=None, email=None) -> Optional[User]:
        for user in self.users.values():
            if (username and user.username == username) or (email and user.email == email):
                return user
        return None

    async def email_taken_by_other(self, email: str, user_id: str) -> bool:
        return any(u.email == email and u.id != user_id for u in self.users.values())

    def _update(self, user_id: str, **values) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update=values)
        self.users[user_id] = updated
        return updated

    async def set_refresh_token(self, user_id: str, refresh_token: str) -> None:
        self._update(user_id, refresh_token=refresh_token)

    async def clear_refresh_token(self, user_id: str) -> None:
        self._update(user_id, refresh_token=None)

    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        self._update(user_id, password_hash=password_hash)

    async def update_account_details(self, user_id: str, full_name: str, email: str) -> Optional[User]:
        return self._update(user_id, full_name=full_name, email=email)

    async def update_avatar(self, user_id: str, url: str, public_id: str) -> Optional[User]:
        return self._update(user_id, avatar=url, avatar_public_id=public_id)

    async def update_cover_image(self, user_id: str, url: str, public_id: str) -> Optional[User]:
        return self._update(user_id, cover_image=url, cover_image_public_id=public_id)

    async def add_to_watch_history(self, user_id: str, video_id: str) -> None:
        self.watch_history.setdefault(user_id, []).append(video_id)

    async def get_watch_history_ids(self, user_id: str) -> List[str]:
        return list(self.watch_history.get(user_id, []))


class FakeSubscriptionRepository(SubscriptionRepository):
    def __init__(self):
        self.subscriptions: List[Subscription] = []

    async def create(self, subscription: Subscription) -> Subscription:
        self.subscriptions.append(subscription)
        return subscription

    async def count_subscribers(self, channel_id: str) -> int:
        return sum(1 for s in self.subscriptions if s.channel_id == channel_id)

    async def count_subscriptions(self, subscriber_id: str) -> int:
        return sum(1 for s in self.subscriptions if s.subscriber_id == subscriber_id)

    async def is_subscribed(self, subscriber_id: str, channel_id: str) -> bool:
        return any(
            s.subscriber_id == subscriber_id and s.channel_id == channel_id
            for s in self.subscriptions
        )


class FakeVideoRepository(VideoRepository):
    """Resolves owners against the fake account store."""

    def __init__(self, user_repository: FakeUserRepository):
        self.videos: Dict[str, Video] = {}
        self.user_repository = user_repository

    async def create(self, video: Video) -> Video:
        self.videos[video.id] = video
        return video

    async def get_by_ids_with_owners(self, video_ids: Iterable[str]) -> Dict[str, Video]:
        resolved = {}
        for video_id in video_ids:
            video = self.videos.get(video_id)
            if video is None:
                continue
            owner = self.user_repository.users.get(video.owner_id)
            resolved[video_id] = video.model_copy(update={
                "owner": VideoOwner(
                    id=owner.id,
                    full_name=owner.full_name,
                    username=owner.username,
                    avatar=owner.avatar,
                ) if owner else None
            })
        return resolved


class FakeMediaHost(MediaHost):
    """
    Records uploads and deletes; removes the local file like the real host.

    Set fail_folders to make uploads into those folders fail, fail_deletes to
    make deletes fail.
    """

    def __init__(self):
        self.uploads: List[MediaAsset] = []
        self.deleted: List[str] = []
        self.fail_folders = set()
        self.fail_deletes = False

    async def upload(self, local_path: Path, folder: str) -> MediaAsset:
        local_path = Path(local_path)
        try:
            if folder in self.fail_folders:
                raise MediaUploadError("Error while uploading file")
            public_id = f"{folder}/{len(self.uploads) + 1}{local_path.suffix}"
            asset = MediaAsset(url=f"https://media.test/{public_id}", public_id=public_id)
            self.uploads.append(asset)
            return asset
        finally:
            local_path.unlink(missing_ok=True)

    async def delete(self, public_id: str) -> None:
        if self.fail_deletes:
            raise StorageError("Failed to delete media asset")
        self.deleted.append(public_id)


# =========================================================================
# FIXTURES
# =========================================================================

@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        STATIC_DIR=str(tmp_path / "public"),
        UPLOAD_TEMP_DIR=str(tmp_path / "public" / "temp"),
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path}/app.db",
    )


@pytest.fixture
def security(settings) -> SecurityManager:
    return SecurityManager(settings)


@pytest.fixture
def user_repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def subscription_repository() -> FakeSubscriptionRepository:
    return FakeSubscriptionRepository()


@pytest.fixture
def video_repository(user_repository) -> FakeVideoRepository:
    return FakeVideoRepository(user_repository)


@pytest.fixture
def media_host() -> FakeMediaHost:
    return FakeMediaHost()


@pytest.fixture
def auth_service(user_repository, security) -> AuthService:
    return AuthService(user_repository, security)


@pytest.fixture
def user_service(user_repository, subscription_repository, video_repository, media_host, security) -> UserService:
    return UserService(user_repository, subscription_repository, video_repository, media_host, security)


@pytest.fixture
def app(settings, user_repository, subscription_repository, video_repository, media_host):
    application = create_application(settings)
    application.dependency_overrides[get_user_repository] = lambda: user_repository
    application.dependency_overrides[get_subscription_repository] = lambda: subscription_repository
    application.dependency_overrides[get_video_repository] = lambda: video_repository
    application.dependency_overrides[get_media_host] = lambda: media_host
    return application


@pytest.fixture
def client(app) -> TestClient:
    # https so the Secure session cookies are sent back
    return TestClient(app, base_url="https://testserver")


@pytest.fixture
def register_user(client, png_bytes):
    """Register an account through the API and return the response."""

    def _register(
        username: str = "alice",
        email: str = "alice@example.com",
        password: str = "s3cret-pass",
        full_name: str = "Alice Liddell",
        with_cover: bool = False,
    ):
        files = {"avatar": ("avatar.png", png_bytes, "image/png")}
        if with_cover:
            files["coverImage"] = ("cover.png", png_bytes, "image/png")
        return client.post(
            f"{API}/register",
            data={"username": username, "email": email, "fullName": full_name, "password": password},
            files=files,
        )

    return _register


@pytest.fixture
def login_user(client):
    def _login(username: str = "alice", password: str = "s3cret-pass"):
        return client.post(f"{API}/login", json={"username": username, "password": password})

    return _login
