from pathlib import Path

import pytest

from app.modules.user_management.domain.models import Subscription, User, Video
from app.shared.core.exceptions import ConflictError, MediaUploadError, NotFoundError, ValidationError


@pytest.fixture
def staged_file(tmp_path, png_bytes):
    """Factory writing a staged image into the temp dir."""
    counter = {"n": 0}

    def _make(suffix: str = ".png") -> Path:
        counter["n"] += 1
        path = tmp_path / f"staged-{counter['n']}{suffix}"
        path.write_bytes(png_bytes)
        return path

    return _make


async def _register(user_service, staged_file, **overrides):
    fields = dict(
        username="alice",
        email="alice@example.com",
        full_name="Alice Liddell",
        password="s3cret-pass",
        avatar_path=staged_file(),
    )
    fields.update(overrides)
    return await user_service.register(**fields)


class TestRegister:
    async def test_creates_sanitized_user(self, user_service, staged_file, media_host, user_repository, security):
        user = await _register(user_service, staged_file, username="  Alice ", email="Alice@Example.COM")

        assert user.username == "alice"
        assert user.email == "alice@example.com"
        assert user.avatar == media_host.uploads[0].url
        assert user.cover_image is None
        assert user.password_hash is None

        stored = user_repository.users[user.id]
        assert stored.avatar_public_id == media_host.uploads[0].public_id
        assert security.verify_password("s3cret-pass", stored.password_hash)

    @pytest.mark.parametrize("field", ["username", "email", "full_name", "password"])
    async def test_blank_field_rejected(self, user_service, staged_file, field):
        with pytest.raises(ValidationError) as exc:
            await _register(user_service, staged_file, **{field: "   "})
        assert exc.value.message == "All fields are required"

    async def test_duplicate_username_any_case(self, user_service, staged_file):
        await _register(user_service, staged_file)
        with pytest.raises(ConflictError):
            await _register(user_service, staged_file, username="ALICE", email="other@example.com")

    async def test_duplicate_email(self, user_service, staged_file):
        await _register(user_service, staged_file)
        with pytest.raises(ConflictError):
            await _register(user_service, staged_file, username="other")

    async def test_missing_avatar_even_with_cover(self, user_service, staged_file, media_host):
        with pytest.raises(ValidationError) as exc:
            await _register(user_service, staged_file, avatar_path=None, cover_image_path=staged_file())
        assert exc.value.message == "Avatar file is required"
        assert media_host.uploads == []

    async def test_with_cover_image(self, user_service, staged_file, media_host):
        user = await _register(user_service, staged_file, cover_image_path=staged_file())
        assert user.cover_image == media_host.uploads[1].url

    async def test_cover_upload_failure_is_not_fatal(self, user_service, staged_file, media_host):
        media_host.fail_folders.add("covers")
        user = await _register(user_service, staged_file, cover_image_path=staged_file())
        assert user.cover_image is None

    async def test_avatar_upload_failure(self, user_service, staged_file, media_host, user_repository):
        media_host.fail_folders.add("avatars")
        with pytest.raises(MediaUploadError):
            await _register(user_service, staged_file)
        assert user_repository.users == {}

    async def test_staged_files_removed_by_upload(self, user_service, staged_file):
        avatar = staged_file()
        await _register(user_service, staged_file, avatar_path=avatar)
        assert not avatar.exists()

    async def test_lost_registration_race_removes_uploads(
        self, user_service, staged_file, media_host, user_repository, monkeypatch
    ):
        async def taken_meanwhile(user):
            raise ConflictError("User with email or username already exists")

        monkeypatch.setattr(user_repository, "create", taken_meanwhile)

        with pytest.raises(ConflictError):
            await _register(user_service, staged_file, cover_image_path=staged_file())

        assert sorted(media_host.deleted) == sorted(asset.public_id for asset in media_host.uploads)
        assert len(media_host.deleted) == 2


class TestUpdateAccount:
    async def test_updates_name_and_email(self, user_service, staged_file):
        user = await _register(user_service, staged_file)
        updated = await user_service.update_account(user.id, " Alice L. ", "NEW@example.com")
        assert updated.full_name == "Alice L."
        assert updated.email == "new@example.com"
        assert updated.password_hash is None

    async def test_keeping_own_email_is_allowed(self, user_service, staged_file):
        user = await _register(user_service, staged_file)
        updated = await user_service.update_account(user.id, "Alice", "alice@example.com")
        assert updated.email == "alice@example.com"

    async def test_email_of_other_account(self, user_service, staged_file):
        await _register(user_service, staged_file, username="bob", email="bob@example.com")
        user = await _register(user_service, staged_file)
        with pytest.raises(ConflictError):
            await user_service.update_account(user.id, "Alice", "bob@example.com")

    async def test_blank_fields(self, user_service, staged_file):
        user = await _register(user_service, staged_file)
        with pytest.raises(ValidationError):
            await user_service.update_account(user.id, "", "alice@example.com")


class TestReplaceMedia:
    async def test_avatar_replaced_and_old_asset_deleted(self, user_service, staged_file, media_host):
        user = await _register(user_service, staged_file)
        old_public_id = media_host.uploads[0].public_id

        updated = await user_service.update_avatar(user.id, staged_file())

        assert updated.avatar == media_host.uploads[1].url
        assert media_host.deleted == [old_public_id]

    async def test_delete_failure_does_not_fail_update(self, user_service, staged_file, media_host):
        user = await _register(user_service, staged_file)
        media_host.fail_deletes = True

        updated = await user_service.update_avatar(user.id, staged_file())
        assert updated.avatar == media_host.uploads[1].url

    async def test_first_cover_image_deletes_nothing(self, user_service, staged_file, media_host):
        user = await _register(user_service, staged_file)
        updated = await user_service.update_cover_image(user.id, staged_file())
        assert updated.cover_image == media_host.uploads[1].url
        assert media_host.deleted == []

    async def test_missing_files(self, user_service, staged_file):
        user = await _register(user_service, staged_file)
        with pytest.raises(ValidationError):
            await user_service.update_avatar(user.id, None)
        with pytest.raises(ValidationError):
            await user_service.update_cover_image(user.id, None)

    async def test_unknown_user(self, user_service, staged_file):
        with pytest.raises(NotFoundError):
            await user_service.update_avatar("missing", staged_file())

    async def test_account_gone_before_update_removes_new_asset(
        self, user_service, staged_file, media_host, user_repository, monkeypatch
    ):
        user = await _register(user_service, staged_file)
        old_public_id = media_host.uploads[0].public_id

        async def vanished(user_id, url, public_id):
            return None

        monkeypatch.setattr(user_repository, "update_avatar", vanished)

        with pytest.raises(NotFoundError):
            await user_service.update_avatar(user.id, staged_file())

        assert media_host.deleted == [media_host.uploads[1].public_id]
        assert old_public_id not in media_host.deleted


class TestChannelProfile:
    async def test_counts_and_subscription_flag(self, user_service, staged_file, subscription_repository):
        channel = await _register(user_service, staged_file)
        fans = [
            await _register(user_service, staged_file, username=f"fan{i}", email=f"fan{i}@example.com")
            for i in range(3)
        ]
        outsider = await _register(user_service, staged_file, username="outsider", email="out@example.com")
        for fan in fans:
            await subscription_repository.create(Subscription(subscriber_id=fan.id, channel_id=channel.id))
        await subscription_repository.create(Subscription(subscriber_id=channel.id, channel_id=fans[0].id))

        as_fan = await user_service.get_channel_profile("ALICE", fans[1].id)
        as_outsider = await user_service.get_channel_profile("alice", outsider.id)
        anonymous = await user_service.get_channel_profile("alice")

        assert as_fan.subscribers_count == 3
        assert as_fan.channels_subscribed_to_count == 1
        assert as_fan.is_subscribed is True
        assert as_outsider.is_subscribed is False
        assert anonymous.is_subscribed is False

    async def test_unknown_channel(self, user_service):
        with pytest.raises(NotFoundError) as exc:
            await user_service.get_channel_profile("nobody")
        assert exc.value.message == "Channel does not exist"

    async def test_blank_username(self, user_service):
        with pytest.raises(ValidationError):
            await user_service.get_channel_profile("  ")


class TestWatchHistory:
    async def test_empty(self, user_service, staged_file):
        user = await _register(user_service, staged_file)
        assert await user_service.get_watch_history(user.id) == []

    async def test_order_duplicates_and_missing_videos(
        self, user_service, staged_file, user_repository, video_repository
    ):
        owner = await _register(user_service, staged_file, username="owner", email="owner@example.com")
        viewer = await _register(user_service, staged_file)
        first = await video_repository.create(
            Video(video_file="https://media.test/v1.mp4", thumbnail="t1", title="First", owner_id=owner.id)
        )
        second = await video_repository.create(
            Video(video_file="https://media.test/v2.mp4", thumbnail="t2", title="Second", owner_id=owner.id)
        )
        for video_id in (second.id, "deleted-video", first.id, second.id):
            await user_repository.add_to_watch_history(viewer.id, video_id)

        history = await user_service.get_watch_history(viewer.id)

        assert [video.title for video in history] == ["Second", "First", "Second"]
        assert history[0].owner.username == "owner"
