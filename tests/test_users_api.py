from pathlib import Path

import pytest

from app.modules.user_management.domain.models import Subscription, Video
from tests.conftest import API


def _temp_files(settings):
    temp_dir = Path(settings.UPLOAD_TEMP_DIR)
    return list(temp_dir.iterdir()) if temp_dir.exists() else []


class TestRegister:
    def test_register_success(self, register_user, media_host):
        response = register_user(with_cover=True)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["statusCode"] == 201
        assert body["message"] == "User registered successfully"
        user = body["data"]
        assert user["username"] == "alice"
        assert user["fullName"] == "Alice Liddell"
        assert user["avatar"] == media_host.uploads[0].url
        assert user["coverImage"] == media_host.uploads[1].url
        assert "passwordHash" not in user
        assert "refreshToken" not in user

    def test_blank_fields_rejected(self, register_user):
        response = register_user(full_name="   ")
        assert response.status_code == 400
        body = response.json()
        assert body == {
            "statusCode": 400,
            "data": None,
            "message": "All fields are required",
            "success": False,
        }

    def test_duplicate_username_any_case(self, register_user):
        assert register_user().status_code == 201
        response = register_user(username="ALICE", email="someone@example.com")
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_missing_avatar_with_cover(self, client, png_bytes):
        response = client.post(
            f"{API}/register",
            data={"username": "bob", "email": "bob@example.com", "fullName": "Bob", "password": "pw"},
            files={"coverImage": ("cover.png", png_bytes, "image/png")},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Avatar file is required"

    def test_non_image_upload_rejected(self, client):
        response = client.post(
            f"{API}/register",
            data={"username": "bob", "email": "bob@example.com", "fullName": "Bob", "password": "pw"},
            files={"avatar": ("avatar.png", b"definitely not a png", "image/png")},
        )
        assert response.status_code == 400

    def test_temp_files_removed_on_success(self, register_user, settings):
        assert register_user(with_cover=True).status_code == 201
        assert _temp_files(settings) == []

    def test_temp_files_removed_when_upload_fails(self, register_user, settings, media_host):
        media_host.fail_folders.add("avatars")
        assert register_user(with_cover=True).status_code == 400
        assert _temp_files(settings) == []

    def test_temp_files_removed_when_upload_never_attempted(self, register_user, settings, media_host):
        assert register_user().status_code == 201
        response = register_user(with_cover=True)
        assert response.status_code == 409
        assert len(media_host.uploads) == 1
        assert _temp_files(settings) == []


class TestSession:
    def test_login_sets_cookies_and_returns_tokens(self, client, register_user, login_user):
        register_user()
        response = login_user()

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["accessToken"] != data["refreshToken"]
        assert data["user"]["username"] == "alice"
        assert client.cookies.get("accessToken") == data["accessToken"]
        assert client.cookies.get("refreshToken") == data["refreshToken"]
        set_cookie = ",".join(response.headers.get_list("set-cookie")).lower()
        assert "httponly" in set_cookie
        assert "secure" in set_cookie

    def test_login_with_email(self, client, register_user):
        register_user()
        response = client.post(f"{API}/login", json={"email": "ALICE@example.com", "password": "s3cret-pass"})
        assert response.status_code == 200

    def test_login_wrong_password(self, register_user, login_user):
        register_user()
        assert login_user(password="wrong").status_code == 401

    def test_login_unknown_user(self, login_user):
        assert login_user(username="nobody").status_code == 404

    def test_login_without_identifier(self, client):
        response = client.post(f"{API}/login", json={"password": "pw"})
        assert response.status_code == 400
        assert response.json()["message"] == "Username or email is required"

    def test_current_user_is_sanitized(self, client, register_user, login_user):
        register_user()
        login_user()

        response = client.get(f"{API}/current-user")

        assert response.status_code == 200
        user = response.json()["data"]
        assert user["email"] == "alice@example.com"
        assert "passwordHash" not in user and "password" not in user
        assert "refreshToken" not in user

    def test_bearer_header_accepted(self, client, register_user, login_user):
        register_user()
        access = login_user().json()["data"]["accessToken"]
        client.cookies.clear()

        response = client.get(f"{API}/current-user", headers={"Authorization": f"Bearer {access}"})
        assert response.status_code == 200

    def test_protected_route_without_token(self, client):
        response = client.get(f"{API}/current-user")
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_protected_route_with_garbage_token(self, client):
        response = client.get(f"{API}/current-user", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401

    def test_refresh_rotates_and_old_token_fails(self, client, register_user, login_user):
        register_user()
        old_refresh = login_user().json()["data"]["refreshToken"]

        rotated = client.post(f"{API}/refresh-token")
        assert rotated.status_code == 200
        new_refresh = rotated.json()["data"]["refreshToken"]
        assert new_refresh != old_refresh
        assert client.cookies.get("refreshToken") == new_refresh

        client.cookies.clear()
        replay = client.post(f"{API}/refresh-token", json={"refreshToken": old_refresh})
        assert replay.status_code == 401
        assert replay.json()["message"] == "Refresh token is expired or used"

    def test_refresh_with_signed_but_unstored_token(self, client, register_user, login_user, security):
        user_id = register_user().json()["data"]["id"]
        login_user()
        client.cookies.clear()

        forged = security.create_refresh_token({"sub": user_id})
        response = client.post(f"{API}/refresh-token", json={"refreshToken": forged})
        assert response.status_code == 401

    def test_refresh_without_token(self, client):
        response = client.post(f"{API}/refresh-token")
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized request"

    def test_logout_clears_cookies_and_blocks_refresh(self, client, register_user, login_user):
        register_user()
        refresh = login_user().json()["data"]["refreshToken"]

        response = client.post(f"{API}/logout")
        assert response.status_code == 200
        assert response.json()["data"] == {}
        assert client.cookies.get("accessToken") is None

        client.cookies.clear()
        assert client.post(f"{API}/refresh-token", json={"refreshToken": refresh}).status_code == 401

    def test_logout_twice_with_same_access_token(self, client, register_user, login_user, user_repository):
        user_id = register_user().json()["data"]["id"]
        access = login_user().json()["data"]["accessToken"]
        client.cookies.clear()
        headers = {"Authorization": f"Bearer {access}"}

        first = client.post(f"{API}/logout", headers=headers)
        second = client.post(f"{API}/logout", headers=headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["success"] is True
        assert user_repository.users[user_id].refresh_token is None


class TestAccount:
    @pytest.fixture(autouse=True)
    def _session(self, register_user, login_user):
        register_user()
        login_user()

    def test_change_password(self, client, login_user):
        response = client.post(
            f"{API}/change-password",
            json={"oldPassword": "s3cret-pass", "newPassword": "brand-new-pass"},
        )
        assert response.status_code == 200
        assert login_user(password="s3cret-pass").status_code == 401
        assert login_user(password="brand-new-pass").status_code == 200

    def test_change_password_wrong_old(self, client):
        response = client.post(
            f"{API}/change-password",
            json={"oldPassword": "nope", "newPassword": "brand-new-pass"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid old password"

    def test_update_account(self, client):
        response = client.patch(
            f"{API}/update-account",
            json={"fullName": "Alice L.", "email": "alice.l@example.com"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["fullName"] == "Alice L."
        assert data["email"] == "alice.l@example.com"

    def test_update_account_requires_both_fields(self, client):
        response = client.patch(f"{API}/update-account", json={"fullName": "Alice"})
        assert response.status_code == 400

    def test_update_avatar(self, client, png_bytes, media_host, settings):
        old_public_id = media_host.uploads[0].public_id
        response = client.patch(f"{API}/avatar", files={"avatar": ("new.png", png_bytes, "image/png")})

        assert response.status_code == 200
        assert response.json()["data"]["avatar"] == media_host.uploads[-1].url
        assert media_host.deleted == [old_public_id]
        assert _temp_files(settings) == []

    def test_update_avatar_without_file(self, client):
        response = client.patch(f"{API}/avatar", files={"other": ("x.png", b"x", "image/png")})
        assert response.status_code == 400

    def test_update_cover_image(self, client, png_bytes, media_host):
        response = client.patch(f"{API}/cover-image", files={"coverImage": ("c.png", png_bytes, "image/png")})
        assert response.status_code == 200
        assert response.json()["data"]["coverImage"] == media_host.uploads[-1].url


class TestChannelProfile:
    def test_subscriber_counts_and_flag(self, client, register_user, login_user, subscription_repository):
        channel_id = register_user().json()["data"]["id"]
        fan_ids = [
            register_user(username=f"fan{i}", email=f"fan{i}@example.com").json()["data"]["id"]
            for i in range(3)
        ]
        register_user(username="outsider", email="outsider@example.com")
        for fan_id in fan_ids:
            subscription_repository.subscriptions.append(Subscription(subscriber_id=fan_id, channel_id=channel_id))

        login_user(username="fan1")
        as_fan = client.get(f"{API}/c/alice").json()["data"]
        assert as_fan["subscribersCount"] == 3
        assert as_fan["channelsSubscribedToCount"] == 0
        assert as_fan["isSubscribed"] is True

        login_user(username="outsider")
        assert client.get(f"{API}/c/alice").json()["data"]["isSubscribed"] is False

        client.cookies.clear()
        anonymous = client.get(f"{API}/c/ALICE")
        assert anonymous.status_code == 200
        assert anonymous.json()["data"]["isSubscribed"] is False

    def test_invalid_token_treated_as_anonymous(self, client, register_user):
        register_user()
        response = client.get(f"{API}/c/alice", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 200
        assert response.json()["data"]["isSubscribed"] is False

    def test_unknown_channel(self, client):
        response = client.get(f"{API}/c/nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "Channel does not exist"


class TestWatchHistory:
    def test_empty_history(self, client, register_user, login_user):
        register_user()
        login_user()

        response = client.get(f"{API}/history")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"] == []

    def test_history_with_owner(self, client, register_user, login_user, user_repository, video_repository):
        owner_id = register_user(username="owner", email="owner@example.com").json()["data"]["id"]
        viewer_id = register_user().json()["data"]["id"]
        video = Video(
            video_file="https://media.test/v.mp4",
            thumbnail="https://media.test/t.png",
            title="Clip",
            owner_id=owner_id,
        )
        video_repository.videos[video.id] = video
        user_repository.watch_history[viewer_id] = [video.id, "gone"]
        login_user()

        history = client.get(f"{API}/history").json()["data"]

        assert len(history) == 1
        assert history[0]["title"] == "Clip"
        assert history[0]["owner"] == {
            "id": owner_id,
            "fullName": "Alice Liddell",
            "username": "owner",
            "avatar": history[0]["owner"]["avatar"],
        }
        assert "email" not in history[0]["owner"]
