from datetime import timedelta

import pytest

from app.shared.config.settings import Settings
from app.shared.core.exceptions import InvalidTokenError
from app.shared.core.security import REFRESH_TOKEN_TYPE


class TestTokens:
    def test_access_token_round_trip(self, security):
        token = security.create_access_token({"sub": "user-1", "username": "alice"})
        payload = security.verify_token(token)
        assert payload["sub"] == "user-1"
        assert payload["username"] == "alice"
        assert payload["type"] == "access"

    def test_tokens_for_same_subject_differ(self, security):
        assert security.create_refresh_token({"sub": "u"}) != security.create_refresh_token({"sub": "u"})

    def test_refresh_token_not_accepted_as_access_token(self, security):
        token = security.create_refresh_token({"sub": "user-1"})
        with pytest.raises(InvalidTokenError):
            security.verify_token(token)

    def test_access_token_not_accepted_as_refresh_token(self, security):
        token = security.create_access_token({"sub": "user-1"})
        with pytest.raises(InvalidTokenError):
            security.verify_token(token, REFRESH_TOKEN_TYPE)

    def test_expired_token_rejected(self, security):
        token = security.create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-5))
        with pytest.raises(InvalidTokenError):
            security.verify_token(token)

    def test_tampered_token_rejected(self, security):
        token = security.create_access_token({"sub": "user-1"})
        with pytest.raises(InvalidTokenError):
            security.verify_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))

    def test_token_without_subject_rejected(self, security):
        token = security.create_access_token({"email": "a@example.com"})
        with pytest.raises(InvalidTokenError):
            security.verify_token(token)


class TestPasswords:
    def test_hash_verifies(self, security):
        hashed = security.get_password_hash("hunter22")
        assert hashed != "hunter22"
        assert security.verify_password("hunter22", hashed)
        assert not security.verify_password("hunter23", hashed)

    def test_missing_or_garbage_hash_never_verifies(self, security):
        assert not security.verify_password("anything", None)
        assert not security.verify_password("anything", "not-a-bcrypt-hash")

    async def test_async_helpers(self, security):
        hashed = await security.hash_password_async("pw")
        assert await security.verify_password_async("pw", hashed)


class TestSettingsValidation:
    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            Settings(ACCESS_TOKEN_SECRET="short")

    def test_identical_secrets_rejected(self):
        secret = "x" * 40
        with pytest.raises(ValueError):
            Settings(ACCESS_TOKEN_SECRET=secret, REFRESH_TOKEN_SECRET=secret)

    def test_environment_normalized(self):
        assert Settings(ENVIRONMENT="TEST").is_testing
