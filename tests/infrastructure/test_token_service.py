"""Tests for access token verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from nanobio.domain.common.value_objects import UserId
from nanobio.infrastructure.identity.identity_provider import TokenIdentityProvider
from nanobio.infrastructure.identity.token_service import TokenService

SECRET = "jwt-secret"


def _encode(**claims: Any) -> str:
    payload = {
        "sub": "user-1",
        "aud": "authenticated",
        "exp": datetime.now(UTC) + timedelta(minutes=5),
        **claims,
    }
    return jwt.encode(payload, SECRET, algorithm="HS256")


class TestTokenService:
    def test_valid_token(self) -> None:
        service = TokenService(SECRET, "authenticated")
        assert service.verify_access_token(_encode()) == UserId("user-1")

    def test_expired_token(self) -> None:
        service = TokenService(SECRET, "authenticated")
        token = _encode(exp=datetime.now(UTC) - timedelta(minutes=1))
        assert service.verify_access_token(token) is None

    def test_wrong_audience(self) -> None:
        service = TokenService(SECRET, "authenticated")
        assert service.verify_access_token(_encode(aud="anon")) is None

    def test_missing_subject(self) -> None:
        service = TokenService(SECRET, "authenticated")
        assert service.verify_access_token(_encode(sub="")) is None

    def test_unconfigured_secret_rejects_everything(self) -> None:
        assert TokenService("", "authenticated").verify_access_token(_encode()) is None


class TestTokenIdentityProvider:
    def test_current_user(self) -> None:
        provider = TokenIdentityProvider(TokenService(SECRET, "authenticated"), _encode())
        assert provider.current_user() == UserId("user-1")

    def test_no_token(self) -> None:
        provider = TokenIdentityProvider(TokenService(SECRET, "authenticated"), None)
        assert provider.current_user() is None
