"""
Unit tests for backend/auth.py

Tokens are signed locally with PyJWT using the secret from patched
settings, so no account service is involved.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import jwt
import pytest
from fastapi import HTTPException

from backend.auth import (
    get_current_user,
    validate_api_key,
    validate_jwt,
)
from backend.settings import Settings

SECRET = "unit-test-secret"


@pytest.fixture(autouse=True)
def auth_settings():
    settings = Settings(
        _env_file=None,
        environment="test",
        jwt_secret=SECRET,
        api_keys="sk_test_abc,sk_svc_def",
    )
    with patch("backend.auth.get_settings", return_value=settings):
        yield settings


def bearer(claims: dict, secret: str = SECRET) -> str:
    return "Bearer " + jwt.encode(claims, secret, algorithm="HS256")


def future(minutes: int = 5) -> datetime:
    return datetime.now(timezone.utc) + timedelta(minutes=minutes)


@pytest.mark.unit
class TestValidateJwt:
    def test_user_id_claim(self):
        assert validate_jwt(bearer({"userId": "user-1", "exp": future()})) == "user-1"

    def test_falls_back_to_sub(self):
        assert validate_jwt(bearer({"sub": "user-2", "exp": future()})) == "user-2"

    def test_audience_not_verified(self):
        token = bearer({"sub": "user-3", "aud": "mobile", "exp": future()})
        assert validate_jwt(token) == "user-3"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(bearer({"sub": "user-1", "exp": future(-5)}))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token expired"

    def test_wrong_secret(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(bearer({"sub": "user-1"}, secret="someone-else"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail.startswith("Invalid token")

    def test_missing_user_id(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(bearer({"role": "member", "exp": future()}))

        assert exc_info.value.detail == "Token missing user ID"

    def test_requires_bearer_scheme(self):
        token = jwt.encode({"sub": "user-1"}, SECRET, algorithm="HS256")

        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(f"Token {token}")

        assert exc_info.value.detail == "Invalid authorization header format"


@pytest.mark.unit
class TestValidateApiKey:
    def test_key_with_user(self):
        assert validate_api_key("sk_test_abc:user_12345") == "user_12345"

    def test_bare_key_is_admin(self):
        assert validate_api_key("sk_svc_def") == "admin"

    def test_unknown_key(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key("sk_nope:user_1")

        assert exc_info.value.detail == "Invalid API key"

    def test_no_keys_configured(self, auth_settings):
        with patch(
            "backend.auth.get_settings",
            return_value=auth_settings.model_copy(update={"api_keys": ""}),
        ):
            with pytest.raises(HTTPException) as exc_info:
                validate_api_key("sk_test_abc")

        assert exc_info.value.detail == "API key authentication not configured"


@pytest.mark.unit
class TestGetCurrentUser:
    def test_api_key_takes_precedence(self):
        user_id = asyncio.run(
            get_current_user(
                authorization=bearer({"sub": "jwt-user", "exp": future()}),
                x_api_key="sk_test_abc:key-user",
            )
        )

        assert user_id == "key-user"

    def test_jwt(self):
        user_id = asyncio.run(
            get_current_user(
                authorization=bearer({"sub": "jwt-user", "exp": future()}),
                x_api_key=None,
            )
        )

        assert user_id == "jwt-user"

    def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_current_user(authorization=None, x_api_key=None))

        assert exc_info.value.status_code == 401
