"""Tests for access token management."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from grantees.auth.jwt import create_access_token, verify_token
from grantees.config import get_settings


class TestAccessToken:
    def test_create_and_verify(self):
        token = create_access_token(user_id=1, email="builder@example.com")
        payload = verify_token(token, expected_type="access")
        assert payload["sub"] == "1"
        assert payload["email"] == "builder@example.com"
        assert payload["type"] == "access"
        assert payload["iss"] == "grantees.xyz"

    def test_hs256_by_default(self):
        token = create_access_token(user_id=1, email="builder@example.com")
        assert jwt.get_unverified_header(token)["alg"] == "HS256"

    def test_expiry_matches_settings(self):
        token = create_access_token(user_id=1, email="builder@example.com")
        payload = verify_token(token)
        assert payload["exp"] - payload["iat"] == get_settings().jwt_access_token_expire_minutes * 60

    def test_wrong_type_rejected(self):
        settings = get_settings()
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(minutes=5), "iss": settings.jwt_issuer, "type": "refresh"},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError, match="Expected token type"):
            verify_token(token, expected_type="access")

    def test_expired_rejected(self):
        settings = get_settings()
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "1", "iat": past, "exp": past + timedelta(minutes=5), "iss": settings.jwt_issuer, "type": "access"},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError, match="expired"):
            verify_token(token)

    def test_wrong_secret_rejected(self):
        settings = get_settings()
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(minutes=5), "iss": settings.jwt_issuer, "type": "access"},
            "some-other-secret-that-is-long-enough-0123456789",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)

    def test_wrong_issuer_rejected(self):
        settings = get_settings()
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(minutes=5), "iss": "elsewhere", "type": "access"},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)
