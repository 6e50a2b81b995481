"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from src.config import get_settings
from src.core.exceptions import AuthenticationError
from src.infrastructure.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_round_trip(self):
        hashed = hash_password("changeme123", rounds=4)

        assert hashed.startswith("$2")
        assert verify_password("changeme123", hashed)
        assert not verify_password("changeme124", hashed)

    def test_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_non_bcrypt_hash_is_rejected(self):
        assert verify_password("anything", "plaintext") is False


class TestTokens:
    def test_subject_is_user_id(self):
        assert decode_access_token(create_access_token(7, "viewer")) == 7

    def test_expired(self):
        token = create_access_token(7, "viewer", expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            decode_access_token(token)

    def test_wrong_signature(self):
        settings = get_settings()
        token = jwt.encode({"sub": "7"}, "other-secret", algorithm=settings.auth.algorithm)

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_non_numeric_subject(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "admin"}, settings.auth.secret_key, algorithm=settings.auth.algorithm
        )

        with pytest.raises(AuthenticationError, match="Invalid token subject"):
            decode_access_token(token)
