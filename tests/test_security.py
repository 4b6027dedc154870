"""
Tests for password hashing, access tokens and log redaction.
"""
from datetime import timedelta
from uuid import uuid4

import pytest

from webacademy.core.exceptions import InvalidTokenError
from webacademy.core.logging import redact_credentials
from webacademy.core.security import (
    create_access_token,
    decode_access_token,
    decode_token,
    generate_reset_token,
    get_password_hash,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)

    def test_missing_or_malformed_hash_is_a_mismatch(self):
        assert not verify_password("secret123", None)
        assert not verify_password("secret123", "not-a-bcrypt-hash")


class TestTokens:
    def test_access_token_round_trip(self):
        user_id = str(uuid4())
        token = create_access_token(user_id)
        assert decode_access_token(token) == user_id
        assert decode_token(token)["type"] == "access"

    def test_expired_token_is_rejected(self):
        token = create_access_token(str(uuid4()), expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_garbage_token_is_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.token")

    def test_reset_tokens_are_unique_hex(self):
        first, second = generate_reset_token(), generate_reset_token()
        assert first != second
        assert len(first) == 64
        int(first, 16)


class TestLogRedaction:
    def test_credentials_are_masked(self):
        event = redact_credentials(None, "info", {"event": "x", "password": "secret123", "token": "abc", "email": "a@b.c"})
        assert event["password"] == "***"
        assert event["token"] == "***"
        assert event["email"] == "a@b.c"
