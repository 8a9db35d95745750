"""Tests for security-critical functionality."""

from datetime import timedelta

import pytest
from jose import jwt

from src.chancery.core.security import (
    create_session_token,
    decode_token,
    generate_invite_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.chancery.core.security.crypto import INVITE_TOKEN_ALPHABET

pytestmark = pytest.mark.unit


class TestPasswordHashing:
    def test_round_trip(self):
        hashed = hash_password("Abcdef12")
        assert hashed != "Abcdef12"
        assert verify_password("Abcdef12", hashed)

    def test_wrong_password(self):
        assert not verify_password("Abcdef13", hash_password("Abcdef12"))

    def test_malformed_hash(self):
        assert not verify_password("Abcdef12", "not-a-hash")


class TestSessionTokens:
    def test_decode_valid_token(self):
        payload = decode_token(create_session_token("uid-1"))
        assert payload is not None
        assert payload["sub"] == "uid-1"
        assert payload["type"] == "session"

    def test_expired_token(self):
        token = create_session_token("uid-1", expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None

    def test_foreign_signature(self):
        token = jwt.encode(
            {"sub": "uid-1", "type": "session"}, "some-other-secret-key-0123456789abcdef"
        )
        assert decode_token(token) is None

    def test_garbage(self):
        assert decode_token("not-a-jwt") is None


class TestInviteTokens:
    def test_length_and_alphabet(self):
        token = generate_invite_token()
        assert len(token) == 8
        assert set(token) <= set(INVITE_TOKEN_ALPHABET)

    def test_ambiguous_characters_excluded(self):
        assert not set("0O1I") & set(INVITE_TOKEN_ALPHABET)

    def test_tokens_differ(self):
        assert len({generate_invite_token() for _ in range(20)}) > 1


def test_hash_token_is_stable_sha256():
    assert hash_token("abc") == hash_token("abc")
    assert len(hash_token("abc")) == 64
