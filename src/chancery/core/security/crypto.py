"""Cryptographic utilities - password hashing, session tokens, and action codes."""

import secrets
from datetime import UTC, datetime, timedelta
from hashlib import sha256
from typing import Any

import argon2
from jose import JWTError, jwt

from src.chancery.core.config import get_settings

SESSION_TOKEN_TYPE = "session"

# Unambiguous characters only (no 0/O, 1/I)
INVITE_TOKEN_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITE_TOKEN_LENGTH = 8


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def generate_action_code() -> str:
    """One-time code embedded in email action links."""
    return secrets.token_urlsafe(32)


def generate_invite_token(length: int = INVITE_TOKEN_LENGTH) -> str:
    """Short code the invitee types in; shown to the chancery when the invite is created."""
    return "".join(secrets.choice(INVITE_TOKEN_ALPHABET) for _ in range(length))


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _password_hasher.verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def create_session_token(uid: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed session token for the given auth uid."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_expire_minutes)

    to_encode = {
        "sub": uid,
        "exp": datetime.now(UTC) + expires_delta,
        "type": SESSION_TOKEN_TYPE,
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a session token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
