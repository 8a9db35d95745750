"""Security utilities - crypto, form validators, and headers.

Re-exports all security-related functions for convenience.
"""

from src.chancery.core.security.crypto import (
    create_session_token,
    decode_token,
    generate_action_code,
    generate_invite_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.chancery.core.security.headers import SecurityHeadersMiddleware
from src.chancery.core.security.validators import (
    MIN_PASSWORD_SCORE,
    PasswordStrength,
    is_valid_email,
    password_strength,
    validate_role_fields,
    validate_registration_form,
)

__all__ = [
    # Crypto
    "create_session_token",
    "decode_token",
    "generate_action_code",
    "generate_invite_token",
    "hash_password",
    "hash_token",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
    # Validators
    "MIN_PASSWORD_SCORE",
    "PasswordStrength",
    "is_valid_email",
    "password_strength",
    "validate_role_fields",
    "validate_registration_form",
]
