"""Registration form validators.

Pure checks run before any call to the auth provider. Each returns the first
failing rule as a user-facing message, or None.
"""

import re
from dataclasses import dataclass
from typing import Final

from src.chancery.models.enums import Diocese, ParishPosition, UserRole

EMAIL_REGEX: Final[str] = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
_EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(EMAIL_REGEX)

MIN_PASSWORD_LENGTH: Final[int] = 8
MIN_PASSWORD_SCORE: Final[int] = 40  # 0-100 scale, 20 points per satisfied check
POINTS_PER_CHECK: Final[int] = 20


@dataclass(frozen=True)
class PasswordChecks:
    length: bool = False
    lowercase: bool = False
    uppercase: bool = False
    number: bool = False
    special: bool = False

    @property
    def satisfied(self) -> int:
        return sum((self.length, self.lowercase, self.uppercase, self.number, self.special))


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    label: str
    checks: PasswordChecks


def password_strength(password: str) -> PasswordStrength:
    """Score a password on the five character-class checks.

    Labels: Weak (0-2 checks), Fair (3), Good (4), Strong (5).
    An empty password scores 0 with no label.
    """
    if not password:
        return PasswordStrength(score=0, label="", checks=PasswordChecks())

    checks = PasswordChecks(
        length=len(password) >= MIN_PASSWORD_LENGTH,
        lowercase=re.search(r"[a-z]", password) is not None,
        uppercase=re.search(r"[A-Z]", password) is not None,
        number=re.search(r"[0-9]", password) is not None,
        special=re.search(r"[^A-Za-z0-9]", password) is not None,
    )
    satisfied = checks.satisfied
    score = satisfied * POINTS_PER_CHECK

    if satisfied <= 2:
        label = "Weak"
    elif satisfied == 3:
        label = "Fair"
    elif satisfied == 4:
        label = "Good"
    else:
        label = "Strong"
    return PasswordStrength(score=score, label=label, checks=checks)


def is_valid_email(email: str) -> bool:
    """Loose local@domain.tld check."""
    return _EMAIL_PATTERN.match(email) is not None


def validate_registration_form(
    name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> str | None:
    """Return the first validation failure for a registration form, or None.

    Rules are checked in a fixed order so the user always sees the same
    message for the same input.
    """
    if not name.strip():
        return "Full name is required"
    if not email.strip():
        return "Email is required"
    if not is_valid_email(email.strip()):
        return "Please enter a valid email address (e.g., name@example.com)"
    if not password:
        return "Password is required"
    if len(password) < MIN_PASSWORD_LENGTH:
        return "Password must be at least 8 characters"
    if password_strength(password).score < MIN_PASSWORD_SCORE:
        return "Please use a stronger password with uppercase, lowercase, and numbers"
    if password != confirm_password:
        return "Passwords do not match"
    return None


def validate_role_fields(
    role: UserRole,
    diocese: Diocese | None,
    parish: str | None = None,
    parish_id: str | None = None,
    position: ParishPosition | None = None,
) -> str | None:
    """Role-specific selections, checked before the credential fields."""
    if role in (UserRole.CHANCERY_OFFICE, UserRole.PARISH_SECRETARY) and diocese is None:
        return "Please select your diocese"
    if role == UserRole.PARISH_SECRETARY:
        if not (parish and parish.strip()) and not parish_id:
            return "Please select your parish"
        if position is None:
            return "Please select your position"
    return None
