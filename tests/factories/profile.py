"""User profile factories for test data generation."""

from polyfactory import Use

from src.chancery.models import (
    Diocese,
    ProfileStatus,
    RegistrationSource,
    UserProfile,
    UserRole,
)
from tests.factories.base import BaseFactory, generate_uid, utc_now

# Default test password: scores 80 ("Good") on the strength meter
DEFAULT_TEST_PASSWORD = "Abcdef12"


class UserProfileFactory(BaseFactory[UserProfile]):
    """Factory for generating UserProfile test data (pending chancery office by default)."""

    __model__ = UserProfile

    uid = Use(generate_uid)
    email = Use(lambda: f"user_{generate_uid()[-8:]}@example.com")
    name = "Test User"
    role = UserRole.CHANCERY_OFFICE
    diocese = Diocese.TAGBILARAN
    parish = None
    parish_id = None
    position = None
    phone_number = None
    status = ProfileStatus.PENDING
    registration_source = RegistrationSource.SELF
    created_at = Use(utc_now)
    approved_at = None
    approved_by = None
    approval_notes = None
    rejected_at = None
    rejected_by = None
    rejection_reason = None

    @classmethod
    def approved(cls, **kwargs):
        """Create an approved profile."""
        return cls.build(status=ProfileStatus.APPROVED, approved_at=utc_now(), **kwargs)

    @classmethod
    def rejected(cls, **kwargs):
        """Create a rejected profile."""
        return cls.build(
            status=ProfileStatus.REJECTED,
            rejected_at=utc_now(),
            rejection_reason=kwargs.pop("rejection_reason", "Not staff"),
            **kwargs,
        )

    @classmethod
    def parish_secretary(cls, **kwargs):
        """Create a parish secretary profile."""
        return cls.build(
            role=UserRole.PARISH_SECRETARY,
            parish=kwargs.pop("parish", "St. Joseph Cathedral Parish"),
            **kwargs,
        )

    @classmethod
    def museum_researcher(cls, **kwargs):
        """Create a museum researcher profile (no diocese)."""
        return cls.build(role=UserRole.MUSEUM_RESEARCHER, diocese=None, **kwargs)
