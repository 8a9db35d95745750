"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserProfileFactory, InvitationFactory
"""

from tests.factories.base import BaseFactory, generate_uid, utc_now
from tests.factories.invitation import InvitationFactory
from tests.factories.profile import DEFAULT_TEST_PASSWORD, UserProfileFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uid",
    "utc_now",
    # Documents
    "DEFAULT_TEST_PASSWORD",
    "InvitationFactory",
    "UserProfileFactory",
]
