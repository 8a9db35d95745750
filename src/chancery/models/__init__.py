"""Domain models.

Re-exports all models and enums for convenience.
"""

from src.chancery.models.base import utc_now
from src.chancery.models.document import StoredDocument
from src.chancery.models.enums import (
    AccessOutcome,
    ActionCodeErrorKind,
    ActionMode,
    Diocese,
    InviteStatus,
    ParishPosition,
    PageCategory,
    ProfileStatus,
    ProviderErrorCode,
    RegistrationSource,
    SagaStepStatus,
    UserRole,
)
from src.chancery.models.invitation import Actor, Invitation
from src.chancery.models.profile import UserProfile
from src.chancery.models.reconciliation import InconsistentStateWarning, SagaStep
from src.chancery.models.session import SessionContext, SessionUser

__all__ = [
    # Enums
    "AccessOutcome",
    "ActionCodeErrorKind",
    "ActionMode",
    "Diocese",
    "InviteStatus",
    "ParishPosition",
    "PageCategory",
    "ProfileStatus",
    "ProviderErrorCode",
    "RegistrationSource",
    "SagaStepStatus",
    "UserRole",
    # Documents
    "Actor",
    "Invitation",
    "UserProfile",
    "StoredDocument",
    # Saga
    "InconsistentStateWarning",
    "SagaStep",
    # Session
    "SessionContext",
    "SessionUser",
    # Helpers
    "utc_now",
]
