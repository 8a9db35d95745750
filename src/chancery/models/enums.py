"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Dashboard role stored on a user profile."""

    CHANCERY_OFFICE = "chancery_office"
    PARISH_SECRETARY = "parish_secretary"
    MUSEUM_RESEARCHER = "museum_researcher"


class Diocese(str, Enum):
    TAGBILARAN = "tagbilaran"
    TALIBON = "talibon"


class ProfileStatus(str, Enum):
    """Approval status of a user profile."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RegistrationSource(str, Enum):
    SELF = "self"
    INVITE = "invite"


class InviteStatus(str, Enum):
    """Parish invite status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REVOKED = "revoked"
    EXPIRED = "expired"


class ProviderErrorCode(str, Enum):
    """Failure classification returned by the auth provider."""

    EMAIL_ALREADY_IN_USE = "email_already_in_use"
    WEAK_PASSWORD = "weak_password"
    INVALID_EMAIL = "invalid_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_DISABLED = "user_disabled"
    UNKNOWN = "unknown"


class ActionCodeErrorKind(str, Enum):
    """Why an email action code was refused."""

    EXPIRED = "expired"
    INVALID = "invalid"
    DISABLED = "disabled"
    UNKNOWN = "unknown"


class ActionMode(str, Enum):
    VERIFY_EMAIL = "verifyEmail"
    RESET_PASSWORD = "resetPassword"


class PageCategory(str, Enum):
    """Groups of dashboard pages that share an access rule."""

    DASHBOARD = "dashboard"
    CHURCHES = "churches"
    ANNOUNCEMENTS = "announcements"
    REPORTS = "reports"
    USER_MANAGEMENT = "user_management"
    DIOCESE_DASHBOARD = "diocese_dashboard"
    PARISH_DASHBOARD = "parish_dashboard"
    HERITAGE = "heritage"
    MUSEUM_STAFF_MANAGEMENT = "museum_staff_management"
    APPROVALS = "approvals"


class AccessOutcome(str, Enum):
    """Approval Gate result for one page render."""

    UNAUTHENTICATED = "unauthenticated"
    ACCESS_RESTRICTED = "access_restricted"
    AWAITING_APPROVAL = "awaiting_approval"
    APPROVED = "approved"


class SagaStepStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class ParishPosition(str, Enum):
    """Parish staff position; both register with the parish_secretary role."""

    PARISH_SECRETARY = "parish_secretary"
    PARISH_PRIEST = "parish_priest"
