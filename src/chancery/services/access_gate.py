"""Approval Gate - decides what a signed-in user may see.

A single policy table maps ``(role, status)`` to the page categories that
combination may open. ``evaluate_access`` is a pure function of the session
context and the requested page; callers load a fresh profile for every
request, nothing here caches a decision.
"""

from dataclasses import dataclass, field

from src.chancery.core.config import get_settings
from src.chancery.core.navigation import Navigation
from src.chancery.models.enums import (
    AccessOutcome,
    Diocese,
    PageCategory,
    ProfileStatus,
    UserRole,
)
from src.chancery.models.session import SessionContext

_CHANCERY_PAGES = frozenset(
    {
        PageCategory.DASHBOARD,
        PageCategory.CHURCHES,
        PageCategory.ANNOUNCEMENTS,
        PageCategory.REPORTS,
        PageCategory.USER_MANAGEMENT,
        PageCategory.DIOCESE_DASHBOARD,
        PageCategory.HERITAGE,
        PageCategory.APPROVALS,
    }
)
_PARISH_PAGES = frozenset(
    {
        PageCategory.DASHBOARD,
        PageCategory.CHURCHES,
        PageCategory.PARISH_DASHBOARD,
        PageCategory.APPROVALS,
    }
)
_MUSEUM_PAGES = frozenset(
    {
        PageCategory.DASHBOARD,
        PageCategory.CHURCHES,
        PageCategory.HERITAGE,
        PageCategory.MUSEUM_STAFF_MANAGEMENT,
        PageCategory.APPROVALS,
    }
)
_NONE: frozenset[PageCategory] = frozenset()

ACCESS_POLICY: dict[tuple[UserRole, ProfileStatus], frozenset[PageCategory]] = {
    (UserRole.CHANCERY_OFFICE, ProfileStatus.APPROVED): _CHANCERY_PAGES,
    (UserRole.CHANCERY_OFFICE, ProfileStatus.PENDING): _NONE,
    (UserRole.CHANCERY_OFFICE, ProfileStatus.REJECTED): _NONE,
    (UserRole.PARISH_SECRETARY, ProfileStatus.APPROVED): _PARISH_PAGES,
    (UserRole.PARISH_SECRETARY, ProfileStatus.PENDING): _NONE,
    (UserRole.PARISH_SECRETARY, ProfileStatus.REJECTED): _NONE,
    (UserRole.MUSEUM_RESEARCHER, ProfileStatus.APPROVED): _MUSEUM_PAGES,
    (UserRole.MUSEUM_RESEARCHER, ProfileStatus.PENDING): _NONE,
    (UserRole.MUSEUM_RESEARCHER, ProfileStatus.REJECTED): _NONE,
}


def required_roles_for(page: PageCategory) -> frozenset[UserRole]:
    """Roles that can open the page once approved."""
    return frozenset(
        role
        for (role, status), pages in ACCESS_POLICY.items()
        if status == ProfileStatus.APPROVED and page in pages
    )


PAGE_REQUIRED_ROLES: dict[PageCategory, frozenset[UserRole]] = {
    page: required_roles_for(page) for page in PageCategory
}

# Roles whose records belong to one diocese; museum researchers read across both
DIOCESE_BOUND_ROLES = frozenset({UserRole.CHANCERY_OFFICE, UserRole.PARISH_SECRETARY})

ROLE_AUDIENCE = {
    UserRole.CHANCERY_OFFICE: "Chancery Office users",
    UserRole.PARISH_SECRETARY: "Parish Secretaries",
    UserRole.MUSEUM_RESEARCHER: "Museum Researchers",
}

REVIEWER_LABELS = {
    UserRole.PARISH_SECRETARY: "current parish user for your parish",
    UserRole.MUSEUM_RESEARCHER: "current museum researcher",
    UserRole.CHANCERY_OFFICE: "current chancellor",
}

DIOCESE_NAMES = {
    Diocese.TAGBILARAN: "Diocese of Tagbilaran",
    Diocese.TALIBON: "Diocese of Talibon",
}

DIOCESE_CONTACT_EMAILS = {
    Diocese.TAGBILARAN: "dioceseoftagbilaran1941@gmail.com",
    Diocese.TALIBON: "talibonchancery@gmail.com",
}

GENERIC_CONTACT_LINE = "Contact your diocese's chancery office for assistance."
DIOCESE_MISMATCH_MESSAGE = (
    "You do not have access to this diocese's records. "
    "Please contact your administrator if you need access."
)
REJECTED_MESSAGE = (
    "Your registration was not approved. Please contact your administrator if you need access."
)
NO_PROFILE_MESSAGE = (
    "Your account has no dashboard profile. Please contact your administrator if you need access."
)


@dataclass(frozen=True)
class PendingApprovalInfo:
    """Role-aware content of the "Awaiting Approval" card."""

    role: UserRole
    diocese_name: str
    reviewer_label: str
    submission_text: str
    contact_email: str | None
    contact_line: str
    greeting: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    page: PageCategory
    message: str | None = None
    navigation: Navigation | None = None
    pending: PendingApprovalInfo | None = None
    required_roles: frozenset[UserRole] = field(default_factory=frozenset)

    @property
    def allowed(self) -> bool:
        return self.outcome == AccessOutcome.APPROVED


def restricted_message(roles: frozenset[UserRole]) -> str:
    audience = " or ".join(ROLE_AUDIENCE[role] for role in UserRole if role in roles)
    return (
        f"Only {audience or 'authorized users'} can access this page. "
        "Please contact your administrator if you need access."
    )


def pending_approval_info(
    role: UserRole,
    diocese: Diocese | None = None,
    parish: str | None = None,
    name: str | None = None,
    email: str | None = None,
) -> PendingApprovalInfo:
    """Build the pending-approval view for a freshly registered user."""
    diocese_name = DIOCESE_NAMES.get(diocese, "your diocese") if diocese else "your diocese"

    if role == UserRole.PARISH_SECRETARY:
        submission = (
            f"Your registration for {parish or 'your parish'} in the {diocese_name} "
            "has been submitted successfully."
        )
    elif role == UserRole.MUSEUM_RESEARCHER:
        submission = "Your registration as a museum researcher has been submitted successfully."
    else:
        submission = (
            f"Your registration for the {diocese_name} chancery office "
            "has been submitted successfully."
        )

    contact_email = DIOCESE_CONTACT_EMAILS.get(diocese) if diocese else None
    return PendingApprovalInfo(
        role=role,
        diocese_name=diocese_name,
        reviewer_label=REVIEWER_LABELS[role],
        submission_text=submission,
        contact_email=contact_email,
        contact_line=contact_email or GENERIC_CONTACT_LINE,
        greeting=f"Hello, {name}!" if name else None,
        email=email or None,
    )


def evaluate_access(
    session: SessionContext,
    page: PageCategory,
    target_diocese: Diocese | None = None,
    required_roles: frozenset[UserRole] | None = None,
) -> AccessDecision:
    """Decide how a page render resolves for this session.

    Order matters: a wrong role is restricted even while pending, so a
    pending parish secretary on a chancery page never sees the
    pending-approval card.
    """
    roles = required_roles if required_roles is not None else PAGE_REQUIRED_ROLES[page]

    if session.user is None:
        return AccessDecision(
            outcome=AccessOutcome.UNAUTHENTICATED,
            page=page,
            navigation=Navigation(route=get_settings().login_route),
            required_roles=roles,
        )

    profile = session.profile
    if profile is None:
        return AccessDecision(
            outcome=AccessOutcome.ACCESS_RESTRICTED,
            page=page,
            message=NO_PROFILE_MESSAGE,
            required_roles=roles,
        )

    if profile.role not in roles:
        return AccessDecision(
            outcome=AccessOutcome.ACCESS_RESTRICTED,
            page=page,
            message=restricted_message(roles),
            required_roles=roles,
        )

    if profile.role in DIOCESE_BOUND_ROLES:
        scoped_to = target_diocese
        if scoped_to is None and page == PageCategory.DIOCESE_DASHBOARD:
            scoped_to = profile.diocese
        if scoped_to is not None and profile.diocese != scoped_to:
            return AccessDecision(
                outcome=AccessOutcome.ACCESS_RESTRICTED,
                page=page,
                message=DIOCESE_MISMATCH_MESSAGE,
                required_roles=roles,
            )

    if profile.status == ProfileStatus.REJECTED:
        return AccessDecision(
            outcome=AccessOutcome.ACCESS_RESTRICTED,
            page=page,
            message=REJECTED_MESSAGE,
            required_roles=roles,
        )

    if page in ACCESS_POLICY.get((profile.role, profile.status), _NONE):
        return AccessDecision(outcome=AccessOutcome.APPROVED, page=page, required_roles=roles)

    if profile.status == ProfileStatus.PENDING:
        return AccessDecision(
            outcome=AccessOutcome.AWAITING_APPROVAL,
            page=page,
            message="Awaiting Approval",
            pending=pending_approval_info(
                profile.role, profile.diocese, profile.parish, profile.name, profile.email
            ),
            required_roles=roles,
        )

    # Approved, role listed for the page via override, but not in the table entry
    return AccessDecision(
        outcome=AccessOutcome.ACCESS_RESTRICTED,
        page=page,
        message=restricted_message(roles),
        required_roles=roles,
    )
