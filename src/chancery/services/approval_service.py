"""Approval of pending registrations."""

from src.chancery.backend.store import PreconditionFailedError
from src.chancery.core.exceptions import (
    FormValidationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
)
from src.chancery.core.logging import get_logger
from src.chancery.models.base import utc_now
from src.chancery.models.enums import ProfileStatus, UserRole
from src.chancery.models.profile import UserProfile
from src.chancery.repositories import UserProfileRepository

logger = get_logger(__name__)

ALREADY_PROCESSED = "This registration has already been processed."
REGISTRATION_NOT_FOUND = "Registration not found."

# Which pending roles each approver role may decide on
APPROVABLE_ROLES: dict[UserRole, frozenset[UserRole]] = {
    UserRole.CHANCERY_OFFICE: frozenset({UserRole.CHANCERY_OFFICE}),
    UserRole.MUSEUM_RESEARCHER: frozenset({UserRole.MUSEUM_RESEARCHER}),
    UserRole.PARISH_SECRETARY: frozenset({UserRole.PARISH_SECRETARY}),
}


def parish_key(profile: UserProfile) -> str | None:
    """Identify a parish by id, falling back to its name when no id was recorded."""
    if profile.parish_id:
        return profile.parish_id
    if profile.parish and profile.parish.strip():
        return profile.parish.strip().lower()
    return None


def same_parish(approver: UserProfile, target: UserProfile) -> bool:
    key = parish_key(approver)
    return key is not None and target.diocese == approver.diocese and parish_key(target) == key


class ApprovalService:
    """Service for approving or rejecting pending profiles."""

    def __init__(self, profile_repo: UserProfileRepository):
        self.profile_repo = profile_repo

    @staticmethod
    def _require_approver(approver: UserProfile) -> frozenset[UserRole]:
        roles = APPROVABLE_ROLES.get(approver.role, frozenset())
        if not approver.is_approved or not roles:
            raise PermissionDeniedError("You are not allowed to review registrations.")
        return roles

    async def list_pending(self, approver: UserProfile) -> list[UserProfile]:
        """Pending profiles this approver may decide on, oldest first."""
        roles = self._require_approver(approver)
        # Chancery and parish approvals are scoped to the approver's diocese
        diocese = approver.diocese if approver.role != UserRole.MUSEUM_RESEARCHER else None
        pending: list[UserProfile] = []
        for role in sorted(roles, key=lambda r: r.value):
            pending.extend(await self.profile_repo.list_pending(role, diocese))
        if approver.role == UserRole.PARISH_SECRETARY:
            pending = [profile for profile in pending if same_parish(approver, profile)]
        return sorted(pending, key=lambda profile: profile.created_at)

    async def _load_target(self, approver: UserProfile, uid: str, verb: str) -> UserProfile:
        roles = self._require_approver(approver)
        target = await self.profile_repo.get_by_id(uid)
        if target is None:
            raise NotFoundError(REGISTRATION_NOT_FOUND)
        if target.status != ProfileStatus.PENDING:
            raise InvalidStateError(ALREADY_PROCESSED)
        if target.role not in roles:
            raise PermissionDeniedError(f"You cannot {verb} this type of registration.")
        if approver.role == UserRole.CHANCERY_OFFICE and target.diocese != approver.diocese:
            raise PermissionDeniedError(f"You can only {verb} registrations for your own diocese.")
        if approver.role == UserRole.PARISH_SECRETARY and not same_parish(approver, target):
            raise PermissionDeniedError(f"You can only {verb} staff for your own parish.")
        return target

    async def approve(
        self, approver: UserProfile, uid: str, notes: str | None = None
    ) -> UserProfile:
        target = await self._load_target(approver, uid, "approve")
        try:
            approved = await self.profile_repo.set_status(
                target.uid,
                ProfileStatus.APPROVED,
                {
                    "approved_at": utc_now().isoformat(),
                    "approved_by": approver.uid,
                    "approval_notes": notes,
                },
            )
        except PreconditionFailedError as e:
            raise InvalidStateError(ALREADY_PROCESSED) from e

        logger.info(
            "Registration approved",
            target_uid=target.uid,
            target_role=target.role.value,
            approved_by=approver.uid,
        )
        return approved

    async def reject(self, approver: UserProfile, uid: str, reason: str) -> UserProfile:
        if not reason.strip():
            raise FormValidationError("Please provide a reason for rejection.")
        target = await self._load_target(approver, uid, "reject")
        try:
            rejected = await self.profile_repo.set_status(
                target.uid,
                ProfileStatus.REJECTED,
                {
                    "rejected_at": utc_now().isoformat(),
                    "rejected_by": approver.uid,
                    "rejection_reason": reason.strip(),
                },
            )
        except PreconditionFailedError as e:
            raise InvalidStateError(ALREADY_PROCESSED) from e

        logger.info(
            "Registration rejected",
            target_uid=target.uid,
            target_role=target.role.value,
            rejected_by=approver.uid,
        )
        return rejected
