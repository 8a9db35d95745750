"""Services - workflow logic over repositories and the auth provider."""

from src.chancery.services.access_gate import (
    ACCESS_POLICY,
    AccessDecision,
    PendingApprovalInfo,
    evaluate_access,
    pending_approval_info,
)
from src.chancery.services.approval_service import ApprovalService
from src.chancery.services.auth_action_service import (
    ActionStatus,
    AuthActionResult,
    AuthActionService,
)
from src.chancery.services.invite_service import InviteService
from src.chancery.services.reconciliation_service import ReconciliationService
from src.chancery.services.registration_service import (
    RegistrationOutcome,
    RegistrationService,
    SelfRegistration,
)

__all__ = [
    # Approval Gate
    "ACCESS_POLICY",
    "AccessDecision",
    "PendingApprovalInfo",
    "evaluate_access",
    "pending_approval_info",
    # Services
    "ApprovalService",
    "AuthActionService",
    "InviteService",
    "ReconciliationService",
    "RegistrationService",
    # Results
    "ActionStatus",
    "AuthActionResult",
    "RegistrationOutcome",
    "SelfRegistration",
]
