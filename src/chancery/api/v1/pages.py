"""Approval Gate endpoints - what the dashboard renders for a page."""

from fastapi import APIRouter

from src.chancery.api.dependencies import SessionDep
from src.chancery.models.enums import Diocese, PageCategory, UserRole
from src.chancery.schemas.access import AccessDecisionRead, PendingApprovalRead
from src.chancery.services.access_gate import (
    AccessDecision,
    evaluate_access,
    pending_approval_info,
)

router = APIRouter(tags=["pages"])


def _decision_read(decision: AccessDecision, target_diocese: Diocese | None) -> AccessDecisionRead:
    return AccessDecisionRead(
        outcome=decision.outcome,
        page=decision.page,
        target_diocese=target_diocese,
        message=decision.message,
        navigation=decision.navigation,
        pending=PendingApprovalRead.model_validate(decision.pending) if decision.pending else None,
        required_roles=sorted(decision.required_roles, key=lambda role: role.value),
    )


@router.get("/pages/{page}", response_model=AccessDecisionRead)
async def check_page_access(
    page: PageCategory,
    session: SessionDep,
    diocese: Diocese | None = None,
) -> AccessDecisionRead:
    """Evaluate the Approval Gate for one page render.

    Always answers 200 with the outcome; the dashboard picks the view
    (login redirect, Access Restricted, Awaiting Approval, or content).
    """
    decision = evaluate_access(session, page, target_diocese=diocese)
    return _decision_read(decision, diocese)


@router.get("/pending-approval", response_model=PendingApprovalRead)
async def pending_approval(
    role: UserRole = UserRole.CHANCERY_OFFICE,
    diocese: Diocese | None = None,
    parish: str | None = None,
    name: str | None = None,
    email: str | None = None,
) -> PendingApprovalRead:
    """Content of the pending-approval page, from the state passed after registration."""
    info = pending_approval_info(role, diocese, parish, name, email)
    return PendingApprovalRead.model_validate(info)
