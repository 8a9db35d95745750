"""Review of pending registrations."""

from fastapi import APIRouter

from src.chancery.api.dependencies import ApprovalServiceDep, ApproverProfile
from src.chancery.schemas.profile import (
    ApproveRequest,
    ProfileListResponse,
    ProfileRead,
    RejectRequest,
)

router = APIRouter(prefix="/approvals", tags=["approvals"])


@router.get("/pending", response_model=ProfileListResponse)
async def list_pending(
    approver: ApproverProfile,
    approval_service: ApprovalServiceDep,
) -> ProfileListResponse:
    """Pending registrations the caller may decide on."""
    profiles = await approval_service.list_pending(approver)
    return ProfileListResponse(
        profiles=[ProfileRead.model_validate(profile) for profile in profiles],
        total=len(profiles),
    )


@router.post("/{uid}/approve", response_model=ProfileRead)
async def approve(
    uid: str,
    approver: ApproverProfile,
    approval_service: ApprovalServiceDep,
    request: ApproveRequest | None = None,
) -> ProfileRead:
    profile = await approval_service.approve(
        approver, uid, notes=request.notes if request else None
    )
    return ProfileRead.model_validate(profile)


@router.post("/{uid}/reject", response_model=ProfileRead)
async def reject(
    uid: str,
    request: RejectRequest,
    approver: ApproverProfile,
    approval_service: ApprovalServiceDep,
) -> ProfileRead:
    profile = await approval_service.reject(approver, uid, request.reason)
    return ProfileRead.model_validate(profile)
