"""Parish invite API endpoints."""

from fastapi import APIRouter, status

from src.chancery.api.dependencies import AuthenticatedSession, InviteServiceDep
from src.chancery.schemas.invite import (
    InviteCreateRequest,
    InviteCreateResponse,
    InviteListResponse,
    InvitePublicRead,
    InviteRead,
)

router = APIRouter(prefix="/invites", tags=["invites"])


# =============================================================================
# Chancery Endpoints (approved chancery office, own diocese)
# =============================================================================


@router.post(
    "",
    response_model=InviteCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invite",
    description="Invite a parish secretary to the caller's diocese.",
)
async def create_invite(
    request: InviteCreateRequest,
    session: AuthenticatedSession,
    invite_service: InviteServiceDep,
) -> InviteCreateResponse:
    invite, token = await invite_service.create_invite(
        session,
        email=request.email,
        parish_name=request.parish_name,
        parish_id=request.parish_id,
    )
    return InviteCreateResponse(
        id=invite.id,
        email=invite.email,
        parish_name=invite.parish_name,
        diocese=invite.diocese,
        token=token,
    )


@router.get(
    "",
    response_model=InviteListResponse,
    summary="List pending invites",
)
async def list_invites(
    session: AuthenticatedSession,
    invite_service: InviteServiceDep,
) -> InviteListResponse:
    invites = await invite_service.list_pending(session)
    return InviteListResponse(
        invites=[InviteRead.model_validate(invite) for invite in invites],
        total=len(invites),
    )


@router.delete(
    "/{invite_id}",
    response_model=InviteRead,
    summary="Revoke invite",
)
async def revoke_invite(
    invite_id: str,
    session: AuthenticatedSession,
    invite_service: InviteServiceDep,
) -> InviteRead:
    invite = await invite_service.revoke_invite(session, invite_id)
    return InviteRead.model_validate(invite)


# =============================================================================
# Public Endpoints (invitee, before registering)
# =============================================================================


@router.get(
    "/{invite_id}",
    response_model=InvitePublicRead,
    summary="Resolve invite",
    responses={
        404: {"description": "Invite not found"},
        409: {"description": "Invite is not valid"},
    },
)
async def get_invite(invite_id: str, invite_service: InviteServiceDep) -> InvitePublicRead:
    """Email, parish and diocese for the registration form. The code is not returned."""
    invite = await invite_service.resolve(invite_id)
    return InvitePublicRead.model_validate(invite)
