"""Authentication, registration and email-action endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status
from starlette.requests import Request

from src.chancery.api.dependencies import (
    AuthActionServiceDep,
    AuthenticatedSession,
    AuthProviderDep,
    CurrentUser,
    ProfileRepo,
    RegistrationServiceDep,
)
from src.chancery.core.logging import get_logger
from src.chancery.core.rate_limit import limiter
from src.chancery.schemas.auth import (
    AuthActionResponse,
    ChanceryRegistrationRequest,
    InviteRegistrationRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    MuseumRegistrationRequest,
    ParishRegistrationRequest,
    PasswordResetRequest,
    RegistrationResponse,
    ResendVerificationRequest,
    SessionResponse,
    SessionUserRead,
)
from src.chancery.schemas.profile import ProfileRead
from src.chancery.services.registration_service import RegistrationOutcome

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

RESEND_MESSAGE = "If an account exists for this email, a new verification link has been sent."
PASSWORD_RESET_MESSAGE = "If an account exists for this email, a password reset link has been sent."


def _registration_response(outcome: RegistrationOutcome) -> RegistrationResponse:
    return RegistrationResponse(
        uid=outcome.uid,
        status=outcome.status,
        message=outcome.message,
        navigation=outcome.navigation,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"description": "Invalid credentials or account disabled"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request,
    login_data: LoginRequest,
    auth: AuthProviderDep,
    profile_repo: ProfileRepo,
) -> LoginResponse:
    """Sign in and return a session token.

    Pending users can sign in; the Approval Gate decides what they see.
    """
    user = await auth.sign_in(login_data.email, login_data.password)
    token = await auth.issue_session(user.uid)
    profile = await profile_repo.get_by_id(user.uid)
    logger.info("User signed in", uid=user.uid)
    return LoginResponse(
        access_token=token,
        user=SessionUserRead(uid=user.uid, email=user.email, email_verified=user.email_verified),
        profile=ProfileRead.model_validate(profile) if profile else None,
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(session: AuthenticatedSession, user: CurrentUser) -> SessionResponse:
    """Current user and freshly loaded profile."""
    return SessionResponse(
        user=SessionUserRead(uid=user.uid, email=user.email, email_verified=user.email_verified),
        profile=ProfileRead.model_validate(session.profile) if session.profile else None,
    )


@router.post(
    "/register/museum",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a museum researcher (pending approval)",
)
@limiter.limit("3/minute")
async def register_museum(
    request: Request,
    data: MuseumRegistrationRequest,
    service: RegistrationServiceDep,
) -> RegistrationResponse:
    return _registration_response(await service.register_self(data.to_form()))


@router.post(
    "/register/chancery",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a chancery office user (pending approval)",
)
@limiter.limit("3/minute")
async def register_chancery(
    request: Request,
    data: ChanceryRegistrationRequest,
    service: RegistrationServiceDep,
) -> RegistrationResponse:
    return _registration_response(await service.register_self(data.to_form()))


@router.post(
    "/register/parish",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register parish staff (pending approval)",
)
@limiter.limit("3/minute")
async def register_parish(
    request: Request,
    data: ParishRegistrationRequest,
    service: RegistrationServiceDep,
) -> RegistrationResponse:
    return _registration_response(await service.register_self(data.to_form()))


@router.post(
    "/register/invite/{invite_id}",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as parish secretary with an invite",
    responses={
        404: {"description": "Invite not found"},
        409: {"description": "Invite already used or revoked"},
        422: {"description": "Incorrect invite code or invalid form"},
    },
)
@limiter.limit("5/minute")
async def register_with_invite(
    request: Request,
    invite_id: str,
    data: InviteRegistrationRequest,
    service: RegistrationServiceDep,
) -> RegistrationResponse:
    outcome = await service.register_with_invite(
        invite_id=invite_id,
        code=data.code,
        name=data.name,
        password=data.password,
        confirm_password=data.confirm_password,
    )
    return _registration_response(outcome)


@router.get("/action", response_model=AuthActionResponse)
async def handle_auth_action(
    service: AuthActionServiceDep,
    mode: str | None = None,
    oob_code: Annotated[str | None, Query(alias="oobCode")] = None,
    continue_url: Annotated[str | None, Query(alias="continueUrl")] = None,
) -> AuthActionResponse:
    """Resolve an email action link (verifyEmail / resetPassword).

    Always answers 200; the body's status tells the page what to render.
    """
    result = await service.handle(mode, oob_code, continue_url)
    return AuthActionResponse(
        status=result.status,
        message=result.message,
        email=result.email,
        navigation=result.navigation,
    )


@router.post("/resend-verification", response_model=MessageResponse)
@limiter.limit("3/minute")
async def resend_verification(
    request: Request,
    data: ResendVerificationRequest,
    service: AuthActionServiceDep,
) -> MessageResponse:
    """Request a fresh verification link.

    Same answer whether or not the email exists.
    """
    await service.resend_verification(data.email, data.continue_url)
    return MessageResponse(message=RESEND_MESSAGE)


@router.post("/password-reset", response_model=MessageResponse)
@limiter.limit("3/minute")
async def password_reset(
    request: Request,
    data: PasswordResetRequest,
    service: AuthActionServiceDep,
) -> MessageResponse:
    """Request a password reset link. Same answer whether or not the email exists."""
    await service.send_password_reset(data.email)
    return MessageResponse(message=PASSWORD_RESET_MESSAGE)
