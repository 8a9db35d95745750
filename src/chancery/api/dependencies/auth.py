"""Session and access dependencies.

Every request builds its own SessionContext: the bearer token is resolved by
the auth provider and the profile is re-read from the store. Nothing is
cached between requests.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.chancery.api.dependencies.backend import AuthProviderDep
from src.chancery.api.dependencies.repositories import ProfileRepo
from src.chancery.core.logging import bind_user_context
from src.chancery.models.enums import AccessOutcome, PageCategory
from src.chancery.models.profile import UserProfile
from src.chancery.models.session import SessionContext, SessionUser
from src.chancery.services.access_gate import AccessDecision, evaluate_access


async def get_session_context(
    auth: AuthProviderDep,
    profile_repo: ProfileRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> SessionContext:
    """Resolve the caller. A missing or invalid token yields an anonymous session."""
    if not authorization or not authorization.startswith("Bearer "):
        return SessionContext.anonymous()

    user = await auth.resolve_session(authorization[7:])
    if user is None:
        return SessionContext.anonymous()

    profile = await profile_repo.get_by_id(user.uid)
    bind_user_context(user.uid, role=profile.role.value if profile else None, email=user.email)
    return SessionContext(user=user, profile=profile)


SessionDep = Annotated[SessionContext, Depends(get_session_context)]


async def require_authenticated(session: SessionDep) -> SessionContext:
    if session.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


AuthenticatedSession = Annotated[SessionContext, Depends(require_authenticated)]


def raise_for_decision(decision: AccessDecision) -> None:
    """Map a non-approved gate decision onto an HTTP error."""
    if decision.outcome == AccessOutcome.UNAUTHENTICATED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if decision.outcome != AccessOutcome.APPROVED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=decision.message or "Access Restricted",
        )


def require_page(page: PageCategory) -> Callable[[SessionContext], Awaitable[SessionContext]]:
    """Dependency factory: the caller must be approved for ``page``."""

    async def _check(session: SessionDep) -> SessionContext:
        raise_for_decision(evaluate_access(session, page))
        return session

    return _check


ApproverSession = Annotated[SessionContext, Depends(require_page(PageCategory.APPROVALS))]


async def get_current_user(session: AuthenticatedSession) -> SessionUser:
    if session.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return session.user


CurrentUser = Annotated[SessionUser, Depends(get_current_user)]


async def get_approver_profile(session: ApproverSession) -> UserProfile:
    """Profile of a caller the gate approved for the approvals page."""
    if session.profile is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access Restricted")
    return session.profile


ApproverProfile = Annotated[UserProfile, Depends(get_approver_profile)]
