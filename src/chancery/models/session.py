"""Explicit per-request session context."""

from dataclasses import dataclass

from src.chancery.models.profile import UserProfile


@dataclass(frozen=True)
class SessionUser:
    """The auth provider's view of the signed-in user."""

    uid: str
    email: str
    email_verified: bool = False


@dataclass(frozen=True)
class SessionContext:
    """Current user and profile, loaded fresh for every request.

    Passed explicitly into the Approval Gate and services instead of
    being read from ambient state.
    """

    user: SessionUser | None = None
    profile: UserProfile | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()
