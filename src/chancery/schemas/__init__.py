"""Request and response schemas."""

from src.chancery.schemas.access import AccessDecisionRead, PendingApprovalRead
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
from src.chancery.schemas.invite import (
    InviteCreateRequest,
    InviteCreateResponse,
    InviteListResponse,
    InvitePublicRead,
    InviteRead,
)
from src.chancery.schemas.profile import (
    ApproveRequest,
    ProfileListResponse,
    ProfileRead,
    RejectRequest,
)

__all__ = [
    "AccessDecisionRead",
    "ApproveRequest",
    "AuthActionResponse",
    "ChanceryRegistrationRequest",
    "InviteCreateRequest",
    "InviteCreateResponse",
    "InviteListResponse",
    "InvitePublicRead",
    "InviteRead",
    "InviteRegistrationRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "MuseumRegistrationRequest",
    "ParishRegistrationRequest",
    "PasswordResetRequest",
    "PendingApprovalRead",
    "ProfileListResponse",
    "ProfileRead",
    "RegistrationResponse",
    "RejectRequest",
    "ResendVerificationRequest",
    "SessionResponse",
    "SessionUserRead",
]
