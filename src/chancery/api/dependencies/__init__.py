"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.chancery.api.dependencies.auth import (
    ApproverProfile,
    ApproverSession,
    AuthenticatedSession,
    CurrentUser,
    SessionDep,
    get_approver_profile,
    get_current_user,
    get_session_context,
    require_authenticated,
    require_page,
)

# Backend
from src.chancery.api.dependencies.backend import (
    AuthProviderDep,
    StoreDep,
    get_auth_provider,
    get_document_store,
    reset_backend,
)

# Repositories
from src.chancery.api.dependencies.repositories import (
    InviteRepo,
    ProfileRepo,
    ReconciliationRepo,
    get_invite_repository,
    get_profile_repository,
    get_reconciliation_repository,
)

# Services
from src.chancery.api.dependencies.services import (
    ApprovalServiceDep,
    AuthActionServiceDep,
    InviteServiceDep,
    RegistrationServiceDep,
    get_approval_service,
    get_auth_action_service,
    get_invite_service,
    get_registration_service,
)

__all__ = [
    # Auth
    "ApproverProfile",
    "ApproverSession",
    "AuthenticatedSession",
    "CurrentUser",
    "get_approver_profile",
    "get_current_user",
    "SessionDep",
    "get_session_context",
    "require_authenticated",
    "require_page",
    # Backend
    "AuthProviderDep",
    "StoreDep",
    "get_auth_provider",
    "get_document_store",
    "reset_backend",
    # Repositories
    "InviteRepo",
    "ProfileRepo",
    "ReconciliationRepo",
    "get_invite_repository",
    "get_profile_repository",
    "get_reconciliation_repository",
    # Services
    "ApprovalServiceDep",
    "AuthActionServiceDep",
    "InviteServiceDep",
    "RegistrationServiceDep",
    "get_approval_service",
    "get_auth_action_service",
    "get_invite_service",
    "get_registration_service",
]
