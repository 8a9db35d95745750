"""Service dependencies."""

from typing import Annotated

from fastapi import Depends

from src.chancery.api.dependencies.backend import AuthProviderDep
from src.chancery.api.dependencies.repositories import (
    InviteRepo,
    ProfileRepo,
    ReconciliationRepo,
)
from src.chancery.services import (
    ApprovalService,
    AuthActionService,
    InviteService,
    ReconciliationService,
    RegistrationService,
)


def get_invite_service(invite_repo: InviteRepo) -> InviteService:
    return InviteService(invite_repo)


def get_reconciliation_service(reconciliation_repo: ReconciliationRepo) -> ReconciliationService:
    return ReconciliationService(reconciliation_repo)


def get_registration_service(
    auth: AuthProviderDep,
    profile_repo: ProfileRepo,
    invite_repo: InviteRepo,
    reconciliation_service: Annotated[ReconciliationService, Depends(get_reconciliation_service)],
) -> RegistrationService:
    return RegistrationService(auth, profile_repo, invite_repo, reconciliation_service)


def get_approval_service(profile_repo: ProfileRepo) -> ApprovalService:
    return ApprovalService(profile_repo)


def get_auth_action_service(auth: AuthProviderDep) -> AuthActionService:
    return AuthActionService(auth)


InviteServiceDep = Annotated[InviteService, Depends(get_invite_service)]
RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
ApprovalServiceDep = Annotated[ApprovalService, Depends(get_approval_service)]
AuthActionServiceDep = Annotated[AuthActionService, Depends(get_auth_action_service)]
