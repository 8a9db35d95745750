"""Repository dependencies."""

from typing import Annotated

from fastapi import Depends

from src.chancery.api.dependencies.backend import StoreDep
from src.chancery.repositories import (
    InvitationRepository,
    ReconciliationRepository,
    UserProfileRepository,
)


def get_invite_repository(store: StoreDep) -> InvitationRepository:
    return InvitationRepository(store)


def get_profile_repository(store: StoreDep) -> UserProfileRepository:
    return UserProfileRepository(store)


def get_reconciliation_repository(store: StoreDep) -> ReconciliationRepository:
    return ReconciliationRepository(store)


InviteRepo = Annotated[InvitationRepository, Depends(get_invite_repository)]
ProfileRepo = Annotated[UserProfileRepository, Depends(get_profile_repository)]
ReconciliationRepo = Annotated[ReconciliationRepository, Depends(get_reconciliation_repository)]
