from datetime import datetime

from pydantic import BaseModel

from src.chancery.models.enums import (
    Diocese,
    ParishPosition,
    ProfileStatus,
    RegistrationSource,
    UserRole,
)


class ProfileRead(BaseModel):
    """Profile as shown to its owner and to approvers."""

    uid: str
    email: str
    name: str
    role: UserRole
    diocese: Diocese | None = None
    parish: str | None = None
    position: ParishPosition | None = None
    status: ProfileStatus
    registration_source: RegistrationSource
    created_at: datetime
    approved_at: datetime | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None

    model_config = {"from_attributes": True}


class ProfileListResponse(BaseModel):
    profiles: list[ProfileRead]
    total: int


class ApproveRequest(BaseModel):
    notes: str | None = None


class RejectRequest(BaseModel):
    reason: str = ""
