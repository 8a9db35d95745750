"""User profile document, keyed by the auth provider's uid."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.chancery.models.base import utc_now
from src.chancery.models.enums import (
    Diocese,
    ParishPosition,
    ProfileStatus,
    RegistrationSource,
    UserRole,
)


class UserProfile(BaseModel):
    uid: str
    email: str
    name: str
    role: UserRole
    diocese: Diocese | None = None
    parish: str | None = None
    parish_id: str | None = None
    position: ParishPosition | None = None
    phone_number: str | None = None
    status: ProfileStatus = ProfileStatus.PENDING
    registration_source: RegistrationSource = RegistrationSource.SELF
    created_at: datetime = Field(default_factory=utc_now)
    approved_at: datetime | None = None
    approved_by: str | None = None
    approval_notes: str | None = None
    rejected_at: datetime | None = None
    rejected_by: str | None = None
    rejection_reason: str | None = None

    @property
    def is_approved(self) -> bool:
        return self.status == ProfileStatus.APPROVED
