"""Parish invitation document."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.chancery.models.base import utc_now
from src.chancery.models.enums import Diocese, InviteStatus


class Actor(BaseModel):
    """Audit stamp for who created or consumed a record."""

    uid: str
    email: str
    name: str | None = None


class Invitation(BaseModel):
    """Single-use invite granting one email the right to register as parish secretary."""

    id: str
    type: Literal["parish_secretary"] = "parish_secretary"
    email: str
    token: str
    parish_name: str
    parish_id: str | None = None
    diocese: Diocese
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    created_by: Actor
    accepted_at: datetime | None = None
    accepted_by: Actor | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == InviteStatus.PENDING
