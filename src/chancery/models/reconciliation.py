"""Records produced by the registration saga."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from src.chancery.models.base import utc_now
from src.chancery.models.enums import SagaStepStatus


class SagaStep(BaseModel):
    name: str
    status: SagaStepStatus
    error: str | None = None


class InconsistentStateWarning(BaseModel):
    """An auth credential exists but a later registration write failed.

    Picked up by an external reconciliation/admin process; nothing here
    deletes the orphaned credential.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    uid: str
    email: str
    failed_step: str
    completed_steps: list[str]
    error: str
    invite_id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
