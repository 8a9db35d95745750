"""Invite schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from src.chancery.models.enums import Diocese, InviteStatus


class InviteCreateRequest(BaseModel):
    """Request to invite a parish secretary to the caller's diocese."""

    email: EmailStr
    parish_name: str = Field(min_length=1, max_length=200)
    parish_id: str | None = Field(default=None, max_length=128)


class InviteCreateResponse(BaseModel):
    """Response after creating an invite.

    The token is shown once, to the inviter, who passes it on with the link.
    """

    id: str
    email: str
    parish_name: str
    diocese: Diocese
    token: str
    message: str = "Invite created successfully"


class InvitePublicRead(BaseModel):
    """What an invitee sees before registering. Never includes the token."""

    id: str
    email: str
    parish_name: str
    diocese: Diocese

    model_config = {"from_attributes": True}


class InviteRead(BaseModel):
    """Read model for invites (chancery view)."""

    id: str
    email: str
    parish_name: str
    diocese: Diocese
    status: InviteStatus
    created_at: datetime
    accepted_at: datetime | None = None

    model_config = {"from_attributes": True}


class InviteListResponse(BaseModel):
    invites: list[InviteRead]
    total: int
