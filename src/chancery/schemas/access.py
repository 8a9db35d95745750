from pydantic import BaseModel

from src.chancery.core.navigation import Navigation
from src.chancery.models.enums import AccessOutcome, Diocese, PageCategory, UserRole


class PendingApprovalRead(BaseModel):
    role: UserRole
    diocese_name: str
    reviewer_label: str
    submission_text: str
    contact_email: str | None = None
    contact_line: str
    greeting: str | None = None
    email: str | None = None

    model_config = {"from_attributes": True}


class AccessDecisionRead(BaseModel):
    outcome: AccessOutcome
    page: PageCategory
    target_diocese: Diocese | None = None
    message: str | None = None
    navigation: Navigation | None = None
    pending: PendingApprovalRead | None = None
    required_roles: list[UserRole]
