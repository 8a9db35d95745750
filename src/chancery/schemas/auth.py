from typing import ClassVar

from pydantic import BaseModel, Field, model_validator

from src.chancery.core.navigation import Navigation
from src.chancery.models.enums import Diocese, ParishPosition, ProfileStatus, UserRole
from src.chancery.schemas.profile import ProfileRead
from src.chancery.services.auth_action_service import ActionStatus
from src.chancery.services.registration_service import SelfRegistration, self_registration_error


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)


class SessionUserRead(BaseModel):
    uid: str
    email: str
    email_verified: bool


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUserRead
    profile: ProfileRead | None = None


class SessionResponse(BaseModel):
    user: SessionUserRead
    profile: ProfileRead | None = None


class _SelfRegistrationRequest(BaseModel):
    """Fields shared by every self-registration form.

    Plain ``str`` fields on purpose: the form validator owns the messages and
    their order, so typed fields must not fail first.
    """

    role: ClassVar[UserRole]

    name: str = Field(default="", max_length=100)
    email: str = Field(default="", max_length=255)
    password: str = Field(default="", max_length=128)
    confirm_password: str = Field(default="", max_length=128)
    phone_number: str | None = Field(default=None, max_length=30)

    def to_form(self) -> SelfRegistration:
        # Field names match SelfRegistration one to one
        return SelfRegistration(role=self.role, **self.model_dump())

    @model_validator(mode="after")
    def validate_form(self) -> "_SelfRegistrationRequest":
        error = self_registration_error(self.to_form())
        if error:
            raise ValueError(error)
        return self


class MuseumRegistrationRequest(_SelfRegistrationRequest):
    role: ClassVar[UserRole] = UserRole.MUSEUM_RESEARCHER


class ChanceryRegistrationRequest(_SelfRegistrationRequest):
    role: ClassVar[UserRole] = UserRole.CHANCERY_OFFICE

    diocese: Diocese | None = None


class ParishRegistrationRequest(_SelfRegistrationRequest):
    role: ClassVar[UserRole] = UserRole.PARISH_SECRETARY

    diocese: Diocese | None = None
    parish: str | None = Field(default=None, max_length=200)
    parish_id: str | None = Field(default=None, max_length=128)
    position: ParishPosition | None = None


class InviteRegistrationRequest(BaseModel):
    """Invite redemption. The email comes from the invite, not the form."""

    code: str = Field(default="", max_length=32)
    name: str = Field(default="", max_length=100)
    password: str = Field(default="", max_length=128)
    confirm_password: str = Field(default="", max_length=128)


class RegistrationResponse(BaseModel):
    uid: str
    status: ProfileStatus
    message: str
    navigation: Navigation


class AuthActionResponse(BaseModel):
    status: ActionStatus
    message: str
    email: str | None = None
    navigation: Navigation | None = None


class ResendVerificationRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    continue_url: str | None = Field(default=None, max_length=2048)


class PasswordResetRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)


class MessageResponse(BaseModel):
    message: str
