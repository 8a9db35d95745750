"""Registration service - self-registration and invite redemption.

Both paths run the same three steps against two systems that share no
transaction: the auth provider (credential) and the document store
(profile, invite). Steps run strictly in order and nothing is rolled back.
If a step after account creation fails, the orphaned credential is reported
as an InconsistentStateWarning before the error is raised.
"""

from dataclasses import dataclass, field

from src.chancery.backend.auth import AuthProvider
from src.chancery.backend.store import PreconditionFailedError
from src.chancery.core.config import get_settings
from src.chancery.core.exceptions import (
    FormValidationError,
    InvalidStateError,
    RegistrationIncompleteError,
)
from src.chancery.core.logging import get_logger
from src.chancery.core.navigation import Navigation
from src.chancery.core.security import validate_registration_form, validate_role_fields
from src.chancery.models.base import utc_now
from src.chancery.models.enums import (
    Diocese,
    ParishPosition,
    ProfileStatus,
    RegistrationSource,
    SagaStepStatus,
    UserRole,
)
from src.chancery.models.invitation import Actor
from src.chancery.models.profile import UserProfile
from src.chancery.models.reconciliation import InconsistentStateWarning, SagaStep
from src.chancery.repositories import InvitationRepository, UserProfileRepository
from src.chancery.services.access_gate import REVIEWER_LABELS
from src.chancery.services.invite_service import INVITE_NOT_VALID, InviteService
from src.chancery.services.reconciliation_service import ReconciliationService

logger = get_logger(__name__)

STEP_CREATE_ACCOUNT = "create_account"
STEP_WRITE_PROFILE = "write_profile"
STEP_SEND_VERIFICATION = "send_verification"
STEP_ACCEPT_INVITE = "accept_invite"

INCORRECT_INVITE_CODE = "Incorrect invite code"
INVITE_REGISTRATION_MESSAGE = "Registration complete. You can now log in."


@dataclass(frozen=True)
class SelfRegistration:
    """A self-registration form as submitted."""

    role: UserRole
    name: str
    email: str
    password: str
    confirm_password: str
    diocese: Diocese | None = None
    parish: str | None = None
    parish_id: str | None = None
    position: ParishPosition | None = None
    phone_number: str | None = None


@dataclass
class RegistrationOutcome:
    uid: str
    status: ProfileStatus
    message: str
    navigation: Navigation
    steps: list[SagaStep] = field(default_factory=list)


def self_registration_error(form: SelfRegistration) -> str | None:
    """First problem with a self-registration form, or None."""
    return validate_role_fields(
        form.role, form.diocese, form.parish, form.parish_id, form.position
    ) or validate_registration_form(form.name, form.email, form.password, form.confirm_password)


class RegistrationSaga:
    """Step log for one registration attempt."""

    def __init__(self, email: str, invite_id: str | None = None):
        self.email = email
        self.invite_id = invite_id
        self.uid: str | None = None
        self.steps: list[SagaStep] = []

    def succeeded(self, name: str) -> None:
        self.steps.append(SagaStep(name=name, status=SagaStepStatus.SUCCEEDED))

    def failed(self, name: str, error: Exception) -> None:
        self.steps.append(SagaStep(name=name, status=SagaStepStatus.FAILED, error=str(error)))

    def skipped(self, name: str) -> None:
        self.steps.append(SagaStep(name=name, status=SagaStepStatus.SKIPPED))

    @property
    def completed(self) -> list[str]:
        return [step.name for step in self.steps if step.status == SagaStepStatus.SUCCEEDED]

    def warning(self, failed_step: str, error: Exception) -> InconsistentStateWarning:
        return InconsistentStateWarning(
            uid=self.uid or "",
            email=self.email,
            failed_step=failed_step,
            completed_steps=self.completed,
            error=str(error),
            invite_id=self.invite_id,
        )


class RegistrationService:
    """Service for account + profile registration."""

    def __init__(
        self,
        auth: AuthProvider,
        profile_repo: UserProfileRepository,
        invite_repo: InvitationRepository,
        reconciliation_service: ReconciliationService,
    ):
        self.auth = auth
        self.profile_repo = profile_repo
        self.invite_repo = invite_repo
        self.invite_service = InviteService(invite_repo)
        self.reconciliation_service = reconciliation_service

    async def _create_account(self, saga: RegistrationSaga, password: str) -> str:
        """Step 1. Provider errors propagate unchanged; nothing else runs."""
        try:
            uid = await self.auth.create_account(saga.email, password)
        except Exception as e:
            saga.failed(STEP_CREATE_ACCOUNT, e)
            logger.info("Account creation refused", error_type=type(e).__name__)
            raise
        saga.uid = uid
        saga.succeeded(STEP_CREATE_ACCOUNT)
        return uid

    async def _report(
        self, saga: RegistrationSaga, failed_step: str, error: Exception
    ) -> InconsistentStateWarning:
        return await self.reconciliation_service.report(saga.warning(failed_step, error))

    async def register_self(self, form: SelfRegistration) -> RegistrationOutcome:
        """Register a chancery office, parish staff or museum researcher account.

        The profile starts pending; an approver of the same role flips it.
        """
        error = self_registration_error(form)
        if error:
            raise FormValidationError(error)

        settings = get_settings()
        email = form.email.strip()
        saga = RegistrationSaga(email=email)
        uid = await self._create_account(saga, form.password)

        profile = UserProfile(
            uid=uid,
            email=email.lower(),
            name=form.name.strip(),
            role=form.role,
            # Museum researchers are not tied to a diocese
            diocese=form.diocese if form.role != UserRole.MUSEUM_RESEARCHER else None,
            parish=form.parish.strip() if form.parish else None,
            parish_id=form.parish_id,
            position=form.position,
            phone_number=form.phone_number,
            status=ProfileStatus.PENDING,
            registration_source=RegistrationSource.SELF,
        )
        try:
            await self.profile_repo.add(profile)
        except Exception as e:
            saga.failed(STEP_WRITE_PROFILE, e)
            saga.skipped(STEP_SEND_VERIFICATION)
            warning = await self._report(saga, STEP_WRITE_PROFILE, e)
            raise RegistrationIncompleteError(warning) from e
        saga.succeeded(STEP_WRITE_PROFILE)

        try:
            await self.auth.send_email_verification(email)
            saga.succeeded(STEP_SEND_VERIFICATION)
        except Exception as e:
            # Best effort; the user can ask for a new link later
            saga.failed(STEP_SEND_VERIFICATION, e)
            logger.warning("Verification email request failed", uid=uid, error=str(e))

        logger.info(
            "Self registration submitted",
            uid=uid,
            role=form.role.value,
            diocese=profile.diocese.value if profile.diocese else None,
        )
        return RegistrationOutcome(
            uid=uid,
            status=ProfileStatus.PENDING,
            message=(
                "Your account has been created. "
                f"Awaiting approval from the {REVIEWER_LABELS[form.role]}."
            ),
            navigation=Navigation(
                route=settings.pending_approval_route,
                delay_seconds=settings.self_registration_redirect_seconds,
                state={
                    "role": form.role.value,
                    "diocese": profile.diocese.value if profile.diocese else None,
                    "parish": profile.parish,
                    "name": profile.name,
                    "email": email,
                },
            ),
            steps=saga.steps,
        )

    async def register_with_invite(
        self,
        invite_id: str | None,
        code: str,
        name: str,
        password: str,
        confirm_password: str,
    ) -> RegistrationOutcome:
        """Redeem a parish invite.

        The invite code is checked before any provider call. A valid invite is
        itself the approval, so the profile is created approved.
        """
        invite = await self.invite_service.resolve(invite_id)
        if code.strip() != invite.token:
            logger.info("Incorrect invite code", invite_id=invite.id)
            raise FormValidationError(INCORRECT_INVITE_CODE)

        error = validate_registration_form(name, invite.email, password, confirm_password)
        if error:
            raise FormValidationError(error)

        saga = RegistrationSaga(email=invite.email, invite_id=invite.id)
        uid = await self._create_account(saga, password)

        profile = UserProfile(
            uid=uid,
            email=invite.email,
            name=name.strip(),
            role=UserRole.PARISH_SECRETARY,
            diocese=invite.diocese,
            parish=invite.parish_name,
            parish_id=invite.parish_id,
            status=ProfileStatus.APPROVED,
            registration_source=RegistrationSource.INVITE,
            approved_at=utc_now(),
            approved_by=invite.created_by.uid,
        )
        try:
            await self.profile_repo.add(profile)
        except Exception as e:
            saga.failed(STEP_WRITE_PROFILE, e)
            saga.skipped(STEP_ACCEPT_INVITE)
            warning = await self._report(saga, STEP_WRITE_PROFILE, e)
            raise RegistrationIncompleteError(warning) from e
        saga.succeeded(STEP_WRITE_PROFILE)

        accepted_by = Actor(uid=uid, email=invite.email, name=profile.name)
        try:
            await self.invite_repo.mark_accepted(invite.id, accepted_by)
        except PreconditionFailedError as e:
            # Another submission redeemed the invite between resolve and accept
            saga.failed(STEP_ACCEPT_INVITE, e)
            await self._report(saga, STEP_ACCEPT_INVITE, e)
            raise InvalidStateError(INVITE_NOT_VALID) from e
        except Exception as e:
            saga.failed(STEP_ACCEPT_INVITE, e)
            warning = await self._report(saga, STEP_ACCEPT_INVITE, e)
            raise RegistrationIncompleteError(warning) from e
        saga.succeeded(STEP_ACCEPT_INVITE)

        logger.info(
            "Invite redeemed",
            uid=uid,
            invite_id=invite.id,
            diocese=invite.diocese.value,
        )
        return RegistrationOutcome(
            uid=uid,
            status=ProfileStatus.APPROVED,
            message=INVITE_REGISTRATION_MESSAGE,
            navigation=Navigation(route=get_settings().login_route),
            steps=saga.steps,
        )
