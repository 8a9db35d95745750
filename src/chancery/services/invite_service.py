"""Parish invite service."""

from uuid import uuid4

from src.chancery.backend.store import PreconditionFailedError
from src.chancery.core.exceptions import InvalidStateError, NotFoundError, PermissionDeniedError
from src.chancery.core.logging import get_logger
from src.chancery.core.security import generate_invite_token
from src.chancery.models.enums import Diocese, UserRole
from src.chancery.models.invitation import Actor, Invitation
from src.chancery.models.session import SessionContext
from src.chancery.repositories import InvitationRepository

logger = get_logger(__name__)

MISSING_INVITE_ID = "Missing invite id"
INVITE_NOT_FOUND = "Invite not found"
INVITE_NOT_VALID = "Invite is not valid"
ONLY_PENDING_REVOCABLE = "Only pending invites can be revoked."


class InviteService:
    """Service for parish invite operations."""

    def __init__(self, invite_repo: InvitationRepository):
        self.invite_repo = invite_repo

    async def resolve(self, invite_id: str | None) -> Invitation:
        """Fetch a pending invite by id.

        Single attempt, no retries. Raises NotFoundError if the id is missing
        or unknown, InvalidStateError if the invite is no longer pending.
        """
        if not invite_id or not invite_id.strip():
            raise NotFoundError(MISSING_INVITE_ID)

        invite = await self.invite_repo.get_by_id(invite_id.strip())
        if invite is None:
            raise NotFoundError(INVITE_NOT_FOUND)
        if not invite.is_pending:
            logger.info("Invite not pending", invite_id=invite.id, status=invite.status.value)
            raise InvalidStateError(INVITE_NOT_VALID)
        return invite

    def _require_chancery(self, session: SessionContext) -> tuple[Actor, Diocese]:
        """Return the acting chancery user and the diocese they administer."""
        profile = session.profile
        if (
            session.user is None
            or profile is None
            or profile.role != UserRole.CHANCERY_OFFICE
            or not profile.is_approved
            or profile.diocese is None
        ):
            raise PermissionDeniedError("Only approved Chancery Office users can manage invites.")
        return Actor(uid=profile.uid, email=profile.email, name=profile.name), profile.diocese

    async def create_invite(
        self,
        session: SessionContext,
        email: str,
        parish_name: str,
        parish_id: str | None = None,
    ) -> tuple[Invitation, str]:
        """Create a parish secretary invite for the caller's diocese.

        Returns (invite, token). The token is handed to the inviter to pass
        on; the registration endpoint compares it server-side.
        """
        created_by, diocese = self._require_chancery(session)

        token = generate_invite_token()
        invite = Invitation(
            id=uuid4().hex,
            email=email.strip().lower(),
            token=token,
            parish_name=parish_name.strip(),
            parish_id=parish_id,
            diocese=diocese,
            created_by=created_by,
        )
        await self.invite_repo.add(invite)

        logger.info(
            "Invite created",
            invite_id=invite.id,
            diocese=diocese.value,
            parish=invite.parish_name,
            invited_by=created_by.uid,
        )
        return invite, token

    async def list_pending(self, session: SessionContext) -> list[Invitation]:
        _, diocese = self._require_chancery(session)
        return await self.invite_repo.list_pending(diocese)

    async def revoke_invite(self, session: SessionContext, invite_id: str) -> Invitation:
        """Revoke a pending invite of the caller's diocese."""
        actor, diocese = self._require_chancery(session)
        invite = await self.invite_repo.get_by_id(invite_id)
        if invite is None:
            raise NotFoundError(INVITE_NOT_FOUND)
        if invite.diocese != diocese:
            raise PermissionDeniedError("You can only revoke invites for your own diocese.")
        if not invite.is_pending:
            raise InvalidStateError(ONLY_PENDING_REVOCABLE)

        try:
            revoked = await self.invite_repo.mark_revoked(invite.id)
        except PreconditionFailedError as e:
            raise InvalidStateError(ONLY_PENDING_REVOCABLE) from e

        logger.info("Invite revoked", invite_id=invite.id, revoked_by=actor.uid)
        return revoked
