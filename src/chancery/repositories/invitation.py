"""Invitation repository."""

from src.chancery.models.base import utc_now
from src.chancery.models.enums import Diocese, InviteStatus
from src.chancery.models.invitation import Actor, Invitation
from src.chancery.repositories.base import DocumentRepository


class InvitationRepository(DocumentRepository[Invitation]):
    model = Invitation
    collection = "invites"

    async def list_pending(self, diocese: Diocese) -> list[Invitation]:
        invites = await self.find(diocese=diocese.value, status=InviteStatus.PENDING.value)
        return sorted(invites, key=lambda invite: invite.created_at, reverse=True)

    async def mark_accepted(self, invite_id: str, accepted_by: Actor) -> Invitation:
        """Flip a pending invite to accepted.

        Conditional on the stored status still being pending, so a second
        redemption raises PreconditionFailedError instead of overwriting.
        """
        document = await self.store.update(
            self.collection,
            invite_id,
            {
                "status": InviteStatus.ACCEPTED.value,
                "accepted_at": utc_now().isoformat(),
                "accepted_by": accepted_by.model_dump(mode="json"),
            },
            expected={"status": InviteStatus.PENDING.value},
        )
        return self.from_document(document)

    async def mark_revoked(self, invite_id: str) -> Invitation:
        document = await self.store.update(
            self.collection,
            invite_id,
            {"status": InviteStatus.REVOKED.value},
            expected={"status": InviteStatus.PENDING.value},
        )
        return self.from_document(document)
