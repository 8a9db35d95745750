"""User profile repository, keyed by auth uid."""

from typing import Any

from src.chancery.models.enums import Diocese, ProfileStatus, UserRole
from src.chancery.models.profile import UserProfile
from src.chancery.repositories.base import DocumentRepository


class UserProfileRepository(DocumentRepository[UserProfile]):
    model = UserProfile
    collection = "users"
    id_field = "uid"

    async def list_pending(
        self, role: UserRole, diocese: Diocese | None = None
    ) -> list[UserProfile]:
        filters: dict[str, Any] = {"role": role.value, "status": ProfileStatus.PENDING.value}
        if diocese is not None:
            filters["diocese"] = diocese.value
        profiles = await self.find(**filters)
        return sorted(profiles, key=lambda profile: profile.created_at)

    async def set_status(
        self, uid: str, status: ProfileStatus, fields: dict[str, Any]
    ) -> UserProfile:
        """Move a pending profile to a decided status.

        Conditional on the profile still being pending.
        """
        document = await self.store.update(
            self.collection,
            uid,
            {"status": status.value, **fields},
            expected={"status": ProfileStatus.PENDING.value},
        )
        return self.from_document(document)
