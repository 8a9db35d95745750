"""Unit tests for InviteService."""

import pytest

from src.chancery.core.exceptions import InvalidStateError, NotFoundError, PermissionDeniedError
from src.chancery.models import Diocese, InviteStatus, ProfileStatus
from src.chancery.models.session import SessionContext, SessionUser
from src.chancery.services.invite_service import (
    INVITE_NOT_FOUND,
    INVITE_NOT_VALID,
    MISSING_INVITE_ID,
    ONLY_PENDING_REVOCABLE,
)
from tests.factories import InvitationFactory, UserProfileFactory

pytestmark = pytest.mark.unit


def session_for(profile) -> SessionContext:
    return SessionContext(user=SessionUser(uid=profile.uid, email=profile.email), profile=profile)


@pytest.fixture
def chancellor():
    return UserProfileFactory.approved(diocese=Diocese.TAGBILARAN)


class TestResolve:
    @pytest.mark.parametrize("invite_id", [None, "", "   "])
    async def test_missing_id(self, invite_service, invite_id):
        with pytest.raises(NotFoundError) as exc_info:
            await invite_service.resolve(invite_id)
        assert exc_info.value.message == MISSING_INVITE_ID

    async def test_unknown_id(self, invite_service):
        with pytest.raises(NotFoundError) as exc_info:
            await invite_service.resolve("does-not-exist")
        assert exc_info.value.message == INVITE_NOT_FOUND

    @pytest.mark.parametrize("factory", [InvitationFactory.accepted, InvitationFactory.revoked])
    async def test_not_pending(self, invite_service, invite_repo, factory):
        invite = await invite_repo.add(factory())
        with pytest.raises(InvalidStateError) as exc_info:
            await invite_service.resolve(invite.id)
        assert exc_info.value.message == INVITE_NOT_VALID

    async def test_pending_invite_returned(self, invite_service, invite_repo):
        invite = await invite_repo.add(InvitationFactory.build())
        resolved = await invite_service.resolve(invite.id)
        assert resolved.id == invite.id
        assert resolved.token == invite.token


class TestCreateInvite:
    async def test_creates_pending_invite_for_callers_diocese(
        self, invite_service, invite_repo, chancellor
    ):
        invite, token = await invite_service.create_invite(
            session_for(chancellor), " New.Secretary@Example.com ", "St. Joseph Parish"
        )

        stored = await invite_repo.get_by_id(invite.id)
        assert stored is not None
        assert stored.status == InviteStatus.PENDING
        assert stored.email == "new.secretary@example.com"
        assert stored.diocese == Diocese.TAGBILARAN
        assert stored.created_by.uid == chancellor.uid
        assert stored.token == token
        assert len(token) == 8

    async def test_pending_chancery_user_denied(self, invite_service):
        pending = UserProfileFactory.build()
        with pytest.raises(PermissionDeniedError):
            await invite_service.create_invite(session_for(pending), "a@b.co", "Parish")

    async def test_parish_secretary_denied(self, invite_service):
        secretary = UserProfileFactory.parish_secretary(status=ProfileStatus.APPROVED)
        with pytest.raises(PermissionDeniedError):
            await invite_service.create_invite(session_for(secretary), "a@b.co", "Parish")

    async def test_anonymous_denied(self, invite_service):
        with pytest.raises(PermissionDeniedError):
            await invite_service.create_invite(SessionContext.anonymous(), "a@b.co", "Parish")


class TestListAndRevoke:
    async def test_list_pending_scoped_to_diocese(self, invite_service, invite_repo, chancellor):
        own = await invite_repo.add(InvitationFactory.build(diocese=Diocese.TAGBILARAN))
        await invite_repo.add(InvitationFactory.build(diocese=Diocese.TALIBON))
        await invite_repo.add(InvitationFactory.accepted(diocese=Diocese.TAGBILARAN))

        invites = await invite_service.list_pending(session_for(chancellor))
        assert [invite.id for invite in invites] == [own.id]

    async def test_revoke_pending(self, invite_service, invite_repo, chancellor):
        invite = await invite_repo.add(InvitationFactory.build(diocese=Diocese.TAGBILARAN))
        revoked = await invite_service.revoke_invite(session_for(chancellor), invite.id)
        assert revoked.status == InviteStatus.REVOKED

        with pytest.raises(InvalidStateError):
            await invite_service.resolve(invite.id)

    async def test_revoke_twice_fails(self, invite_service, invite_repo, chancellor):
        invite = await invite_repo.add(InvitationFactory.build(diocese=Diocese.TAGBILARAN))
        await invite_service.revoke_invite(session_for(chancellor), invite.id)
        with pytest.raises(InvalidStateError) as exc_info:
            await invite_service.revoke_invite(session_for(chancellor), invite.id)
        assert exc_info.value.message == ONLY_PENDING_REVOCABLE

    async def test_revoke_other_diocese_denied(self, invite_service, invite_repo, chancellor):
        invite = await invite_repo.add(InvitationFactory.build(diocese=Diocese.TALIBON))
        with pytest.raises(PermissionDeniedError):
            await invite_service.revoke_invite(session_for(chancellor), invite.id)
