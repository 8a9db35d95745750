"""Integration tests for the SQL document store against PostgreSQL."""

import asyncio

import pytest

from src.chancery.backend import SQLDocumentStore
from src.chancery.backend.store import (
    DocumentExistsError,
    DocumentNotFoundError,
    PreconditionFailedError,
)
from src.chancery.models import Actor, InviteStatus
from src.chancery.repositories import InvitationRepository
from tests.factories import InvitationFactory

pytestmark = pytest.mark.integration


async def test_create_get_and_query(sql_store: SQLDocumentStore):
    await sql_store.create("users", "u1", {"role": "chancery_office", "status": "pending"})
    await sql_store.create("users", "u2", {"role": "chancery_office", "status": "approved"})

    assert await sql_store.get("users", "u1") == {"role": "chancery_office", "status": "pending"}
    assert await sql_store.get("users", "missing") is None
    assert len(await sql_store.query("users", status="pending")) == 1


async def test_duplicate_create(sql_store):
    await sql_store.create("auth_emails", "a@b.co", {"uid": "1"})
    with pytest.raises(DocumentExistsError):
        await sql_store.create("auth_emails", "a@b.co", {"uid": "2"})


async def test_conditional_update(sql_store):
    await sql_store.create("invites", "i1", {"status": "pending"})
    await sql_store.update("invites", "i1", {"status": "accepted"}, expected={"status": "pending"})

    with pytest.raises(PreconditionFailedError):
        await sql_store.update(
            "invites", "i1", {"status": "accepted"}, expected={"status": "pending"}
        )


async def test_update_missing(sql_store):
    with pytest.raises(DocumentNotFoundError):
        await sql_store.update("invites", "missing", {"status": "revoked"})


async def test_conditional_delete(sql_store):
    await sql_store.create("auth_emails", "a@example.com", {"uid": "u1"})
    with pytest.raises(PreconditionFailedError):
        await sql_store.delete("auth_emails", "a@example.com", expected={"uid": "u2"})

    assert await sql_store.delete("auth_emails", "a@example.com", expected={"uid": "u1"})
    assert await sql_store.get("auth_emails", "a@example.com") is None
    assert not await sql_store.delete("auth_emails", "a@example.com")


async def test_concurrent_accepts_succeed_once(sql_store):
    repo = InvitationRepository(sql_store)
    invite = await repo.add(InvitationFactory.build())

    results = await asyncio.gather(
        repo.mark_accepted(invite.id, Actor(uid="a", email="a@example.com")),
        repo.mark_accepted(invite.id, Actor(uid="b", email="b@example.com")),
        return_exceptions=True,
    )

    failures = [result for result in results if isinstance(result, PreconditionFailedError)]
    assert len(failures) == 1
    stored = await repo.get_by_id(invite.id)
    assert stored.status == InviteStatus.ACCEPTED


async def test_ping(sql_store):
    assert await sql_store.ping() is True


async def test_auth_provider_on_sql(sql_auth_provider):
    uid = await sql_auth_provider.create_account("sql@example.com", "Abcdef12")
    user = await sql_auth_provider.sign_in("sql@example.com", "Abcdef12")
    assert user.uid == uid
