"""Unit tests for the in-memory document store."""

import pytest

from src.chancery.backend.store import (
    DocumentExistsError,
    DocumentNotFoundError,
    MemoryDocumentStore,
    PreconditionFailedError,
)

pytestmark = pytest.mark.unit


async def test_get_missing_returns_none(store: MemoryDocumentStore):
    assert await store.get("invites", "missing") is None


async def test_create_twice_fails(store):
    await store.create("invites", "i1", {"status": "pending"})
    with pytest.raises(DocumentExistsError):
        await store.create("invites", "i1", {"status": "pending"})


async def test_returned_documents_are_copies(store):
    await store.create("invites", "i1", {"status": "pending", "tags": ["a"]})
    document = await store.get("invites", "i1")
    document["tags"].append("b")
    assert (await store.get("invites", "i1"))["tags"] == ["a"]


async def test_conditional_update(store):
    await store.create("invites", "i1", {"status": "pending"})
    updated = await store.update(
        "invites", "i1", {"status": "accepted"}, expected={"status": "pending"}
    )
    assert updated["status"] == "accepted"

    with pytest.raises(PreconditionFailedError) as exc_info:
        await store.update("invites", "i1", {"status": "accepted"}, expected={"status": "pending"})
    assert exc_info.value.field == "status"
    assert exc_info.value.actual == "accepted"


async def test_update_missing(store):
    with pytest.raises(DocumentNotFoundError):
        await store.update("invites", "missing", {"status": "revoked"})


async def test_conditional_delete(store):
    await store.create("auth_emails", "a@example.com", {"uid": "u1"})
    with pytest.raises(PreconditionFailedError):
        await store.delete("auth_emails", "a@example.com", expected={"uid": "u2"})
    assert await store.get("auth_emails", "a@example.com") is not None

    assert await store.delete("auth_emails", "a@example.com", expected={"uid": "u1"}) is True
    assert await store.get("auth_emails", "a@example.com") is None
    assert await store.delete("auth_emails", "a@example.com") is False


async def test_query_by_fields(store):
    await store.create("users", "u1", {"role": "chancery_office", "status": "pending"})
    await store.create("users", "u2", {"role": "chancery_office", "status": "approved"})
    await store.create("users", "u3", {"role": "museum_researcher", "status": "pending"})

    results = await store.query("users", role="chancery_office", status="pending")
    assert results == [{"role": "chancery_office", "status": "pending"}]
    assert len(await store.query("users")) == 3


async def test_clear(store):
    await store.create("users", "u1", {})
    store.clear()
    assert await store.get("users", "u1") is None
