"""Unit tests for ReconciliationService."""

import pytest

from src.chancery.models.reconciliation import InconsistentStateWarning

pytestmark = pytest.mark.unit


def make_warning(**overrides) -> InconsistentStateWarning:
    values = {
        "uid": "uid-1",
        "email": "a@b.co",
        "failed_step": "write_profile",
        "completed_steps": ["create_account"],
        "error": "store down",
    }
    values.update(overrides)
    return InconsistentStateWarning(**values)


async def test_report_persists_event(reconciliation_service, reconciliation_repo):
    warning = make_warning()
    returned = await reconciliation_service.report(warning)

    assert returned is warning
    stored = await reconciliation_repo.get_by_id(warning.id)
    assert stored is not None
    assert stored.failed_step == "write_profile"
    assert stored.completed_steps == ["create_account"]


async def test_list_open_oldest_first(reconciliation_service):
    first = await reconciliation_service.report(make_warning(uid="a"))
    second = await reconciliation_service.report(make_warning(uid="b"))
    events = await reconciliation_service.list_open()
    assert [event.id for event in events] == [first.id, second.id]


async def test_persist_failure_does_not_raise(
    reconciliation_service, reconciliation_repo, monkeypatch
):
    async def broken_add(entity):
        raise RuntimeError("store down")

    monkeypatch.setattr(reconciliation_repo, "add", broken_add)
    warning = make_warning(failed_step="accept_invite", invite_id="invite-1")

    assert await reconciliation_service.report(warning) is warning
