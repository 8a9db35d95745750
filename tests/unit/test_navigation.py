"""Unit tests for timed navigation."""

import asyncio

import pytest

from src.chancery.core.navigation import Navigation, NavigationScope

pytestmark = pytest.mark.unit


class Recorder:
    def __init__(self) -> None:
        self.routes: list[str] = []

    def __call__(self, navigation: Navigation) -> None:
        self.routes.append(navigation.route)


async def test_zero_delay_navigates_immediately():
    recorder = Recorder()
    async with NavigationScope() as scope:
        handle = scope.follow(Navigation(route="/login"), recorder)
        assert handle is None
        assert recorder.routes == ["/login"]


async def test_delayed_navigation_fires():
    recorder = Recorder()
    async with NavigationScope() as scope:
        scope.follow(Navigation(route="/pending-approval", delay_seconds=0.01), recorder)
        assert recorder.routes == []
        assert scope.pending_count == 1
        await asyncio.sleep(0.05)
        assert recorder.routes == ["/pending-approval"]
        assert scope.pending_count == 0


async def test_leaving_scope_cancels_pending_navigation():
    recorder = Recorder()
    async with NavigationScope() as scope:
        scope.follow(Navigation(route="/pending-approval", delay_seconds=0.02), recorder)
    await asyncio.sleep(0.05)
    assert recorder.routes == []


async def test_cancel_returns_count():
    recorder = Recorder()
    scope = NavigationScope()
    scope.follow(Navigation(route="/a", delay_seconds=10), recorder)
    scope.follow(Navigation(route="/b", delay_seconds=10), recorder)
    assert scope.cancel() == 2
    assert scope.pending_count == 0
    assert recorder.routes == []


async def test_closed_scope_refuses_new_navigation():
    scope = NavigationScope()
    async with scope:
        pass
    with pytest.raises(RuntimeError):
        scope.follow(Navigation(route="/login"), Recorder())
