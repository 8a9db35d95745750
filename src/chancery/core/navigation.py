"""Timed navigation after a successful workflow step.

Workflow outcomes carry a ``Navigation`` describing where the user goes next
and after how long. ``NavigationScope`` runs those navigations as cancellable
``loop.call_later`` callbacks bound to the lifetime of the caller (a page,
a websocket, a test): leaving the scope cancels anything not yet fired.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from src.chancery.core.logging import get_logger

logger = get_logger(__name__)

Navigate = Callable[["Navigation"], None]


class Navigation(BaseModel):
    """Where to send the user next."""

    route: str
    delay_seconds: float = 0.0
    state: dict[str, Any] = Field(default_factory=dict)


class NavigationScope:
    """Owns pending timed navigations; cancels them on exit.

    Usage:
        async with NavigationScope() as scope:
            scope.follow(outcome.navigation, router.push)
            ...
        # Anything not yet fired is cancelled here
    """

    def __init__(self) -> None:
        self._handles: list[asyncio.TimerHandle] = []
        self._closed = False

    @property
    def pending_count(self) -> int:
        return sum(1 for handle in self._handles if not handle.cancelled())

    def follow(self, navigation: Navigation, navigate: Navigate) -> asyncio.TimerHandle | None:
        """Navigate now (zero delay) or schedule the navigation.

        Returns the timer handle for delayed navigations, None otherwise.
        """
        if self._closed:
            raise RuntimeError("NavigationScope is closed")

        if navigation.delay_seconds <= 0:
            navigate(navigation)
            return None

        loop = asyncio.get_running_loop()
        handle: asyncio.TimerHandle | None = None

        def _fire() -> None:
            if handle is not None and handle in self._handles:
                self._handles.remove(handle)
            navigate(navigation)

        handle = loop.call_later(navigation.delay_seconds, _fire)
        self._handles.append(handle)
        logger.debug(
            "Navigation scheduled",
            route=navigation.route,
            delay_seconds=navigation.delay_seconds,
        )
        return handle

    def cancel(self) -> int:
        """Cancel all pending navigations. Returns how many were cancelled."""
        cancelled = 0
        for handle in self._handles:
            if not handle.cancelled():
                handle.cancel()
                cancelled += 1
        self._handles.clear()
        if cancelled:
            logger.debug("Pending navigations cancelled", count=cancelled)
        return cancelled

    async def __aenter__(self) -> "NavigationScope":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.cancel()
        self._closed = True
