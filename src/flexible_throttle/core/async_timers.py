"""Asyncio event-loop timer facility."""

from __future__ import annotations

import asyncio
from typing import Callable


class AsyncioTimerScheduler:
    """Schedules callbacks with `loop.call_later`.

    When no loop is given the running loop is looked up on every `after()`,
    so the scheduler must then be used from inside a coroutine or callback.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def after(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay_ms) / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


__all__ = [
    "AsyncioTimerScheduler",
]
