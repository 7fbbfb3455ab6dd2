"""Deferred-execution facilities used to fire the tailing edge."""

from __future__ import annotations

import threading
from typing import Any, Callable, Protocol


class TimerScheduler(Protocol):
    """Single-shot timer contract."""

    def after(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """Run callback once after delay_ms and return a cancellable handle."""

    def cancel(self, handle: Any) -> None:
        """Cancel a registration returned by after()."""


class ThreadingTimerScheduler:
    """Runs each registration on its own daemon `threading.Timer`."""

    def after(self, delay_ms: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(0.0, delay_ms) / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


__all__ = [
    "TimerScheduler",
    "ThreadingTimerScheduler",
]
