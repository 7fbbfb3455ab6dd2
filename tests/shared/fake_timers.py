from __future__ import annotations

import heapq
import itertools
from typing import Callable


class FakeTimerHandle:
    def __init__(self, due: float, seq: int, callback: Callable[[], None]):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def __lt__(self, other: "FakeTimerHandle") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)


class FakeTimeline:
    """Virtual millisecond clock that doubles as a TimerScheduler."""

    def __init__(self, start: float = 0.0):
        self.current = float(start)
        self.scheduled_delays: list[float] = []
        self._queue: list[FakeTimerHandle] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self.current

    def after(self, delay_ms: float, callback: Callable[[], None]) -> FakeTimerHandle:
        self.scheduled_delays.append(delay_ms)
        handle = FakeTimerHandle(self.current + max(0.0, delay_ms), next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def cancel(self, handle: FakeTimerHandle) -> None:
        handle.cancelled = True

    @property
    def active_timers(self) -> int:
        return sum(1 for handle in self._queue if not handle.cancelled)

    def advance(self, ms: float) -> None:
        target = self.current + ms
        while self._queue and self._queue[0].due <= target:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.current = max(self.current, handle.due)
            handle.callback()
        self.current = target

    def advance_to(self, at: float) -> None:
        self.advance(at - self.current)


class CallCounter:
    def __init__(self):
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


# (time_ms, action, expected_calls); action is True (call with default timeout),
# False (no call) or a number (call with that override).
Step = tuple[float, "bool | float", int]


def play(throttle, timeline: FakeTimeline, counter: CallCounter, steps: list[Step]) -> None:
    assert counter.calls == 0
    for at, action, expected in steps:
        timeline.advance_to(at)
        if action is True:
            throttle()
        elif action is not False:
            throttle(action)
        assert counter.calls == expected, f"t={at}: expected {expected} calls, got {counter.calls}"
