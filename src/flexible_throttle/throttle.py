"""Leading/tailing call throttle with per-call window overrides."""

from __future__ import annotations

import functools
import logging
import math
import threading
from collections.abc import Mapping
from numbers import Real
from typing import Any, Callable

from .config import Jitter, ThrottleOptions, resolve_options
from .core.clock import Clock, monotonic_ms
from .core.errors import InvalidTimeoutError, NoOperationError, ThrottleConfigError
from .core.timers import ThreadingTimerScheduler, TimerScheduler

logger = logging.getLogger("flexible_throttle")

Operation = Callable[[], Any]


def _validate_default_timeout(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidTimeoutError("default_timeout_ms must be a number", field="default_timeout_ms")
    timeout = float(value)
    if not math.isfinite(timeout) or timeout < 0:
        raise InvalidTimeoutError(
            "default_timeout_ms must be finite and >= 0",
            field="default_timeout_ms",
        )
    return timeout


class FlexibleThrottle:
    """Coalesces bursts of calls into at most one leading and one tailing run per window.

    A window opens at the first call, or at any call made after the window
    length (the caller's override, or the default) has strictly elapsed since
    the window start. With ``leading`` the operation runs as the window opens.
    With ``tailing`` a call made inside an open window requests one more run
    at the window end. An override can pull the pending tail earlier but never
    pushes it later.

    Instances are callable: ``throttle()`` or ``throttle(timeout_override_ms)``.
    """

    def __init__(
        self,
        operation: Operation,
        default_timeout_ms: float = 0,
        options: ThrottleOptions | Mapping[str, object] | None = None,
        *,
        clock: Clock | None = None,
        scheduler: TimerScheduler | None = None,
    ) -> None:
        if not callable(operation):
            raise NoOperationError("operation must be callable", field="operation")
        self._operation = operation
        self._default_timeout_ms = _validate_default_timeout(default_timeout_ms)
        self._options = resolve_options(options)
        self._clock = clock or monotonic_ms
        self._scheduler = scheduler or ThreadingTimerScheduler()
        self._lock = threading.RLock()

        self._leading_time: float | None = None
        self._tailing_time: float | None = None
        self._call_at_tailing = False
        self._timer: Any = None
        self._generation = 0

    @property
    def options(self) -> ThrottleOptions:
        return self._options

    @property
    def default_timeout_ms(self) -> float:
        return self._default_timeout_ms

    @property
    def leading_time(self) -> float | None:
        """Start of the current window, or None before the first call."""
        return self._leading_time

    @property
    def tailing_time(self) -> float | None:
        """Target time of the pending timer, or None when nothing is pending."""
        return self._tailing_time

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def __call__(self, timeout_override_ms: float | None = None) -> None:
        with self._lock:
            timeout = self._normalize_timeout(timeout_override_ms)
            if self._opens_window(timeout):
                self._open_window(timeout)
            elif self._options.tailing:
                self._join_window(timeout)

    def _normalize_timeout(self, override: float | None) -> float:
        if override is None:
            return self._default_timeout_ms
        if isinstance(override, bool) or not isinstance(override, Real):
            timeout = math.nan
        else:
            timeout = float(override)
        if not math.isfinite(timeout):
            logger.warning(
                "unusable timeout override replaced by default override=%s default=%s",
                override,
                self._default_timeout_ms,
            )
            return self._default_timeout_ms
        if timeout < 0:
            logger.debug("negative timeout override clamped override=%s", override)
            return 0.0
        return timeout

    def _opens_window(self, timeout: float) -> bool:
        if self._leading_time is None:
            return True
        return self._clock() - self._leading_time > timeout

    def _open_window(self, timeout: float) -> None:
        self._leading_time = self._clock()
        logger.debug("window opened at=%s timeout_ms=%s", self._leading_time, timeout)
        if self._options.leading:
            self._invoke()
        self._arm_timer(timeout)
        if not self._options.leading:
            self._call_at_tailing = True

    def _join_window(self, timeout: float) -> None:
        # Overrides only ever shrink the wait; a later tail never replaces an earlier one.
        candidate = self._leading_time + timeout
        if self._timer is None or (self._tailing_time is not None and candidate < self._tailing_time):
            self._arm_timer(timeout)
        self._call_at_tailing = True

    def _arm_timer(self, timeout: float) -> None:
        self._clear_timer()
        now = self._clock()
        delay = self._leading_time + timeout - now
        jitter: Jitter | None = self._options.jitter
        if jitter is not None:
            delay += jitter()
        delay = max(delay, 0.0)

        self._generation += 1
        generation = self._generation
        self._call_at_tailing = False
        self._timer = self._scheduler.after(delay, lambda: self._on_timer_elapsed(generation))
        self._tailing_time = now + delay
        logger.debug("tail armed delay_ms=%s target=%s", delay, self._tailing_time)

    def _on_timer_elapsed(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                logger.debug("stale timer delivery ignored generation=%s", generation)
                return
            self._timer = None
            self._tailing_time = None
            if self._call_at_tailing:
                logger.debug("tail fired")
                self._invoke()
            else:
                logger.debug("tail elapsed without pending calls")

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._scheduler.cancel(self._timer)
            self._timer = None
            self._tailing_time = None

    def _invoke(self) -> None:
        self._clear_timer()
        self._operation()


def flexible_throttle(
    operation: Operation,
    default_timeout_ms: float = 0,
    options: ThrottleOptions | Mapping[str, object] | None = None,
    *,
    clock: Clock | None = None,
    scheduler: TimerScheduler | None = None,
) -> FlexibleThrottle | None:
    """Build a throttle, returning None instead of raising when the arguments are unusable."""

    try:
        return FlexibleThrottle(
            operation,
            default_timeout_ms,
            options,
            clock=clock,
            scheduler=scheduler,
        )
    except ThrottleConfigError as exc:
        logger.debug("throttle construction rejected reason=%s detail=%s", exc.reason, exc)
        return None


def throttled(
    default_timeout_ms: float = 0,
    *,
    leading: bool = True,
    tailing: bool = True,
    jitter: Jitter | None = None,
    clock: Clock | None = None,
    scheduler: TimerScheduler | None = None,
) -> Callable[[Operation], FlexibleThrottle]:
    """Decorator form of `FlexibleThrottle`."""

    options = ThrottleOptions(leading=leading, tailing=tailing, jitter=jitter)

    def decorate(operation: Operation) -> FlexibleThrottle:
        throttle = FlexibleThrottle(
            operation,
            default_timeout_ms,
            options,
            clock=clock,
            scheduler=scheduler,
        )
        functools.update_wrapper(throttle, operation)
        return throttle

    return decorate


__all__ = [
    "Operation",
    "FlexibleThrottle",
    "flexible_throttle",
    "throttled",
]
