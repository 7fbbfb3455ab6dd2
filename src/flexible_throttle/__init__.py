"""Public package exports for flexible-throttle."""

from .config import ThrottleOptions
from .core.async_timers import AsyncioTimerScheduler
from .core.errors import ThrottleConfigError, ThrottleError
from .core.timers import ThreadingTimerScheduler, TimerScheduler
from .throttle import FlexibleThrottle, flexible_throttle, throttled

__all__ = [
    "FlexibleThrottle",
    "flexible_throttle",
    "throttled",
    "ThrottleOptions",
    "ThrottleError",
    "ThrottleConfigError",
    "TimerScheduler",
    "ThreadingTimerScheduler",
    "AsyncioTimerScheduler",
]
