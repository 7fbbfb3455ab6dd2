"""Error types raised when a throttle cannot be built."""

from __future__ import annotations


class ThrottleError(Exception):
    """Base exception for this package."""


class ThrottleConfigError(ThrottleError, ValueError):
    """Throttle construction rejected."""

    reason = "invalid_config"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NoOperationError(ThrottleConfigError):
    """The wrapped operation is missing or not callable."""

    reason = "no_operation"


class InvalidTimeoutError(ThrottleConfigError):
    """Default timeout is not a finite, non-negative number."""

    reason = "invalid_timeout"


class NoEdgeEnabledError(ThrottleConfigError):
    """Both leading and tailing edges are disabled."""

    reason = "no_edge_enabled"


class InvalidOptionsError(ThrottleConfigError):
    """Options have an unknown key or a value of the wrong type."""

    reason = "invalid_options"


__all__ = [
    "ThrottleError",
    "ThrottleConfigError",
    "NoOperationError",
    "InvalidTimeoutError",
    "NoEdgeEnabledError",
    "InvalidOptionsError",
]
