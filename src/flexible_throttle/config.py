"""Throttle options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Callable

from .core.errors import InvalidOptionsError, NoEdgeEnabledError

Jitter = Callable[[], float]


@dataclass(slots=True, frozen=True)
class ThrottleOptions:
    """Edge selection and delay jitter for a throttle.

    jitter: returns a millisecond offset (may be negative) added to every
    computed tailing delay.
    """

    leading: bool = True
    tailing: bool = True
    jitter: Jitter | None = None

    def validate(self) -> None:
        for field_name in ("leading", "tailing"):
            if not isinstance(getattr(self, field_name), bool):
                raise InvalidOptionsError(f"options.{field_name} must be bool", field=field_name)
        if self.jitter is not None and not callable(self.jitter):
            raise InvalidOptionsError("options.jitter must be callable", field="jitter")
        if not self.leading and not self.tailing:
            raise NoEdgeEnabledError("at least one of leading/tailing must be enabled")


DEFAULT_OPTIONS = ThrottleOptions()
_OPTION_NAMES = frozenset(f.name for f in fields(ThrottleOptions))


def resolve_options(options: ThrottleOptions | Mapping[str, object] | None) -> ThrottleOptions:
    """Merge user options onto the defaults and validate the result."""

    if options is None:
        resolved = DEFAULT_OPTIONS
    elif isinstance(options, ThrottleOptions):
        resolved = options
    elif isinstance(options, Mapping):
        unknown = sorted(str(key) for key in options if key not in _OPTION_NAMES)
        if unknown:
            raise InvalidOptionsError(f"unknown option(s): {', '.join(unknown)}")
        # Keys given as None fall back to their defaults.
        overrides = {key: value for key, value in options.items() if value is not None}
        resolved = replace(DEFAULT_OPTIONS, **overrides)
    else:
        raise InvalidOptionsError("options must be ThrottleOptions, a mapping, or None")
    resolved.validate()
    return resolved


__all__ = [
    "Jitter",
    "ThrottleOptions",
    "DEFAULT_OPTIONS",
    "resolve_options",
]
