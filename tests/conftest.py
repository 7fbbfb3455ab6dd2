from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.shared.fake_timers import CallCounter, FakeTimeline

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def timeline() -> FakeTimeline:
    return FakeTimeline()


@pytest.fixture
def operation() -> CallCounter:
    return CallCounter()


@pytest.fixture
def make_throttle(timeline: FakeTimeline, operation: CallCounter):
    from flexible_throttle import FlexibleThrottle

    def _make(default_timeout_ms: float = 1000, **options) -> FlexibleThrottle:
        return FlexibleThrottle(
            operation,
            default_timeout_ms,
            options or None,
            clock=timeline.now,
            scheduler=timeline,
        )

    return _make
