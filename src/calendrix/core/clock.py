"""
calendrix.core.clock
--------------------
Injectable time sources. Nothing else in the package reads the wall clock;
``Instant.now`` takes a clock argument instead.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now_millis(self) -> int:
        """Milliseconds since 1970-01-01T00:00:00Z."""
        ...


class SystemClock:
    """Production clock backed by the operating system."""

    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """
    Test clock returning a settable value.

        clock = FixedClock(1_700_000_000_000)
        clock.advance(60_000)
    """

    def __init__(self, millis: int = 0) -> None:
        self._millis = int(millis)

    def now_millis(self) -> int:
        return self._millis

    def set(self, millis: int) -> None:
        self._millis = int(millis)

    def advance(self, millis: int) -> None:
        self._millis += int(millis)
