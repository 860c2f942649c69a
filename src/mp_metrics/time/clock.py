"""Time – MonotonicClock protocol + implementations."""
from __future__ import annotations

import time
from typing import Protocol


class MonotonicClock(Protocol):
    """Port: monotonic clock used for duration measurement."""

    def monotonic(self) -> float: ...


class SystemMonotonicClock:
    """Production clock that delegates to ``time.perf_counter``."""

    def monotonic(self) -> float:
        return time.perf_counter()


class ManualClock:
    """Test clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def monotonic(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        """Move the clock forward by *seconds*."""
        if seconds < 0:
            raise ValueError("ManualClock cannot go backwards")
        self._now += seconds


__all__ = ["ManualClock", "MonotonicClock", "SystemMonotonicClock"]
