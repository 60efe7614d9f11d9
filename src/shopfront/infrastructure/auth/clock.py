"""Time sources for token issuance and validation.

Token code never calls ``time.time()`` directly; it asks a clock, so tests
can pin "now" to an exact second.
"""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current Unix time in whole seconds."""

    def now_seconds(self) -> int: ...


class SystemClock:
    """Wall-clock time, read fresh on every call."""

    def now_seconds(self) -> int:
        return int(time.time())

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock that always reports the same instant until advanced.

    Attributes:
        timestamp: Seconds since the Unix epoch returned by ``now_seconds``.
    """

    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp

    def now_seconds(self) -> int:
        return self.timestamp

    def advance(self, seconds: int) -> None:
        """Move the clock forward (or backward, for negative values)."""
        self.timestamp += seconds

    def __repr__(self) -> str:
        return f"FixedClock({self.timestamp})"
