"""
Identifier Generation

Participant and transaction ids are millisecond timestamps rendered as
text. Two ids requested within the same millisecond would collide, so the
generator never hands out a value lower than or equal to the last one.
"""

import time
from typing import Callable, Optional


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Strictly increasing, timestamp-derived string ids."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """
        Args:
            clock: Returns the current time in milliseconds.
                   Injected by tests for deterministic ids.
        """
        self._clock = clock or _now_ms
        self._last = 0

    def next_id(self) -> str:
        candidate = self._clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)

    def observe(self, existing_id: str) -> None:
        """
        Make sure future ids are greater than an id created elsewhere
        (e.g. loaded from storage). Non-numeric ids are ignored.
        """
        if existing_id.isdigit():
            self._last = max(self._last, int(existing_id))
