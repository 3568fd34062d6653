"""Mini README: Time-derived transaction identifiers.

Structure:
    * TimestampIdGenerator - issues millisecond timestamps that never repeat.

Identifiers are the wall-clock time in milliseconds since the epoch, which
keeps them readable and roughly ordered. When the clock has not advanced
since the previous id (two additions in the same millisecond, or a clock
that stepped backwards) the generator bumps to ``last + 1`` instead of
repeating a value.
"""

from __future__ import annotations

import time
from typing import Callable, Iterable, Optional


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class TimestampIdGenerator:
    """Generate strictly increasing integer ids seeded from the clock."""

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _now_millis
        self._last_issued = 0

    def observe(self, existing_ids: Iterable[int]) -> None:
        """Account for ids already in the ledger so new ids never collide."""

        for existing in existing_ids:
            if existing > self._last_issued:
                self._last_issued = existing

    def __call__(self) -> int:
        candidate = int(self._clock())
        if candidate <= self._last_issued:
            candidate = self._last_issued + 1
        self._last_issued = candidate
        return candidate
