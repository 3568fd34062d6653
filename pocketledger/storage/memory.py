"""Mini README: In-process storage slot.

``MemorySlot`` keeps values in a dictionary and honours expiry against an
injectable clock, which makes it the slot of choice for tests and for
running the ledger outside a browser.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from .base import StorageSlot, utc_now


@dataclass(slots=True)
class SlotEntry:
    value: str
    expires_at: datetime
    path: str


class MemorySlot(StorageSlot):
    """Dictionary-backed slot with expiring entries."""

    slot_name = "memory"

    def __init__(
        self,
        max_value_bytes: Optional[int] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        super().__init__(max_value_bytes)
        self._clock = clock or utc_now
        self.entries: Dict[str, SlotEntry] = {}

    def read(self, key: str) -> Optional[str]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self.entries[key]
            return None
        return entry.value

    def write(self, key: str, value: str, *, expires_at: datetime, path: str = "/") -> None:
        self._check_capacity(key, value)
        self.entries[key] = SlotEntry(value=value, expires_at=expires_at, path=path)
