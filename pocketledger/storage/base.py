"""Mini README: Abstract storage slot used to persist the ledger blob.

Structure:
    * StorageSlot - abstract key/value slot with a size limit and expiring writes.

A slot models the bounded storage a browser offers: one text value per key,
an absolute expiry set on every write, a path scope, and a hard cap on the
number of bytes it will hold. Concrete slots live alongside this module.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from ..errors import PersistenceWriteError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


def utc_now() -> datetime:
    """Timezone-aware current time used as the default slot and adapter clock."""

    return datetime.now(timezone.utc)


class StorageSlot(ABC):
    """Base interface for ledger storage backends."""

    slot_name: str = "generic"

    def __init__(self, max_value_bytes: Optional[int] = None) -> None:
        self.max_value_bytes = max_value_bytes
        LOGGER.debug("Initialising %s slot with limit %s bytes", self.slot_name, max_value_bytes)

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value for ``key`` or ``None`` when absent or expired."""

    @abstractmethod
    def write(self, key: str, value: str, *, expires_at: datetime, path: str = "/") -> None:
        """Store ``value`` under ``key`` until ``expires_at``."""

    def _check_capacity(self, key: str, value: str) -> None:
        """Reject writes that would exceed the slot's byte limit."""

        if self.max_value_bytes is None:
            return
        size = len(key.encode("utf-8")) + 1 + len(value.encode("utf-8"))
        if size > self.max_value_bytes:
            raise PersistenceWriteError(
                f"Ledger needs {size} bytes but the {self.slot_name} slot holds at most"
                f" {self.max_value_bytes}; recent changes will not survive a reload."
            )

