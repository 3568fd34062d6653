"""Mini README: Persistence adapter between the ledger and a storage slot.

Structure:
    * LedgerPersistence - saves the full ledger under a fixed key and loads it back.

Every save rewrites the whole ledger and resets the expiry window, so an
actively used ledger never expires. Loading never raises: a missing key or a
blob that fails ``decode_ledger`` yields an empty ledger, and the parse
failure is logged and kept on ``last_error`` for diagnostics.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional

from ..configuration import PocketLedgerSettings
from ..errors import PersistenceParseError
from ..finance.ledger import Transaction
from ..logging_utils import get_logger
from .base import StorageSlot, utc_now
from .codec import decode_ledger, encode_ledger

LOGGER = get_logger(__name__)

DEFAULT_KEY = "transactions"
DEFAULT_LIFETIME = timedelta(days=30)


class LedgerPersistence:
    """Map ledger records to and from a single storage slot entry."""

    def __init__(
        self,
        slot: StorageSlot,
        *,
        key: str = DEFAULT_KEY,
        lifetime: timedelta = DEFAULT_LIFETIME,
        path: str = "/",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.slot = slot
        self.key = key
        self.lifetime = lifetime
        self.path = path
        self._clock = clock or utc_now
        self.last_error: Optional[PersistenceParseError] = None

    @classmethod
    def from_settings(
        cls,
        slot: StorageSlot,
        settings: PocketLedgerSettings,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "LedgerPersistence":
        """Build an adapter using the configured cookie name, lifetime and path."""

        return cls(
            slot,
            key=settings.cookie_name,
            lifetime=timedelta(days=settings.cookie_lifetime_days),
            path=settings.cookie_path,
            clock=clock,
        )

    def save(self, records: Iterable[Transaction]) -> None:
        """Write the whole ledger; raises ``PersistenceWriteError`` if the slot refuses."""

        blob = encode_ledger(records)
        expires_at = self._clock() + self.lifetime
        self.slot.write(self.key, blob, expires_at=expires_at, path=self.path)
        LOGGER.debug("Transactions saved under '%s' until %s", self.key, expires_at.isoformat())

    def load(self) -> List[Transaction]:
        """Return persisted records, or an empty list when absent or unreadable."""

        blob = self.slot.read(self.key)
        if blob is None:
            LOGGER.info("No transactions found under '%s'", self.key)
            return []
        try:
            records = decode_ledger(blob)
        except PersistenceParseError as error:
            LOGGER.error("Error parsing transactions from '%s': %s", self.key, error)
            self.last_error = error
            return []
        self.last_error = None
        LOGGER.debug("Loaded %s transactions from '%s'", len(records), self.key)
        return records
