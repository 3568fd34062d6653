"""Mini README: Exception taxonomy shared by the ledger and its storage.

Structure:
    * LedgerError - base class so callers can catch every ledger failure.
    * ValidationError - rejected user input; surfaced to the user.
    * PersistenceParseError - stored blob could not be decoded or validated.
    * PersistenceWriteError - the storage slot refused a write.

None of these are fatal. Only ``ValidationError`` reaches end users directly;
the persistence errors are logged and the application keeps working with
in-memory state.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger failures."""


class ValidationError(LedgerError, ValueError):
    """Raised when a transaction or filter fails input validation."""


class PersistenceParseError(LedgerError):
    """Raised when a persisted ledger blob is unreadable or malformed."""


class PersistenceWriteError(LedgerError):
    """Raised when a storage slot rejects a ledger write."""
