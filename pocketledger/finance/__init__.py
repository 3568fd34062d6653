"""Mini README: Ledger state and display helpers for PocketLedger.

This package holds the ledger store that records income and expense
entries, the identifier generator that keeps ids unique, and the currency
formatting used by the dashboard. Persistence lives in ``pocketledger.storage``
and is injected into the store.
"""

from .formatting import format_currency, format_signed_amount
from .identifiers import TimestampIdGenerator
from .ledger import (
    LedgerFilter,
    LedgerSnapshot,
    LedgerStore,
    LedgerSummary,
    LedgerView,
    Transaction,
    TransactionType,
)

__all__ = [
    "LedgerFilter",
    "LedgerSnapshot",
    "LedgerStore",
    "LedgerSummary",
    "LedgerView",
    "TimestampIdGenerator",
    "Transaction",
    "TransactionType",
    "format_currency",
    "format_signed_amount",
]
