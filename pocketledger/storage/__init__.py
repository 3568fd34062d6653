"""Mini README: Storage slots and the ledger persistence adapter.

Re-exports the slot abstraction, the in-memory and cookie slots, the blob
codec, and ``LedgerPersistence`` which ties them to the ledger store.
"""

from .base import StorageSlot
from .codec import StoredTransaction, decode_ledger, encode_ledger
from .cookies import CookieSlot
from .memory import MemorySlot
from .persistence import LedgerPersistence

__all__ = [
    "CookieSlot",
    "LedgerPersistence",
    "MemorySlot",
    "StorageSlot",
    "StoredTransaction",
    "decode_ledger",
    "encode_ledger",
]
