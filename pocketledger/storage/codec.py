"""Mini README: Text encoding for the persisted ledger.

Structure:
    * StoredTransaction - pydantic model describing one persisted record.
    * encode_ledger - records -> percent-encoded JSON array.
    * decode_ledger - blob -> validated records, raising PersistenceParseError.

The blob is a JSON array of ``{"id", "type", "description", "amount"}``
objects, percent-encoded so it is a legal cookie value without quoting.
Plain JSON written by older clients decodes too, since percent-decoding
leaves it untouched. Decoding is strict: any syntax error, structural
mismatch, non-positive amount, blank description or repeated id rejects the
whole blob.
"""

from __future__ import annotations

import json
import math
from typing import Iterable, List
from urllib.parse import quote, unquote

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as SchemaError

from ..errors import PersistenceParseError
from ..finance.ledger import Transaction, TransactionType


class StoredTransaction(BaseModel):
    """Persisted shape of a single ledger record."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int = Field(strict=True, gt=0)
    type: TransactionType
    description: str = Field(strict=True)
    amount: float = Field(strict=True, gt=0, allow_inf_nan=False)

    @field_validator("description")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value

    def to_transaction(self) -> Transaction:
        return Transaction(
            transaction_id=self.id,
            transaction_type=self.type,
            description=self.description,
            amount=float(self.amount),
        )


_LEDGER_ADAPTER = TypeAdapter(List[StoredTransaction])


def encode_ledger(records: Iterable[Transaction]) -> str:
    """Serialise ``records`` in order into a cookie-safe text blob."""

    payload = [record.as_dict() for record in records]
    return quote(json.dumps(payload, separators=(",", ":")), safe="")


def decode_ledger(blob: str) -> List[Transaction]:
    """Parse and validate a blob produced by ``encode_ledger``."""

    try:
        text = unquote(blob, errors="strict")
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise PersistenceParseError(f"Stored ledger is not valid JSON: {error}") from error
    except RecursionError as error:
        raise PersistenceParseError("Stored ledger is nested too deeply to parse") from error

    try:
        stored = _LEDGER_ADAPTER.validate_python(payload)
    except SchemaError as error:
        raise PersistenceParseError(
            f"Stored ledger has an unexpected shape ({error.error_count()} problems)"
        ) from error

    seen = set()
    for record in stored:
        if record.id in seen:
            raise PersistenceParseError(f"Stored ledger repeats transaction id {record.id}")
        seen.add(record.id)
    records = [record.to_transaction() for record in stored]
    for transaction_type in TransactionType:
        total = sum(record.amount for record in records if record.transaction_type is transaction_type)
        if not math.isfinite(total):
            raise PersistenceParseError(f"Stored {transaction_type.value} total is not finite")
    return records
