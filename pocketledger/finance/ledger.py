"""Mini README: Income and expense ledger backed by a persistence adapter.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * LedgerFilter - read-time selector (all/income/expense) for list views.
    * Transaction - immutable dataclass storing a single ledger entry.
    * LedgerSummary / LedgerSnapshot - totals and full render payloads.
    * LedgerView - lazy, restartable, filtered iteration over the ledger.
    * LedgerStore - owns the ordered records and coordinates persistence.

The store is the single owner of ledger state. Every mutation re-serialises
the whole ledger through the optional persistence adapter and then pushes a
fresh snapshot to subscribers, so presentation code never reads ambient
globals. Persistence is best effort: write failures are logged and exposed
as a warning while the in-memory records stay authoritative.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
)

from ..errors import PersistenceWriteError, ValidationError
from ..logging_utils import get_logger
from .identifiers import TimestampIdGenerator

if TYPE_CHECKING:
    from ..storage.persistence import LedgerPersistence

LOGGER = get_logger(__name__)

AmountInput = Union[str, int, float]


class TransactionType(str, Enum):
    """Enumerate the supported transaction categories."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            return cls(normalised)
        except ValueError as error:
            raise ValidationError(f"Unsupported transaction type: {value}") from error


class LedgerFilter(str, Enum):
    """View selector applied when listing transactions."""

    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "LedgerFilter":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as error:
            raise ValidationError(f"Unsupported filter: {value}") from error

    def matches(self, transaction: "Transaction") -> bool:
        if self is LedgerFilter.ALL:
            return True
        return transaction.transaction_type.value == self.value


@dataclass(slots=True, frozen=True)
class Transaction:
    """Represent a single ledger entry."""

    transaction_id: int
    transaction_type: TransactionType
    description: str
    amount: float

    @property
    def signed_amount(self) -> float:
        """Amount with expenses negated, used for display and balance maths."""

        if self.transaction_type is TransactionType.EXPENSE:
            return -self.amount
        return self.amount

    def as_dict(self) -> Dict[str, object]:
        """Export the record in its persisted ``{id, type, description, amount}`` shape."""

        return {
            "id": self.transaction_id,
            "type": self.transaction_type.value,
            "description": self.description,
            "amount": self.amount,
        }


@dataclass(slots=True, frozen=True)
class LedgerSummary:
    """Running totals computed from the current ledger."""

    total_income: float
    total_expenses: float
    balance: float

    @property
    def balance_status(self) -> str:
        """Return ``positive``, ``negative`` or ``zero`` for colouring the balance."""

        if self.balance > 0:
            return "positive"
        if self.balance < 0:
            return "negative"
        return "zero"

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_income": self.total_income,
            "total_expenses": self.total_expenses,
            "balance": self.balance,
            "balance_status": self.balance_status,
        }


@dataclass(slots=True, frozen=True)
class LedgerSnapshot:
    """Everything the presentation layer needs for a full re-render."""

    ledger_filter: LedgerFilter
    transactions: Tuple[Transaction, ...]
    summary: LedgerSummary
    persistence_warning: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "filter": self.ledger_filter.value,
            "transactions": [transaction.as_dict() for transaction in self.transactions],
            "summary": self.summary.as_dict(),
            "persistence_warning": self.persistence_warning,
        }


class LedgerView:
    """Filtered view over the store's records in insertion order.

    The view holds a reference to the live record list, not a copy. Each call
    to ``iter`` starts a new pass, so the same view can be iterated repeatedly
    and always reflects the ledger at iteration time.
    """

    def __init__(self, records: List[Transaction], ledger_filter: LedgerFilter) -> None:
        self._records = records
        self.ledger_filter = ledger_filter

    def __iter__(self) -> Iterator[Transaction]:
        return (record for record in self._records if self.ledger_filter.matches(record))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"LedgerView(filter={self.ledger_filter.value!r}, size={len(self)})"


def _validate_description(description: object) -> str:
    if not isinstance(description, str):
        raise ValidationError("Description must be text.")
    cleaned = description.strip()
    if not cleaned:
        raise ValidationError("Please enter a description.")
    return cleaned


def _parse_amount(amount: object) -> float:
    """Parse text or numeric input into a finite, positive float."""

    if isinstance(amount, bool):
        raise ValidationError("Amount must be a number.")
    if isinstance(amount, (int, float)):
        try:
            parsed = float(amount)
        except OverflowError as error:
            raise ValidationError("Amount is too large.") from error
    elif isinstance(amount, str):
        try:
            parsed = float(amount.strip())
        except ValueError as error:
            raise ValidationError(f"Amount {amount!r} is not a number.") from error
    else:
        raise ValidationError("Amount must be a number.")
    if not math.isfinite(parsed) or parsed <= 0:
        raise ValidationError("Amount must be greater than zero.")
    return parsed


SnapshotListener = Callable[[LedgerSnapshot], None]


class LedgerStore:
    """Own the ordered ledger and keep persisted state in step with it."""

    def __init__(
        self,
        persistence: Optional["LedgerPersistence"] = None,
        *,
        transactions: Optional[Iterable[Transaction]] = None,
        id_generator: Optional[Callable[[], int]] = None,
    ) -> None:
        self._persistence = persistence
        self._records: List[Transaction] = []
        self._listeners: List[SnapshotListener] = []
        self._current_filter = LedgerFilter.ALL
        self._persistence_warning: Optional[str] = None

        if transactions is None and persistence is not None:
            transactions = persistence.load()
        for transaction in transactions or ():
            self._register(transaction)

        self._next_id = id_generator or TimestampIdGenerator()
        if isinstance(self._next_id, TimestampIdGenerator):
            self._next_id.observe(record.transaction_id for record in self._records)
        LOGGER.debug("Ledger store initialised with %s transactions", len(self._records))

    def _register(self, transaction: Transaction) -> None:
        """Append a record ensuring identifiers remain unique."""

        if any(record.transaction_id == transaction.transaction_id for record in self._records):
            raise ValidationError(f"Transaction {transaction.transaction_id} already exists.")
        self._records.append(transaction)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def current_filter(self) -> LedgerFilter:
        return self._current_filter

    @property
    def persistence_warning(self) -> Optional[str]:
        """Message from the last failed write, or ``None`` once a write succeeds."""

        return self._persistence_warning

    def subscribe(self, listener: SnapshotListener) -> None:
        """Register a callback receiving a fresh snapshot after every mutation."""

        self._listeners.append(listener)

    def add(
        self,
        transaction_type: Union[str, TransactionType],
        description: str,
        amount: AmountInput,
    ) -> Transaction:
        """Validate input and append a new transaction.

        Raises ``ValidationError`` without touching the ledger when any field
        is invalid.
        """

        validated_type = TransactionType.from_str(transaction_type)
        cleaned_description = _validate_description(description)
        parsed_amount = _parse_amount(amount)
        running_total = sum(
            record.amount for record in self._records if record.transaction_type is validated_type
        )
        if not math.isfinite(running_total + parsed_amount):
            raise ValidationError(
                f"Amount would push total {validated_type.value} beyond the representable range."
            )
        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=validated_type,
            description=cleaned_description,
            amount=parsed_amount,
        )
        self._register(transaction)
        LOGGER.info(
            "Recorded %s %s (%.2f)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.amount,
        )
        self._after_mutation()
        return transaction

    def remove(self, transaction_id: int) -> int:
        """Remove every record carrying ``transaction_id`` and return how many went."""

        remaining = [record for record in self._records if record.transaction_id != transaction_id]
        removed = len(self._records) - len(remaining)
        if not removed:
            LOGGER.debug("Remove ignored, transaction %s not present", transaction_id)
            return 0
        self._records[:] = remaining
        LOGGER.info("Removed transaction %s", transaction_id)
        self._after_mutation()
        return removed

    def list_transactions(
        self, ledger_filter: Union[str, LedgerFilter] = LedgerFilter.ALL
    ) -> LedgerView:
        """Return a lazy view of transactions matching ``ledger_filter``."""

        return LedgerView(self._records, LedgerFilter.from_str(ledger_filter))

    def set_filter(self, ledger_filter: Union[str, LedgerFilter]) -> LedgerView:
        """Record the filter used for pushed snapshots and return its view."""

        self._current_filter = LedgerFilter.from_str(ledger_filter)
        return self.list_transactions(self._current_filter)

    def summarize(self) -> LedgerSummary:
        """Compute totals from the current records."""

        total_income = sum(
            record.amount
            for record in self._records
            if record.transaction_type is TransactionType.INCOME
        )
        total_expenses = sum(
            record.amount
            for record in self._records
            if record.transaction_type is TransactionType.EXPENSE
        )
        return LedgerSummary(
            total_income=float(total_income),
            total_expenses=float(total_expenses),
            balance=float(total_income - total_expenses),
        )

    def snapshot(self, ledger_filter: Union[str, LedgerFilter, None] = None) -> LedgerSnapshot:
        """Bundle the filtered list and totals for rendering."""

        selected = (
            self._current_filter if ledger_filter is None else LedgerFilter.from_str(ledger_filter)
        )
        return LedgerSnapshot(
            ledger_filter=selected,
            transactions=tuple(self.list_transactions(selected)),
            summary=self.summarize(),
            persistence_warning=self._persistence_warning,
        )

    def _after_mutation(self) -> None:
        self._persist()
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _persist(self) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.save(self._records)
        except PersistenceWriteError as error:
            LOGGER.warning("Ledger changes kept in memory only: %s", error)
            self._persistence_warning = str(error)
        else:
            self._persistence_warning = None
