"""Mini README: Display helpers for ledger amounts.

Amounts render with two decimals and a dollar sign; list entries carry a
``+`` or ``-`` prefix depending on the transaction type. These helpers are
registered as Jinja filters by the web interface and reused by the JSON API.
"""

from __future__ import annotations

from .ledger import Transaction, TransactionType


def format_currency(amount: float) -> str:
    """Render ``amount`` as ``$1234.50`` (negative balances as ``-$12.00``)."""

    if amount < 0:
        return f"-${abs(amount):.2f}"
    return f"${amount:.2f}"


def format_signed_amount(transaction: Transaction) -> str:
    """Render a list entry amount as ``+$10.00`` for income or ``-$10.00`` for expenses."""

    sign = "+" if transaction.transaction_type is TransactionType.INCOME else "-"
    return f"{sign}${transaction.amount:.2f}"
