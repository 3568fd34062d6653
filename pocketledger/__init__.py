"""Mini README: Core package initializer for PocketLedger.

PocketLedger records income and expense entries, keeps them in a browser
cookie, and renders a filtered list with running totals. The ledger core
lives in ``finance``, persistence in ``storage``, and the web dashboard in
``interface``.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
