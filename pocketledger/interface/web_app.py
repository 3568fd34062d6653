"""Mini README: FastAPI-powered ledger dashboard and JSON API.

Structure:
    * create_application - application factory wiring routes and templates.
    * HTML routes - dashboard, form submit, and form delete with redirect-after-post.
    * API routes - JSON snapshot, create, and delete under ``/api``.

The browser cookie is the only storage. Each request builds a ``CookieSlot``
from the incoming cookies, loads a ``LedgerStore`` through it, applies the
requested change, and attaches the rewritten cookie to the response. Every
mutating route answers with a full snapshot (list for the current filter plus
totals) so clients simply re-render.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlencode

from fastapi import FastAPI, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from ..configuration import PocketLedgerSettings, get_settings
from ..errors import ValidationError
from ..finance import (
    LedgerFilter,
    LedgerSnapshot,
    LedgerStore,
    TransactionType,
    format_currency,
    format_signed_amount,
)
from ..logging_utils import get_logger
from ..storage import CookieSlot, LedgerPersistence

LOGGER = get_logger(__name__)

INVALID_INPUT_MESSAGE = "Please enter a valid description and amount."


class TransactionPayload(BaseModel):
    """JSON body accepted by ``POST /api/transactions``."""

    type: str = Field("income", description="Either 'income' or 'expense'.")
    description: str = Field("", description="What the money was for.")
    amount: Union[float, str] = Field(..., description="Positive amount, number or text.")
    filter: str = Field("all", description="Filter applied to the returned snapshot.")


def create_application(settings: Optional[PocketLedgerSettings] = None) -> FastAPI:
    """Create the FastAPI application with routes and templates."""

    settings = settings or get_settings()
    app = FastAPI(title="PocketLedger", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["currency"] = format_currency
    templates.env.filters["signed_amount"] = format_signed_amount
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    def open_store(request: Request) -> Tuple[LedgerStore, CookieSlot]:
        """Load the requesting browser's ledger from its cookie."""

        slot = CookieSlot(
            request.cookies,
            max_value_bytes=settings.cookie_max_bytes,
            samesite=settings.cookie_samesite,
        )
        store = LedgerStore(LedgerPersistence.from_settings(slot, settings))
        return store, slot

    def render_dashboard(
        request: Request,
        snapshot: LedgerSnapshot,
        *,
        error: Optional[str] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        context: Dict[str, Any] = {
            "snapshot": snapshot,
            "filters": [option.value for option in LedgerFilter],
            "transaction_types": [option.value for option in TransactionType],
            "error": error,
        }
        return templates.TemplateResponse(
            request, "dashboard.html", context, status_code=status_code
        )

    def dashboard_url(ledger_filter: LedgerFilter) -> str:
        return "/?" + urlencode({"filter": ledger_filter.value})

    def finish_mutation(request: Request, store: LedgerStore, slot: CookieSlot) -> Response:
        """Redirect back to the dashboard, or render in place to show a storage warning."""

        if store.persistence_warning:
            response: Response = render_dashboard(request, store.snapshot())
        else:
            response = RedirectResponse(dashboard_url(store.current_filter), status_code=303)
        return slot.apply(response)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(
        request: Request,
        ledger_filter: LedgerFilter = Query(LedgerFilter.ALL, alias="filter"),
    ) -> HTMLResponse:
        """Render the ledger with totals for the selected filter."""

        store, _ = open_store(request)
        store.set_filter(ledger_filter)
        snapshot = store.snapshot()
        LOGGER.debug(
            "Rendering dashboard filter=%s entries=%s",
            snapshot.ledger_filter.value,
            len(snapshot.transactions),
        )
        return render_dashboard(request, snapshot)

    @app.post("/transactions")
    async def submit_transaction(
        request: Request,
        transaction_type: str = Form("income", alias="type"),
        description: str = Form(""),
        amount: str = Form(""),
        ledger_filter: str = Form("all", alias="filter"),
    ) -> Response:
        """Handle the add-transaction form."""

        store, slot = open_store(request)
        try:
            store.set_filter(ledger_filter)
            store.add(transaction_type, description, amount)
        except ValidationError as error:
            LOGGER.info("Rejected transaction form: %s", error)
            return render_dashboard(
                request,
                store.snapshot(),
                error=f"{INVALID_INPUT_MESSAGE} ({error})",
                status_code=400,
            )
        return finish_mutation(request, store, slot)

    @app.post("/transactions/{transaction_id}/delete")
    async def delete_transaction_form(
        request: Request,
        transaction_id: int,
        ledger_filter: str = Form("all", alias="filter"),
    ) -> Response:
        """Handle the delete button on a list entry."""

        store, slot = open_store(request)
        try:
            store.set_filter(ledger_filter)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        if not store.remove(transaction_id):
            return RedirectResponse(dashboard_url(store.current_filter), status_code=303)
        return finish_mutation(request, store, slot)

    @app.get("/api/transactions")
    async def list_transactions(
        request: Request,
        ledger_filter: LedgerFilter = Query(LedgerFilter.ALL, alias="filter"),
    ) -> JSONResponse:
        """Return the filtered list and totals."""

        store, _ = open_store(request)
        return JSONResponse(store.snapshot(ledger_filter).as_dict())

    @app.post("/api/transactions")
    async def create_transaction(request: Request, payload: TransactionPayload) -> JSONResponse:
        """Record a transaction and return it alongside the refreshed snapshot."""

        store, slot = open_store(request)
        pushed: List[LedgerSnapshot] = []
        store.subscribe(pushed.append)
        try:
            store.set_filter(payload.filter)
            transaction = store.add(payload.type, payload.description, payload.amount)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        body = {"transaction": transaction.as_dict(), **pushed[-1].as_dict()}
        return slot.apply(JSONResponse(body, status_code=201))

    @app.delete("/api/transactions/{transaction_id}")
    async def delete_transaction(
        request: Request,
        transaction_id: int,
        ledger_filter: LedgerFilter = Query(LedgerFilter.ALL, alias="filter"),
    ) -> JSONResponse:
        """Remove a transaction; unknown ids are not an error."""

        store, slot = open_store(request)
        store.set_filter(ledger_filter)
        pushed: List[LedgerSnapshot] = []
        store.subscribe(pushed.append)
        removed = store.remove(transaction_id)
        snapshot = pushed[-1] if pushed else store.snapshot()
        return slot.apply(JSONResponse({"removed": removed, **snapshot.as_dict()}))

    return app
