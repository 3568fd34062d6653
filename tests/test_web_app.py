"""Mini README: Tests for the FastAPI dashboard and JSON API.

Structure:
    * test_dashboard_* - HTML rendering, form submission, and validation alerts.
    * test_api_* - create/list/delete round trips through the ledger cookie.
    * test_corrupt_cookie_* / test_oversized_* - storage fallbacks seen over HTTP.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pocketledger.configuration import PocketLedgerSettings
from pocketledger.interface import create_application


@pytest.fixture()
def settings() -> PocketLedgerSettings:
    return PocketLedgerSettings()


@pytest.fixture()
def client(settings: PocketLedgerSettings) -> TestClient:
    return TestClient(create_application(settings))


def test_dashboard_renders_empty_ledger(client: TestClient) -> None:
    """A first visit shows zero totals and the empty-list message."""

    response = client.get("/")

    assert response.status_code == 200
    assert "No transactions yet." in response.text
    assert "$0.00" in response.text
    assert "balance-zero" in response.text


def test_dashboard_form_submit_sets_cookie_and_redirects(client: TestClient) -> None:
    """Submitting the form persists the entry and redirects back to the list."""

    response = client.post(
        "/transactions",
        data={"type": "income", "description": "Salary", "amount": "1000", "filter": "all"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/?filter=all"
    assert "transactions" in response.cookies

    page = client.get(response.headers["location"])
    assert "Salary" in page.text
    assert "+$1000.00" in page.text


def test_dashboard_form_rejects_blank_description(client: TestClient) -> None:
    """Invalid input re-renders the dashboard with an alert and no cookie."""

    response = client.post(
        "/transactions",
        data={"type": "expense", "description": "", "amount": "10", "filter": "all"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert "Please enter a valid description and amount." in response.text
    assert "transactions" not in response.cookies


def test_dashboard_delete_button_removes_entry(client: TestClient) -> None:
    created = client.post(
        "/api/transactions", json={"type": "expense", "description": "Rent", "amount": 400}
    ).json()

    response = client.post(
        f"/transactions/{created['transaction']['id']}/delete", data={"filter": "expense"}
    )

    assert response.status_code == 200
    assert "No transactions yet." in response.text


def test_api_salary_and_rent_scenario(client: TestClient) -> None:
    """Totals and the expense filter match the worked example."""

    first = client.post(
        "/api/transactions", json={"type": "income", "description": "Salary", "amount": 1000.00}
    )
    second = client.post(
        "/api/transactions", json={"type": "expense", "description": "Rent", "amount": "400.00"}
    )

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["summary"]["balance"] == pytest.approx(600.0)

    listing = client.get("/api/transactions", params={"filter": "expense"}).json()
    assert [entry["description"] for entry in listing["transactions"]] == ["Rent"]
    assert listing["summary"]["total_income"] == pytest.approx(1000.0)
    assert listing["summary"]["total_expenses"] == pytest.approx(400.0)
    assert listing["filter"] == "expense"


def test_api_create_returns_snapshot_for_requested_filter(client: TestClient) -> None:
    client.post("/api/transactions", json={"type": "income", "description": "Salary", "amount": 10})

    body = client.post(
        "/api/transactions",
        json={"type": "expense", "description": "Lunch", "amount": 4, "filter": "income"},
    ).json()

    assert body["transaction"]["description"] == "Lunch"
    assert body["filter"] == "income"
    assert [entry["description"] for entry in body["transactions"]] == ["Salary"]


def test_api_rejects_invalid_amount(client: TestClient) -> None:
    response = client.post(
        "/api/transactions", json={"type": "expense", "description": "Rent", "amount": -1}
    )

    assert response.status_code == 400
    assert client.get("/api/transactions").json()["transactions"] == []


def test_api_delete_counts_and_ignores_unknown(client: TestClient) -> None:
    created = client.post(
        "/api/transactions", json={"type": "expense", "description": "Rent", "amount": 400}
    ).json()
    transaction_id = created["transaction"]["id"]

    first = client.delete(f"/api/transactions/{transaction_id}").json()
    second = client.delete(f"/api/transactions/{transaction_id}").json()

    assert first["removed"] == 1
    assert first["transactions"] == []
    assert second["removed"] == 0


def test_api_unknown_filter_is_rejected(client: TestClient) -> None:
    assert client.get("/api/transactions", params={"filter": "transfers"}).status_code == 422


def test_corrupt_cookie_starts_empty(settings: PocketLedgerSettings) -> None:
    """A garbled cookie is treated as an empty ledger rather than an error."""

    client = TestClient(create_application(settings), cookies={"transactions": "garbage"})

    response = client.get("/api/transactions")

    assert response.status_code == 200
    assert response.json()["transactions"] == []


def test_oversized_ledger_reports_warning() -> None:
    """Writes beyond the cookie limit keep the entry for the response and warn."""

    client = TestClient(create_application(PocketLedgerSettings(cookie_max_bytes=256)))

    response = client.post(
        "/api/transactions", json={"type": "income", "description": "x" * 400, "amount": 1}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["persistence_warning"]
    assert len(body["transactions"]) == 1
    assert "transactions" not in response.cookies


def test_api_rejects_amount_that_overflows_totals(client: TestClient) -> None:
    """An amount pushing totals past the float range is a 400, and the cookie keeps the prior entry."""

    first = client.post(
        "/api/transactions", json={"type": "income", "description": "Windfall", "amount": "1e308"}
    )
    second = client.post(
        "/api/transactions", json={"type": "income", "description": "Again", "amount": "1e308"}
    )

    assert first.status_code == 201
    assert second.status_code == 400
    listing = client.get("/api/transactions").json()
    assert [entry["description"] for entry in listing["transactions"]] == ["Windfall"]
    assert listing["summary"]["total_income"] == pytest.approx(1e308)


def test_deeply_nested_cookie_starts_empty(settings: PocketLedgerSettings) -> None:
    client = TestClient(create_application(settings), cookies={"transactions": "%5B" * 20000})

    response = client.get("/")

    assert response.status_code == 200
    assert "No transactions yet." in response.text
