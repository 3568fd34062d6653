"""Mini README: Tests for settings validation and logging helpers."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from pocketledger.configuration import PocketLedgerSettings
from pocketledger.logging_utils import _resolve_level
from run_ledger import browser_url


def test_settings_defaults_match_cookie_contract(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POCKETLEDGER_COOKIE_NAME", raising=False)
    settings = PocketLedgerSettings()

    assert settings.cookie_name == "transactions"
    assert settings.cookie_lifetime_days == 30
    assert settings.cookie_path == "/"
    assert settings.cookie_samesite == "lax"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKETLEDGER_COOKIE_SAMESITE", "Strict")
    monkeypatch.setenv("POCKETLEDGER_ENVIRONMENT", "production")

    settings = PocketLedgerSettings()

    assert settings.cookie_samesite == "strict"
    assert settings.is_production


@pytest.mark.parametrize("field", [{"cookie_samesite": "sometimes"}, {"cookie_path": "app"}])
def test_settings_reject_invalid_cookie_options(field: dict) -> None:
    with pytest.raises(ValidationError):
        PocketLedgerSettings(**field)


def test_log_level_names_resolve() -> None:
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level(logging.WARNING) == logging.WARNING
    with pytest.raises(ValueError):
        _resolve_level("chatty")


def test_browser_url_maps_wildcard_hosts() -> None:
    assert browser_url("0.0.0.0", 8000) == "http://127.0.0.1:8000"
    assert browser_url("example.local", 9000) == "http://example.local:9000"
