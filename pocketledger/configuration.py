"""Mini README: Centralised configuration for PocketLedger.

Structure:
    * PocketLedgerSettings - pydantic-settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Values come from ``POCKETLEDGER_*`` environment variables or a ``.env``
    file. Cookie options control where and for how long the ledger blob is
    kept in the browser; interface options control the uvicorn bind address.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SAMESITE_POLICIES = {"lax", "strict", "none"}


class PocketLedgerSettings(BaseSettings):
    """Runtime configuration for the PocketLedger service."""

    model_config = SettingsConfigDict(
        env_prefix="POCKETLEDGER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling reload and logging defaults.",
    )
    log_level: str = Field("INFO", description="Root log level used by the launcher.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    cookie_name: str = Field(
        "transactions",
        description="Fixed key the serialised ledger is stored under.",
        min_length=1,
    )
    cookie_lifetime_days: int = Field(
        30,
        description="Days until the ledger cookie expires, reset on every write.",
        ge=1,
    )
    cookie_path: str = Field("/", description="Path scope of the ledger cookie.")
    cookie_samesite: str = Field("lax", description="SameSite policy for the ledger cookie.")
    cookie_max_bytes: int = Field(
        4096,
        description=(
            "Largest encoded ledger the cookie slot accepts. Browsers commonly"
            " drop cookies above 4 KiB, so writes beyond this are rejected."
        ),
        ge=64,
    )

    @field_validator("cookie_samesite")
    @classmethod
    def _normalise_samesite(cls, value: str) -> str:
        """Accept any casing but only the three policies browsers understand."""

        normalised = value.strip().lower()
        if normalised not in _SAMESITE_POLICIES:
            raise ValueError(
                f"cookie_samesite must be one of {sorted(_SAMESITE_POLICIES)}, got {value!r}"
            )
        return normalised

    @field_validator("cookie_path")
    @classmethod
    def _require_absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("cookie_path must start with '/'")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> PocketLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PocketLedgerSettings()
