"""Mini README: Entry point CLI for launching the PocketLedger dashboard.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags. Defaults come from the
``POCKETLEDGER_*`` settings and logging is configured before uvicorn starts.
"""

from __future__ import annotations

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch the PocketLedger web dashboard.")


def browser_url(host: str, port: int) -> str:
    """Return a URL a browser can open; wildcard binds map to localhost."""

    browser_host = "127.0.0.1" if host in {"0.0.0.0", "::"} else host
    return f"http://{browser_host}:{port}"


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    typer.echo(
        f"Starting PocketLedger on {effective_host}:{effective_port}.\n"
        f"Open your browser at {browser_url(effective_host, effective_port)}"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not (production or settings.is_production),
    )


if __name__ == "__main__":
    cli()
