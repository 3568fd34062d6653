"""Mini README: Interactive interfaces for PocketLedger.

Exports the FastAPI application factory that powers the browser dashboard
and the JSON API.
"""

from .web_app import create_application

__all__ = ["create_application"]
