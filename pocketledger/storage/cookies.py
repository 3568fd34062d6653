"""Mini README: HTTP cookie storage slot for the web interface.

Structure:
    * PendingCookie - a write waiting to be attached to a response.
    * CookieSlot - reads cookies from the incoming request and buffers writes.

Handlers build one ``CookieSlot`` per request, let the ledger store load and
save through it, then call ``apply`` on whichever response they return. The
cookie keeps ``httponly`` off so browser scripts can read the ledger, matching
the standalone widget this service replaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Mapping, Optional

from fastapi.responses import Response

from ..logging_utils import get_logger
from .base import StorageSlot, utc_now

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class PendingCookie:
    """Cookie write buffered until a response exists."""

    value: str
    expires_at: datetime
    max_age: int
    path: str


class CookieSlot(StorageSlot):
    """Slot backed by request cookies with writes flushed onto a response."""

    slot_name = "cookie"

    def __init__(
        self,
        request_cookies: Mapping[str, str],
        *,
        max_value_bytes: Optional[int] = 4096,
        samesite: str = "lax",
        secure: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        super().__init__(max_value_bytes)
        self._request_cookies = dict(request_cookies)
        self._samesite = samesite
        self._secure = secure
        self._clock = clock or utc_now
        self.pending: Dict[str, PendingCookie] = {}

    def read(self, key: str) -> Optional[str]:
        if key in self.pending:
            return self.pending[key].value
        return self._request_cookies.get(key)

    def write(self, key: str, value: str, *, expires_at: datetime, path: str = "/") -> None:
        self._check_capacity(key, value)
        max_age = max(0, int((expires_at - self._clock()).total_seconds()))
        self.pending[key] = PendingCookie(
            value=value, expires_at=expires_at, max_age=max_age, path=path
        )

    def apply(self, response: Response) -> Response:
        """Attach buffered writes to ``response`` as ``Set-Cookie`` headers."""

        for key, cookie in self.pending.items():
            response.set_cookie(
                key,
                cookie.value,
                max_age=cookie.max_age,
                expires=cookie.expires_at,
                path=cookie.path,
                samesite=self._samesite,
                secure=self._secure,
                httponly=False,
            )
            LOGGER.debug("Queued cookie '%s' (%s bytes) on response", key, len(cookie.value))
        return response
