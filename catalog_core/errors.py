"""Exception types raised by the catalog client."""
from __future__ import annotations

from typing import Any, Optional


class CatalogError(Exception):
    """Base class for every error raised by :mod:`catalog_core`."""


class TransportError(CatalogError):
    """A remote request failed or returned something that is not JSON.

    The client never interprets these errors; they reach the caller as raised
    by the request issuer.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        payload: Any = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.url = url


class TokenUnavailableError(CatalogError):
    """No user token could be obtained."""


class RedemptionCodeDeniedError(CatalogError):
    """The server refused to hand out a redemption code."""

    def __init__(self, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"Redemption code denied: {reason}")
        self.reason = reason
        self.status = status
