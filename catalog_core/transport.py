"""HTTP request issuing for the catalog client."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import aiohttp

from .errors import TransportError

LOGGER = logging.getLogger(__name__)


class RequestIssuer(Protocol):
    """Anything able to run a GET request and hand back decoded JSON."""

    async def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        ...


def encode_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Render parameter values as query-string text.

    Booleans are sent as ``1``/``0`` and ``None`` values are left out.
    """

    encoded: Dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "1" if value else "0"
        else:
            encoded[key] = str(value)
    return encoded


def _decode_body(body: bytes, charset: str) -> Any:
    try:
        text = body.decode(charset, errors="replace")
    except LookupError:
        text = body.decode("utf-8", errors="replace")
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


class AiohttpRequestIssuer:
    """:class:`RequestIssuer` backed by an :class:`aiohttp.ClientSession`.

    An injected session is used as-is and never closed here; otherwise a
    session is created on first use and closed by :meth:`close` or on leaving
    the ``async with`` block.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 10.0,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = dict(headers or {"Accept": "application/json"})

    async def __aenter__(self) -> "AiohttpRequestIssuer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if not self._owns_session or self._session is None:
            return
        if not self._session.closed:
            await self._session.close()
        self._session = None

    async def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        query = encode_params(params)
        LOGGER.debug("GET %s %s", url, query)
        session = self._get_session()
        try:
            async with session.get(url, params=query) as response:
                body = await response.read()
                charset = response.charset or "utf-8"
                if response.status >= 400:
                    LOGGER.debug("GET %s failed with status %s", url, response.status)
                    raise TransportError(
                        f"Request to {url} failed with status {response.status}",
                        status=response.status,
                        payload=_decode_body(body, charset),
                        url=url,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            text = body.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise TransportError(
                f"Response from {url} is not valid {charset} text",
                status=response.status,
                url=url,
            ) from exc

        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise TransportError(
                f"Response from {url} is not valid JSON",
                status=response.status,
                payload=text,
                url=url,
            ) from exc
