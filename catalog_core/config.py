"""Runtime settings for the catalog client."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_OFFER_HOST_URL = "https://app.wakup.net/"
DEFAULT_REQUEST_TIMEOUT = 10.0
MAX_HISTORY = 10


def _default_history_path(environ: Mapping[str, str]) -> Path:
    cache_root = environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(cache_root) / "catalog_core" / "search_history.json"


def _normalise_host(value: str) -> str:
    value = value.strip()
    if not value.endswith("/"):
        value += "/"
    return value


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT


@dataclass
class CatalogSettings:
    """Connection and storage settings shared by the catalog services."""

    offer_host_url: str = DEFAULT_OFFER_HOST_URL
    api_key: Optional[str] = None
    user_token: Optional[str] = None
    history_path: Optional[Path] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_history: int = MAX_HISTORY

    def __post_init__(self) -> None:
        self.offer_host_url = _normalise_host(self.offer_host_url)
        if self.history_path is None:
            self.history_path = _default_history_path(os.environ)
        else:
            self.history_path = Path(self.history_path)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CatalogSettings":
        """Read settings from ``CATALOG_*`` environment variables."""

        env = os.environ if environ is None else environ
        history_path = env.get("CATALOG_HISTORY_PATH")
        return cls(
            offer_host_url=env.get("CATALOG_OFFER_HOST_URL") or DEFAULT_OFFER_HOST_URL,
            api_key=env.get("CATALOG_API_KEY") or None,
            user_token=env.get("CATALOG_USER_TOKEN") or None,
            history_path=Path(history_path) if history_path else _default_history_path(env),
            request_timeout=_parse_timeout(env.get("CATALOG_REQUEST_TIMEOUT")),
        )

    def url_for(self, path: str) -> str:
        return f"{self.offer_host_url}{path.lstrip('/')}"
