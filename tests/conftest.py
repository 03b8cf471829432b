"""Shared fixtures for the catalog tests."""
from __future__ import annotations

import pytest

from catalog_core.config import CatalogSettings


@pytest.fixture
def anyio_backend() -> str:
    """Restrict anyio tests to the asyncio backend for deterministic behaviour."""

    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> CatalogSettings:
    return CatalogSettings(
        offer_host_url="https://api.example.com/",
        api_key="key-42",
        history_path=tmp_path / "history.json",
    )
