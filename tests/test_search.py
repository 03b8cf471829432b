"""Tests for the search operation and its history wiring."""
from __future__ import annotations

import pytest

from catalog_core.errors import TokenUnavailableError, TransportError
from catalog_core.history import SearchHistoryStore
from catalog_core.models import NameHistoryEntry
from catalog_core.search import SearchService
from stubs import StubRequester, StubTokenProvider


@pytest.mark.anyio
async def test_generic_search_fetches_token_then_searches(settings) -> None:
    requester = StubRequester({"companies": [{"id": 1, "name": "Acme"}], "tags": ["pizza"]})
    tokens = StubTokenProvider("abc")
    service = SearchService(settings, requester, tokens)

    result = await service.generic_search("piz")

    assert tokens.fetches == 1
    assert requester.calls == [("https://api.example.com/search", {"q": "piz"})]
    assert [company.name for company in result.companies] == ["Acme"]
    assert result.tags == ["pizza"]


@pytest.mark.anyio
async def test_generic_search_stops_when_token_fails(settings) -> None:
    requester = StubRequester({})
    service = SearchService(settings, requester, StubTokenProvider(fail=True))

    with pytest.raises(TokenUnavailableError):
        await service.generic_search("piz")

    assert requester.calls == []


@pytest.mark.anyio
async def test_generic_search_propagates_transport_errors(settings) -> None:
    error = TransportError("timeout")
    service = SearchService(settings, StubRequester(error), StubTokenProvider())

    with pytest.raises(TransportError) as excinfo:
        await service.generic_search("piz")

    assert excinfo.value is error


def test_history_store_is_built_from_settings(settings) -> None:
    service = SearchService(settings, StubRequester(), StubTokenProvider())

    assert service.history.path == settings.history_path
    service.add_to_history(NameHistoryEntry("pizza"))
    assert service.get_saved_history() == [NameHistoryEntry("pizza")]


def test_injected_history_store_is_used(settings, tmp_path) -> None:
    store = SearchHistoryStore(tmp_path / "other.json")
    service = SearchService(settings, StubRequester(), StubTokenProvider(), history=store)

    service.add_to_history(NameHistoryEntry("sushi"))

    assert store.history == [NameHistoryEntry("sushi")]
