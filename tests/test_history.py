"""Tests for the file-backed search history."""
from __future__ import annotations

import json

import pytest

from catalog_core.history import SearchHistoryStore
from catalog_core.models import (
    CompanyHistoryEntry,
    LocationHistoryEntry,
    NameHistoryEntry,
    TagHistoryEntry,
    history_entry_from_json,
)


def _names(entries) -> list:
    return [entry.name for entry in entries]


def test_add_inserts_most_recent_first(tmp_path) -> None:
    store = SearchHistoryStore(tmp_path / "history.json")

    store.add_to_history(NameHistoryEntry("pizza"))
    result = store.add_to_history(NameHistoryEntry("sushi"))

    assert _names(result) == ["sushi", "pizza"]
    assert store.get_saved_history() == result


def test_add_existing_entry_moves_it_to_front(tmp_path) -> None:
    store = SearchHistoryStore(tmp_path / "history.json")
    for name in ["a", "b", "c", "d"]:
        store.add_to_history(NameHistoryEntry(name))

    result = store.add_to_history(NameHistoryEntry("b"))

    assert _names(result) == ["b", "d", "c", "a"]


def test_eleventh_entry_evicts_the_oldest(tmp_path) -> None:
    store = SearchHistoryStore(tmp_path / "history.json")
    for index in range(10):
        store.add_to_history(NameHistoryEntry(f"q{index}"))

    result = store.add_to_history(NameHistoryEntry("q10"))

    assert len(result) == 10
    assert result[0] == NameHistoryEntry("q10")
    assert NameHistoryEntry("q0") not in result
    assert len(store.get_saved_history() or []) == 10


def test_different_entry_kinds_are_distinct(tmp_path) -> None:
    store = SearchHistoryStore(tmp_path / "history.json")

    store.add_to_history(NameHistoryEntry("pizza"))
    result = store.add_to_history(TagHistoryEntry("pizza"))

    assert result == [TagHistoryEntry("pizza"), NameHistoryEntry("pizza")]


def test_save_then_load_round_trips(tmp_path) -> None:
    entries = [
        NameHistoryEntry("pizza"),
        CompanyHistoryEntry(id=4, name="Acme"),
        TagHistoryEntry("food"),
        LocationHistoryEntry(name="Sol", address="Puerta del Sol", latitude=40.41, longitude=-3.7),
        LocationHistoryEntry(name="Somewhere"),
    ]
    store = SearchHistoryStore(tmp_path / "history.json")

    store.save_history(entries)

    assert SearchHistoryStore(tmp_path / "history.json").get_saved_history() == entries


def test_history_is_restored_by_a_new_store(tmp_path) -> None:
    path = tmp_path / "history.json"
    SearchHistoryStore(path).add_to_history(NameHistoryEntry("pizza"))

    restored = SearchHistoryStore(path)
    result = restored.add_to_history(NameHistoryEntry("pasta"))

    assert _names(result) == ["pasta", "pizza"]


def test_file_is_a_json_array(tmp_path) -> None:
    path = tmp_path / "nested" / "history.json"
    store = SearchHistoryStore(path)

    store.add_to_history(CompanyHistoryEntry(id=1, name="Acme"))

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"type": "company", "id": 1, "name": "Acme"}
    ]


def test_missing_file_loads_as_none(tmp_path) -> None:
    assert SearchHistoryStore(tmp_path / "absent.json").get_saved_history() is None


@pytest.mark.parametrize("content", [b"{not json", b'{"entries": []}', b"42", b"\xff\xfe"])
def test_unparseable_file_loads_as_none(tmp_path, content: bytes) -> None:
    path = tmp_path / "history.json"
    path.write_bytes(content)

    assert SearchHistoryStore(path).get_saved_history() is None


def test_bad_entries_are_dropped_on_load(tmp_path) -> None:
    path = tmp_path / "history.json"
    path.write_text(
        json.dumps(
            [
                {"type": "name", "name": "ok"},
                {"type": "unknown"},
                "plain string",
                {"type": "company", "id": "x", "name": "bad id"},
                {"type": "tag", "tag": "fine"},
            ]
        ),
        encoding="utf-8",
    )

    assert SearchHistoryStore(path).get_saved_history() == [
        NameHistoryEntry("ok"),
        TagHistoryEntry("fine"),
    ]


def test_add_survives_failing_storage(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = SearchHistoryStore(blocker / "history.json")

    result = store.add_to_history(NameHistoryEntry("pizza"))

    assert result == [NameHistoryEntry("pizza")]
    assert store.history == [NameHistoryEntry("pizza")]


def test_explicit_save_raises_on_failing_storage(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = SearchHistoryStore(blocker / "history.json")

    with pytest.raises(OSError):
        store.save_history([NameHistoryEntry("pizza")])
    assert store.try_save_history([NameHistoryEntry("pizza")]) is False


def test_clear_history(tmp_path) -> None:
    path = tmp_path / "history.json"
    store = SearchHistoryStore(path)
    store.add_to_history(NameHistoryEntry("pizza"))

    store.clear_history()

    assert store.history == []
    assert store.get_saved_history() == []


def test_history_entry_from_json_rejects_non_mappings() -> None:
    assert history_entry_from_json(None) is None
    assert history_entry_from_json(["name", "x"]) is None
    assert history_entry_from_json({"type": "location", "name": "X", "latitude": "north"}) is None
