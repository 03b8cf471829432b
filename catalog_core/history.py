"""File-backed history of recent searches."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import MAX_HISTORY
from .models import SearchHistoryEntry, history_entry_from_json

LOGGER = logging.getLogger(__name__)


class SearchHistoryStore:
    """Most-recent-first list of search history entries, persisted as JSON.

    The list never holds two equal entries and never exceeds ``max_entries``.
    It is restored from ``path`` on first use. Reads and writes of the list
    are serialised through a single lock.
    """

    def __init__(self, path: Union[str, Path], max_entries: int = MAX_HISTORY) -> None:
        self.path = Path(path)
        self.max_entries = max_entries
        self._lock = threading.RLock()
        self._entries: Optional[List[SearchHistoryEntry]] = None

    @property
    def history(self) -> List[SearchHistoryEntry]:
        with self._lock:
            return list(self._current())

    def add_to_history(self, entry: SearchHistoryEntry) -> List[SearchHistoryEntry]:
        """Move or insert ``entry`` at the front and persist on a best-effort basis."""

        with self._lock:
            updated = [existing for existing in self._current() if existing != entry]
            updated.insert(0, entry)
            del updated[self.max_entries :]
            self._entries = updated
            self.try_save_history(updated)
            return list(updated)

    def get_saved_history(self) -> Optional[List[SearchHistoryEntry]]:
        """Load the persisted history.

        Returns ``None`` when the file is missing, unreadable or does not hold
        a JSON array. Entries that cannot be rebuilt are skipped.
        """

        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Could not read search history %s: %s", self.path, exc)
            return None
        try:
            data = json.loads(text)
        except ValueError as exc:
            LOGGER.warning("Search history %s is not valid JSON: %s", self.path, exc)
            return None
        if not isinstance(data, list):
            LOGGER.warning("Search history %s does not hold a list", self.path)
            return None

        entries: List[SearchHistoryEntry] = []
        for item in data:
            entry = history_entry_from_json(item)
            if entry is None:
                LOGGER.debug("Dropping unreadable history entry %r", item)
                continue
            entries.append(entry)
        return entries

    def save_history(self, entries: Sequence[SearchHistoryEntry]) -> None:
        """Overwrite the history file with ``entries``; ``OSError`` propagates."""

        snapshot = list(entries)[: self.max_entries]
        payload = json.dumps([entry.to_json() for entry in snapshot], ensure_ascii=False)
        with self._lock:
            self._write_atomically(payload)
            self._entries = snapshot

    def try_save_history(self, entries: Sequence[SearchHistoryEntry]) -> bool:
        try:
            self.save_history(entries)
        except OSError as exc:
            LOGGER.warning("Could not save search history to %s: %s", self.path, exc)
            return False
        return True

    def clear_history(self) -> None:
        with self._lock:
            self._entries = []
            self.try_save_history([])

    def _current(self) -> List[SearchHistoryEntry]:
        if self._entries is None:
            self._entries = self.get_saved_history() or []
        return self._entries

    def _write_atomically(self, payload: str) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
