"""Bounded, deduplicated search history with file persistence."""

import logging
import threading
from pathlib import Path
from typing import NamedTuple

from pydantic import ValidationError

from litreader.history.models import SearchHistoryEntry, SearchHistoryFile

log = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


class HistoryStatistics(NamedTuple):
    total_searches: int
    unique_queries: int
    average_results: float


class HistoryStore:
    """Persists search history as JSON inside a project directory."""

    STORE_DIR = ".litreader"
    HISTORY_FILE = "search_history.json"

    def __init__(self, project_dir: Path):
        self.store_root = project_dir / self.STORE_DIR
        self.history_path = self.store_root / self.HISTORY_FILE

    def load(self) -> list[SearchHistoryEntry]:
        """Load saved entries; unreadable files yield an empty history."""
        if not self.history_path.exists():
            return []

        try:
            data = SearchHistoryFile.model_validate_json(
                self.history_path.read_text(encoding="utf-8")
            )
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            log.warning(f"Ignoring unreadable search history {self.history_path}: {e}")
            return []

        return data.entries

    def save(self, entries: list[SearchHistoryEntry]) -> None:
        """Write entries to disk."""
        self.store_root.mkdir(parents=True, exist_ok=True)
        data = SearchHistoryFile(entries=entries)
        self.history_path.write_text(data.model_dump_json(indent=2), encoding="utf-8")

    def delete(self) -> bool:
        """Remove the history file. Returns True if a file was removed."""
        if not self.history_path.exists():
            return False
        self.history_path.unlink()
        return True


class SearchHistory:
    """Most-recent-first list of past queries.

    Identical query text is kept once, at the head. Mutations are
    serialized with a lock and saved after each change when a store is
    attached.
    """

    def __init__(self, store: HistoryStore | None = None, max_items: int = 50):
        self.store = store
        self.max_items = max_items
        self._lock = threading.Lock()
        self._entries: list[SearchHistoryEntry] = store.load()[:max_items] if store else []

    @property
    def entries(self) -> list[SearchHistoryEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _save(self) -> None:
        if self.store is None:
            return
        try:
            self.store.save(self._entries)
        except OSError as e:
            log.warning(f"Failed to save search history {self.store.history_path}: {e}")

    def record(self, query: str, result_count: int) -> SearchHistoryEntry:
        """Add a query at the head, replacing any entry with the same text."""
        entry = SearchHistoryEntry(query=query, result_count=result_count)

        with self._lock:
            self._entries = [e for e in self._entries if e.query != query]
            self._entries.insert(0, entry)
            del self._entries[self.max_items :]
            self._save()

        return entry

    def remove(self, entry_id: str) -> bool:
        """Remove one entry by id."""
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e.id != entry_id]
            removed = len(self._entries) != before
            if removed:
                self._save()
        return removed

    def clear(self) -> None:
        """Drop all entries and remove the history file."""
        with self._lock:
            self._entries = []
            if self.store is None:
                return
            try:
                self.store.delete()
            except OSError as e:
                log.warning(f"Failed to delete search history {self.store.history_path}: {e}")

    def suggestions(self, text: str) -> list[str]:
        """Past queries containing text (case-insensitive), newest first."""
        if not text:
            return []

        needle = text.lower()
        with self._lock:
            matches = [e.query for e in self._entries if needle in e.query.lower()]
        return matches[:MAX_SUGGESTIONS]

    def statistics(self) -> HistoryStatistics:
        """Totals over the retained history."""
        with self._lock:
            entries = list(self._entries)

        if not entries:
            return HistoryStatistics(0, 0, 0.0)

        return HistoryStatistics(
            total_searches=len(entries),
            unique_queries=len({e.query for e in entries}),
            average_results=sum(e.result_count for e in entries) / len(entries),
        )
