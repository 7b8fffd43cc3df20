"""Search history with JSON persistence."""

from litreader.history.manager import HistoryStore, SearchHistory
from litreader.history.models import SearchHistoryEntry, SearchHistoryFile

__all__ = [
    "HistoryStore",
    "SearchHistory",
    "SearchHistoryEntry",
    "SearchHistoryFile",
]
