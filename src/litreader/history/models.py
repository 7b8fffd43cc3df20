"""Search history data models."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class SearchHistoryEntry(BaseModel):
    """A past query."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    query: str
    timestamp: datetime = Field(default_factory=datetime.now)
    result_count: int = 0


class SearchHistoryFile(BaseModel):
    """On-disk layout of the search history."""

    version: str = "1.0"
    entries: list[SearchHistoryEntry] = Field(default_factory=list)
