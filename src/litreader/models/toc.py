"""Data models for table of contents structure."""

from datetime import datetime
from enum import Enum
from typing import NamedTuple
from uuid import uuid4

from pydantic import BaseModel, Field


class GenerationMethod(str, Enum):
    """How a table of contents was produced."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"
    HYBRID = "hybrid"
    IMPORTED = "imported"


class ChapterCandidate(BaseModel):
    """An unverified heading detection, prior to filtering."""

    title: str
    level: int
    start_position: int
    confidence: float
    pattern_label: str | None = None  # For pattern statistics


class Chapter(BaseModel):
    """A chapter node in the table of contents."""

    id: str
    title: str
    level: int = 1
    start_position: int
    end_position: int | None = None
    page_number: int | None = None
    word_count: int | None = None  # Characters in [start, end)
    children: list["Chapter"] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    pattern_label: str | None = None

    @property
    def indent_level(self) -> int:
        return max(0, self.level - 1)

    def contains(self, position: int) -> bool:
        """Check if position falls within this chapter's range."""
        if self.end_position is None:
            return position >= self.start_position
        return self.start_position <= position < self.end_position


class TableOfContents(BaseModel):
    """Generated (or edited) table of contents for one document."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    document_id: str
    chapters: list[Chapter] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=datetime.now)
    method: GenerationMethod = GenerationMethod.AUTOMATIC
    confidence: float = 0.0
    generation_time: float = 0.0
    warnings: list[str] = Field(default_factory=list)


class TOCStatistics(BaseModel):
    """Summary numbers for a table of contents."""

    total_chapters: int
    average_chapter_length: int
    deepest_level: int
    generation_time: float
    patterns_matched: dict[str, int] = Field(default_factory=dict)
    confidence_distribution: list[float] = Field(default_factory=list)


class NavigationInfo(NamedTuple):
    """Neighbouring chapters around a reading position."""

    previous: Chapter | None
    current: Chapter | None
    next: Chapter | None
