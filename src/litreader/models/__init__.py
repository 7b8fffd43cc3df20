"""Data models."""

from litreader.models.config import (
    DEFAULT_PATTERNS,
    MARKDOWN_LABEL,
    AppConfig,
    ChapterPattern,
    GenerationConfig,
    SearchDefaults,
)
from litreader.models.document import Document, DocumentFormat
from litreader.models.search import (
    SearchFailure,
    SearchQuery,
    SearchReport,
    SearchResult,
)
from litreader.models.toc import (
    Chapter,
    ChapterCandidate,
    GenerationMethod,
    NavigationInfo,
    TableOfContents,
    TOCStatistics,
)

__all__ = [
    # Config models
    "ChapterPattern",
    "DEFAULT_PATTERNS",
    "MARKDOWN_LABEL",
    "GenerationConfig",
    "SearchDefaults",
    "AppConfig",
    # Document models
    "Document",
    "DocumentFormat",
    # TOC models
    "ChapterCandidate",
    "Chapter",
    "GenerationMethod",
    "TableOfContents",
    "TOCStatistics",
    "NavigationInfo",
    # Search models
    "SearchQuery",
    "SearchResult",
    "SearchFailure",
    "SearchReport",
]
