"""Data models for search queries and results."""

from pydantic import BaseModel, Field


class SearchQuery(BaseModel):
    """A text or regex query over a corpus."""

    text: str
    use_regex: bool = False
    case_sensitive: bool = False
    whole_words: bool = False
    document_ids: list[str] | None = None  # None = whole corpus
    search_in_content: bool = True
    search_in_bookmarks: bool = True
    search_in_metadata: bool = True


class SearchResult(BaseModel):
    """A single ranked match."""

    document_id: str
    position: int
    context_line: str
    snippet: str
    page: int | None = None
    relevance: float = Field(ge=0.0, le=1.0)
    matched_text: str
    document_title: str = ""


class SearchFailure(BaseModel):
    """A document skipped during a query."""

    document_id: str
    error: str


class SearchReport(BaseModel):
    """Ranked results plus the documents that could not be searched."""

    results: list[SearchResult] = Field(default_factory=list)
    failures: list[SearchFailure] = Field(default_factory=list)

