"""Data models for loaded documents."""

from enum import Enum

from pydantic import BaseModel, Field


class DocumentFormat(str, Enum):
    """Supported source formats."""

    TXT = "txt"
    EPUB = "epub"
    PDF = "pdf"


class Document(BaseModel):
    """Decoded document text ready for structuring and search."""

    id: str
    title: str
    format: DocumentFormat = DocumentFormat.TXT
    text: str
    total_pages: int = Field(default=1, ge=0)
    path: str | None = None
