"""Resolve documents to decoded text, choosing a reader by file format."""

from abc import ABC, abstractmethod
from pathlib import Path

from litreader.core.pages import page_count
from litreader.models.document import Document, DocumentFormat

SUPPORTED_FORMATS = {
    ".txt": DocumentFormat.TXT,
    ".text": DocumentFormat.TXT,
    ".md": DocumentFormat.TXT,
    ".epub": DocumentFormat.EPUB,
    ".pdf": DocumentFormat.PDF,
}


class ContentProvider(ABC):
    """Source of decoded document text."""

    @abstractmethod
    def get_text(self, document_id: str) -> str:
        """Return the full text of a document."""
        pass


def detect_format(path: Path) -> DocumentFormat | None:
    """Detect file format from extension, or None if unsupported."""
    return SUPPORTED_FORMATS.get(path.suffix.lower())


def is_supported(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_FORMATS


def load_document(
    path: Path, chars_per_page: int = 2000, document_id: str | None = None
) -> Document:
    """Read a file into a Document.

    Args:
        path: Path to a .txt, .epub or .pdf file
        chars_per_page: Page size used to paginate plain text
        document_id: Defaults to the file name

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is not supported
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    file_format = detect_format(path)
    if file_format is None:
        supported = ", ".join(SUPPORTED_FORMATS.keys())
        raise ValueError(
            f"Unsupported format: {path.suffix}. Supported formats: {supported}"
        )

    if file_format == DocumentFormat.PDF:
        from litreader.core.pdf_text import extract_pdf_text

        text, total_pages = extract_pdf_text(path)
    elif file_format == DocumentFormat.EPUB:
        from litreader.core.epub_text import extract_epub_text

        text = extract_epub_text(path)
        total_pages = page_count(len(text), chars_per_page)
    else:
        text = path.read_text(encoding="utf-8")
        total_pages = page_count(len(text), chars_per_page)

    return Document(
        id=document_id or path.name,
        title=path.stem,
        format=file_format,
        text=text,
        total_pages=total_pages,
        path=str(path),
    )


class FileContentProvider(ContentProvider):
    """Content provider backed by files on disk, keyed by file name."""

    def __init__(self, paths: list[Path], chars_per_page: int = 2000):
        self.chars_per_page = chars_per_page
        self._paths: dict[str, Path] = {}
        self._documents: dict[str, Document] = {}

        for path in paths:
            # The same file listed twice is one document
            if path in self._paths.values():
                continue

            document_id = path.name
            if document_id in self._paths:
                document_id = str(path)
            self._paths[document_id] = path

    @property
    def document_ids(self) -> list[str]:
        return list(self._paths.keys())

    def get_document(self, document_id: str) -> Document:
        """Load (once) and return a document.

        Raises:
            KeyError: If the id is unknown
        """
        if document_id not in self._documents:
            path = self._paths[document_id]
            self._documents[document_id] = load_document(
                path, self.chars_per_page, document_id=document_id
            )
        return self._documents[document_id]

    def get_text(self, document_id: str) -> str:
        return self.get_document(document_id).text

    def corpus(self) -> list[Document]:
        """All documents in registration order."""
        return [self.get_document(doc_id) for doc_id in self._paths]
