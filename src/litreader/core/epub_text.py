"""Plain-text extraction from EPUB files."""

import warnings
from pathlib import Path

import ebooklib
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from ebooklib import epub

# EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


def _html_to_lines(content: bytes) -> list[str]:
    soup = BeautifulSoup(content, "lxml")
    for tag in soup(["script", "style", "nav"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    return [line.strip() for line in text.split("\n") if line.strip()]


def extract_epub_text(epub_path: Path) -> str:
    """Extract document text in spine (reading) order.

    Each block of markup becomes its own line so headings stay on lines of
    their own for pattern detection.
    """
    book = epub.read_epub(str(epub_path))
    lines: list[str] = []

    for item_id, _linear in book.spine:
        item = book.get_item_with_id(item_id)
        if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
            continue
        lines.extend(_html_to_lines(item.get_content()))

    return "\n".join(lines)
