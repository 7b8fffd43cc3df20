"""Plain-text extraction from PDF files."""

import logging
from pathlib import Path

# Suppress warnings about malformed PDF object references
logging.getLogger("pypdf").setLevel(logging.ERROR)

import pypdf
from pypdf.errors import EmptyFileError, FileNotDecryptedError, PdfReadError


def extract_pdf_text(pdf_path: Path) -> tuple[str, int]:
    """Extract text page by page.

    Returns:
        (text, page_count); pages are joined with newlines

    Raises:
        ValueError: If the PDF is encrypted, empty or corrupted
    """
    try:
        reader = pypdf.PdfReader(str(pdf_path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except FileNotDecryptedError:
        raise ValueError("PDF is encrypted. Please decrypt first.")
    except EmptyFileError:
        raise ValueError("PDF file is empty.")
    except PdfReadError as e:
        raise ValueError(f"PDF appears corrupted: {e}")

    return "\n".join(pages), len(pages)
