"""Character position to page translation."""

import math


def estimate_page(position: int, content_length: int, total_pages: int) -> int | None:
    """Estimate the 1-based page holding a character position.

    Returns None when either the content length or page count is zero.
    """
    if content_length <= 0 or total_pages <= 0:
        return None
    progress = position / content_length
    return max(1, min(total_pages, math.ceil(progress * total_pages)))


def page_count(content_length: int, chars_per_page: int) -> int:
    """Number of pages needed for plain text at a fixed page size."""
    if content_length <= 0:
        return 0
    return math.ceil(content_length / chars_per_page)
