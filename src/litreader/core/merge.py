"""Threshold, deduplicate and bound chapter candidates."""

from litreader.core.pages import estimate_page
from litreader.models.toc import Chapter, ChapterCandidate

DUPLICATE_DISTANCE = 50


def filter_and_merge(
    candidates: list[ChapterCandidate],
    content: str,
    threshold: float,
    total_pages: int | None = None,
) -> list[Chapter]:
    """Turn candidates into bounded, flat chapters in document order.

    Candidates below the threshold are dropped, then any candidate within
    DUPLICATE_DISTANCE characters of an accepted one. End positions run to
    the next survivor's start, or to the end of the content.
    """
    ordered = sorted(
        candidates, key=lambda c: (c.start_position, -c.confidence)
    )

    accepted: list[ChapterCandidate] = []
    for candidate in ordered:
        if candidate.confidence < threshold:
            continue

        is_duplicate = any(
            abs(existing.start_position - candidate.start_position)
            < DUPLICATE_DISTANCE
            for existing in accepted
        )
        if not is_duplicate:
            accepted.append(candidate)

    content_length = len(content)
    chapters: list[Chapter] = []

    for i, candidate in enumerate(accepted):
        if i + 1 < len(accepted):
            end = accepted[i + 1].start_position
        else:
            end = content_length
        end = max(end, candidate.start_position)

        page = None
        if total_pages:
            page = estimate_page(candidate.start_position, content_length, total_pages)

        chapters.append(
            Chapter(
                id=f"chapter_{i + 1:03d}",
                title=candidate.title,
                level=candidate.level,
                start_position=candidate.start_position,
                end_position=end,
                page_number=page,
                word_count=end - candidate.start_position,
                confidence=candidate.confidence,
                pattern_label=candidate.pattern_label,
            )
        )

    return chapters
