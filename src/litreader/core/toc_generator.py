"""Table of contents generation with pattern cascade and confidence scoring."""

import logging
import threading
import time
from collections import Counter
from typing import Callable
from uuid import uuid4

from litreader.core.detector import detect_candidates
from litreader.core.hierarchy import build_hierarchy
from litreader.core.merge import filter_and_merge
from litreader.core.patterns import PatternMatcher
from litreader.models.config import GenerationConfig
from litreader.models.document import Document
from litreader.models.toc import (
    Chapter,
    GenerationMethod,
    NavigationInfo,
    TableOfContents,
    TOCStatistics,
)

log = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


# =============================================================================
# Errors
# =============================================================================


class TOCGeneratorError(Exception):
    """Base error for TOC generation."""

    default_message = "TOC generation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoContentFound(TOCGeneratorError):
    default_message = "No document content found"


class InsufficientContent(TOCGeneratorError):
    default_message = "Not enough content to generate a table of contents"


class GenerationTimeout(TOCGeneratorError):
    default_message = "A table of contents is already being generated"


class InvalidConfiguration(TOCGeneratorError):
    default_message = "Invalid configuration"


# =============================================================================
# Tree helpers
# =============================================================================


def flatten(chapters: list[Chapter]) -> list[Chapter]:
    """Depth-first list of every chapter in the forest."""
    result: list[Chapter] = []
    for chapter in chapters:
        result.append(chapter)
        result.extend(flatten(chapter.children))
    return result


def overall_confidence(chapters: list[Chapter]) -> float:
    """Unweighted mean confidence over all chapters at every depth."""
    all_chapters = flatten(chapters)
    if not all_chapters:
        return 0.0
    return sum(c.confidence for c in all_chapters) / len(all_chapters)


def _update_recursive(
    chapters: list[Chapter], chapter_id: str, title: str | None, level: int | None
) -> bool:
    for chapter in chapters:
        if chapter.id == chapter_id:
            if title is not None:
                chapter.title = title
            if level is not None:
                chapter.level = level
            return True
        if _update_recursive(chapter.children, chapter_id, title, level):
            return True
    return False


def _remove_recursive(chapters: list[Chapter], chapter_id: str) -> bool:
    before = len(chapters)
    chapters[:] = [c for c in chapters if c.id != chapter_id]
    removed = len(chapters) != before

    for chapter in chapters:
        if _remove_recursive(chapter.children, chapter_id):
            removed = True
    return removed


def _find_by_position(chapters: list[Chapter], position: int) -> Chapter | None:
    # A parent's range stops at its first child, so children are always
    # searched, not only when the parent contains the position
    for chapter in chapters:
        found = _find_by_position(chapter.children, position)
        if found is not None:
            return found
        if chapter.contains(position):
            return chapter
    return None


# =============================================================================
# Generator
# =============================================================================


class TOCGenerator:
    """Generate and maintain tables of contents.

    One generation may run per instance at a time; overlapping calls are
    rejected with GenerationTimeout rather than queued.
    """

    def __init__(self, config: GenerationConfig | None = None):
        self.config = config or GenerationConfig()
        self._busy = threading.Lock()

    @property
    def is_generating(self) -> bool:
        return self._busy.locked()

    def generate(
        self,
        document_id: str,
        text: str,
        config: GenerationConfig | None = None,
        total_pages: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> TableOfContents:
        """Generate a table of contents from plain text.

        Args:
            document_id: Identifier of the source document
            text: Decoded document text
            config: Overrides the generator's configuration for this call
            total_pages: If set, chapters get estimated page numbers
            on_progress: Receives progress values between 0 and 1

        Raises:
            NoContentFound: If text is empty
            InsufficientContent: If text is shorter than min_chapter_length
            GenerationTimeout: If another generation is in flight
        """
        if not self._busy.acquire(blocking=False):
            raise GenerationTimeout()

        try:
            return self._generate(
                document_id, text, config or self.config, total_pages, on_progress
            )
        finally:
            self._busy.release()

    def generate_for_document(
        self,
        document: Document,
        config: GenerationConfig | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> TableOfContents:
        """Generate from a loaded document.

        EPUB and PDF documents have already been reduced to text, so every
        format goes through plain-text detection.
        """
        return self.generate(
            document.id,
            document.text,
            config=config,
            total_pages=document.total_pages or None,
            on_progress=on_progress,
        )

    def _generate(
        self,
        document_id: str,
        text: str,
        config: GenerationConfig,
        total_pages: int | None,
        on_progress: ProgressCallback | None,
    ) -> TableOfContents:
        report = on_progress or (lambda _: None)
        started = time.perf_counter()
        report(0.0)

        if not text:
            raise NoContentFound()

        if len(text) < config.min_chapter_length:
            raise InsufficientContent(
                f"Content has {len(text)} characters, "
                f"at least {config.min_chapter_length} required"
            )

        report(0.1)

        matcher = PatternMatcher(config.patterns)
        warnings = [str(error) for error in matcher.errors]

        candidates = detect_candidates(text, matcher, config.max_chapter_depth)
        report(0.4)

        flat = filter_and_merge(
            candidates, text, config.confidence_threshold, total_pages
        )
        report(0.6)

        chapters = build_hierarchy(flat)
        report(0.8)

        elapsed = time.perf_counter() - started
        toc = TableOfContents(
            document_id=document_id,
            chapters=chapters,
            method=GenerationMethod.AUTOMATIC,
            confidence=overall_confidence(chapters),
            generation_time=elapsed,
            warnings=warnings,
        )

        log.info(
            f"Generated TOC for {document_id}: {len(candidates)} candidates, "
            f"{len(flat)} chapters, confidence={toc.confidence:.2f}"
        )
        report(1.0)
        return toc

    # -------------------------------------------------------------------------
    # Manual editing
    # -------------------------------------------------------------------------

    @staticmethod
    def new_manual_toc(document_id: str) -> TableOfContents:
        """Create an empty, manually maintained table of contents."""
        return TableOfContents(document_id=document_id, method=GenerationMethod.MANUAL)

    @staticmethod
    def _mark_edited(toc: TableOfContents) -> None:
        if toc.method == GenerationMethod.AUTOMATIC:
            toc.method = GenerationMethod.HYBRID

    def add_chapter(
        self, toc: TableOfContents, title: str, position: int, level: int = 1
    ) -> Chapter:
        """Add a top-level chapter; manual chapters have full confidence."""
        chapter = Chapter(
            id=f"manual_{uuid4().hex[:8]}",
            title=title,
            level=level,
            start_position=position,
            confidence=1.0,
        )
        toc.chapters.append(chapter)
        toc.chapters.sort(key=lambda c: c.start_position)
        self._mark_edited(toc)
        return chapter

    def update_chapter(
        self,
        toc: TableOfContents,
        chapter_id: str,
        title: str | None = None,
        level: int | None = None,
    ) -> bool:
        """Update a chapter anywhere in the tree. Returns True if found."""
        found = _update_recursive(toc.chapters, chapter_id, title, level)
        if found:
            self._mark_edited(toc)
        return found

    def remove_chapter(self, toc: TableOfContents, chapter_id: str) -> bool:
        """Remove a chapter (and its subtree) anywhere in the tree."""
        removed = _remove_recursive(toc.chapters, chapter_id)
        if removed:
            self._mark_edited(toc)
        return removed

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @staticmethod
    def chapter_at(toc: TableOfContents, position: int) -> Chapter | None:
        """Most specific chapter containing a character position."""
        return _find_by_position(toc.chapters, position)

    @staticmethod
    def navigation(toc: TableOfContents, position: int) -> NavigationInfo:
        """Previous, current and next chapter around a position."""
        all_chapters = sorted(flatten(toc.chapters), key=lambda c: c.start_position)

        for index, chapter in enumerate(all_chapters):
            if chapter.end_position is None:
                continue
            if chapter.start_position <= position < chapter.end_position:
                previous = all_chapters[index - 1] if index > 0 else None
                following = (
                    all_chapters[index + 1] if index + 1 < len(all_chapters) else None
                )
                return NavigationInfo(previous, chapter, following)

        return NavigationInfo(None, None, None)

    @staticmethod
    def statistics(toc: TableOfContents) -> TOCStatistics:
        """Summarize chapter counts, lengths, depth and pattern usage."""
        all_chapters = flatten(toc.chapters)
        total_length = sum(c.word_count or 0 for c in all_chapters)
        labels = Counter(c.pattern_label for c in all_chapters if c.pattern_label)

        return TOCStatistics(
            total_chapters=len(all_chapters),
            average_chapter_length=total_length // max(1, len(all_chapters)),
            deepest_level=max((c.level for c in all_chapters), default=0),
            generation_time=toc.generation_time,
            patterns_matched=dict(labels),
            confidence_distribution=[c.confidence for c in all_chapters],
        )

    # -------------------------------------------------------------------------
    # Export / import
    # -------------------------------------------------------------------------

    @staticmethod
    def export_toc(toc: TableOfContents) -> str:
        """Serialize a table of contents to JSON."""
        return toc.model_dump_json(indent=2)

    @staticmethod
    def import_toc(data: str | bytes) -> TableOfContents:
        """Load a table of contents from JSON, marking it as imported."""
        toc = TableOfContents.model_validate_json(data)
        toc.method = GenerationMethod.IMPORTED
        return toc
