"""Plain-text and regex search over a document corpus."""

import bisect
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Sequence

from litreader.core.pages import estimate_page
from litreader.models.document import Document
from litreader.models.search import (
    SearchFailure,
    SearchQuery,
    SearchReport,
    SearchResult,
)

if TYPE_CHECKING:
    from litreader.history.manager import SearchHistory

log = logging.getLogger(__name__)

SNIPPET_CONTEXT = 30
MAX_SNIPPET_LENGTH = 100
WHOLE_WORD_BONUS = 0.3
LINE_START_BONUS = 0.2


# =============================================================================
# Scoring helpers
# =============================================================================


def calculate_relevance(line: str, search_text: str) -> float:
    """Score a plain-text match between 0 and 1.

    Base score is the share of the line taken by the term, plus bonuses
    for a whole-word occurrence and for the line starting with the term.
    Both bonuses compare case-insensitively.
    """
    if not line or not search_text:
        return 0.0

    relevance = len(search_text) / len(line)

    term = search_text.casefold()
    if any(word.casefold() == term for word in line.split()):
        relevance += WHOLE_WORD_BONUS

    if line.casefold().startswith(term):
        relevance += LINE_START_BONUS

    return min(1.0, relevance)


def generate_snippet(line: str, search_text: str, offset: int | None = None) -> str:
    """Cut a window around the match, capped at MAX_SNIPPET_LENGTH.

    If offset is not given, the first case-insensitive occurrence of the
    term is used; without one the snippet is the start of the line.
    """
    if offset is None:
        found = _find_term(line, search_text)
        if found is None:
            return line[:MAX_SNIPPET_LENGTH]
        offset = found.start()

    start = max(0, offset - SNIPPET_CONTEXT)
    end = min(len(line), offset + len(search_text) + SNIPPET_CONTEXT)
    snippet = line[start:end]

    if len(snippet) > MAX_SNIPPET_LENGTH:
        return snippet[:MAX_SNIPPET_LENGTH] + "..."
    return snippet


def _find_term(line: str, search_text: str) -> re.Match[str] | None:
    # Offsets must index the original line; lower() can change its length
    return re.search(re.escape(search_text), line, re.IGNORECASE)


def _matched_text(line: str, search_text: str) -> str:
    found = _find_term(line, search_text)
    if found is None:
        return search_text
    return found.group(0)


# =============================================================================
# Search engine
# =============================================================================


class SearchEngine:
    """Search documents and rank results by relevance.

    If a history is attached, every non-blank query is recorded with its
    result count.
    """

    def __init__(self, history: "SearchHistory | None" = None, max_workers: int = 1):
        self.history = history
        self.max_workers = max(1, max_workers)

    def search(self, query: SearchQuery, corpus: Sequence[Document]) -> list[SearchResult]:
        """Return ranked results; documents that fail are skipped."""
        return self.run(query, corpus).results

    def run(self, query: SearchQuery, corpus: Sequence[Document]) -> SearchReport:
        """Search the corpus and report both results and skipped documents."""
        if not query.text.strip():
            return SearchReport()

        documents = list(corpus)
        if query.document_ids is not None:
            wanted = set(query.document_ids)
            documents = [d for d in documents if d.id in wanted]

        if not query.search_in_content:
            documents = []

        if self.max_workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(
                    executor.map(lambda d: self._search_document(d, query), documents)
                )
        else:
            outcomes = [self._search_document(d, query) for d in documents]

        report = SearchReport()
        for results, failure in outcomes:
            report.results.extend(results)
            if failure:
                report.failures.append(failure)

        # sorted() is stable, so ties keep corpus and position order
        report.results = sorted(report.results, key=lambda r: -r.relevance)

        log.info(
            f"Search {query.text!r}: {len(report.results)} results "
            f"in {len(documents)} documents, {len(report.failures)} skipped"
        )

        if self.history is not None:
            self.history.record(query.text, len(report.results))

        return report

    def _search_document(
        self, document: Document, query: SearchQuery
    ) -> tuple[list[SearchResult], SearchFailure | None]:
        if query.use_regex:
            try:
                pattern = re.compile(query.text)
            except re.error as e:
                log.warning(f"Skipping {document.id}: invalid pattern {query.text!r}: {e}")
                return [], SearchFailure(document_id=document.id, error=str(e))
            return self._search_regex(document, pattern), None

        return self._search_text(document, query), None

    def _search_text(self, document: Document, query: SearchQuery) -> list[SearchResult]:
        results: list[SearchResult] = []
        content = document.text
        search_text = query.text if query.case_sensitive else query.text.lower()
        position = 0

        for line in content.split("\n"):
            search_line = line if query.case_sensitive else line.lower()

            if query.whole_words:
                matched = search_text in search_line.split()
            else:
                matched = search_text in search_line

            if matched:
                results.append(
                    SearchResult(
                        document_id=document.id,
                        position=position,
                        context_line=line,
                        snippet=generate_snippet(line, query.text),
                        page=estimate_page(position, len(content), document.total_pages),
                        relevance=calculate_relevance(line, query.text),
                        matched_text=_matched_text(line, query.text),
                        document_title=document.title,
                    )
                )

            position += len(line) + 1

        return results

    def _search_regex(
        self, document: Document, pattern: re.Pattern[str]
    ) -> list[SearchResult]:
        results: list[SearchResult] = []
        content = document.text
        lines = content.split("\n")

        line_starts: list[int] = []
        offset = 0
        for line in lines:
            line_starts.append(offset)
            offset += len(line) + 1

        for match in pattern.finditer(content):
            matched_text = match.group(0)
            if not matched_text:
                continue

            line_index = bisect.bisect_right(line_starts, match.start()) - 1
            line = lines[line_index]
            in_line = match.start() - line_starts[line_index]

            results.append(
                SearchResult(
                    document_id=document.id,
                    position=match.start(),
                    context_line=line,
                    snippet=generate_snippet(line, matched_text, offset=in_line),
                    page=estimate_page(match.start(), len(content), document.total_pages),
                    relevance=1.0,  # Regex matches are treated as exact hits
                    matched_text=matched_text,
                    document_title=document.title,
                )
            )

        return results
