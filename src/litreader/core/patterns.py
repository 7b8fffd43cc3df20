"""Weighted heading patterns, compiled once per generation."""

import logging
import re
from dataclasses import dataclass

from litreader.models.config import MARKDOWN_LABEL, ChapterPattern

log = logging.getLogger(__name__)


@dataclass
class PatternError:
    """A rule that could not be compiled."""

    label: str
    regex: str
    message: str

    def __str__(self) -> str:
        return f"Pattern '{self.label}' skipped: {self.message} ({self.regex!r})"


@dataclass
class CompiledPattern:
    """A rule with its compiled regex."""

    pattern: ChapterPattern
    regex: re.Pattern[str]


@dataclass
class PatternMatch:
    """Result of matching one line."""

    title: str
    level: int
    weight: float
    label: str


class PatternMatcher:
    """Ordered set of heading rules; the first matching rule wins."""

    def __init__(self, patterns: list[ChapterPattern]):
        self.rules: list[CompiledPattern] = []
        self.errors: list[PatternError] = []

        for pattern in patterns:
            try:
                compiled = re.compile(pattern.regex, re.IGNORECASE)
            except re.error as e:
                error = PatternError(pattern.label, pattern.regex, str(e))
                log.warning(str(error))
                self.errors.append(error)
                continue
            self.rules.append(CompiledPattern(pattern=pattern, regex=compiled))

    def match(self, line: str) -> PatternMatch | None:
        """Match a trimmed line against the rules in declared order."""
        for rule in self.rules:
            if not rule.regex.search(line):
                continue

            level = rule.pattern.level
            title = line

            if rule.pattern.label == MARKDOWN_LABEL:
                hash_count = len(line) - len(line.lstrip("#"))
                level = hash_count
                title = line[hash_count:].strip()

            return PatternMatch(
                title=title,
                level=level,
                weight=rule.pattern.weight,
                label=rule.pattern.label,
            )

        return None
