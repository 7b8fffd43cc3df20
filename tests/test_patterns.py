"""Tests for heading patterns and candidate detection."""
from litreader.core.detector import detect_candidates
from litreader.core.patterns import PatternMatcher
from litreader.models.config import DEFAULT_PATTERNS, ChapterPattern


class TestPatternMatcher:
    def test_compiles_default_patterns(self) -> None:
        matcher = PatternMatcher(DEFAULT_PATTERNS)
        assert len(matcher.rules) == len(DEFAULT_PATTERNS)
        assert matcher.errors == []

    def test_bad_regex_is_skipped_and_reported(self) -> None:
        patterns = [
            ChapterPattern(regex="(unclosed", level=1, weight=0.9, label="broken"),
            ChapterPattern(regex=r"^Chapter\s+\d+", level=1, weight=0.8, label="english_chapter"),
        ]
        matcher = PatternMatcher(patterns)
        assert len(matcher.rules) == 1
        assert len(matcher.errors) == 1
        assert matcher.errors[0].label == "broken"
        assert "broken" in str(matcher.errors[0])

        match = matcher.match("Chapter 4 Onwards")
        assert match is not None
        assert match.label == "english_chapter"

    def test_case_insensitive(self) -> None:
        match = PatternMatcher(DEFAULT_PATTERNS).match("CHAPTER 3 THE STORM")
        assert match is not None
        assert match.label == "english_chapter"

    def test_first_declared_rule_wins(self) -> None:
        match = PatternMatcher(DEFAULT_PATTERNS).match("1.1 Overview")
        assert match is not None
        assert match.label == "numbered"
        assert match.level == 1

    def test_markdown_level_from_hashes(self) -> None:
        match = PatternMatcher(DEFAULT_PATTERNS).match("### Deep Dive")
        assert match is not None
        assert match.level == 3
        assert match.title == "Deep Dive"

    def test_no_match(self) -> None:
        assert PatternMatcher(DEFAULT_PATTERNS).match("It was a quiet morning.") is None


class TestDetectCandidates:
    def test_positions_track_every_line(self) -> None:
        text = "Intro line here\n\nChapter 1 Start\nbody\n## Sub Heading\n"
        candidates = detect_candidates(text, PatternMatcher(DEFAULT_PATTERNS))

        assert [c.title for c in candidates] == ["Chapter 1 Start", "Sub Heading"]
        assert candidates[0].start_position == 17
        assert candidates[0].level == 1
        assert candidates[1].start_position == 38
        assert candidates[1].level == 2
        assert candidates[1].pattern_label == "markdown"
        assert text[17:].startswith("Chapter 1")
        assert text[38:].startswith("## Sub")

    def test_indented_heading_uses_line_start(self) -> None:
        text = "x\n   Chapter 2 Go\n"
        candidates = detect_candidates(text, PatternMatcher(DEFAULT_PATTERNS))
        assert len(candidates) == 1
        assert candidates[0].start_position == 2
        assert candidates[0].title == "Chapter 2 Go"

    def test_short_lines_skipped(self) -> None:
        text = "1\n#\n\n"
        assert detect_candidates(text, PatternMatcher(DEFAULT_PATTERNS)) == []

    def test_max_depth_drops_deep_headings(self) -> None:
        text = "# Top Level\n### Too Deep\n"
        candidates = detect_candidates(
            text, PatternMatcher(DEFAULT_PATTERNS), max_depth=2
        )
        assert [c.title for c in candidates] == ["Top Level"]

    def test_confidence_within_bounds(self) -> None:
        text = "\n".join(
            ["第一章 开始", "CHAPTER 9.", "1. x.", "# a", "一、总论", "第三节 细节！"]
        )
        for candidate in detect_candidates(text, PatternMatcher(DEFAULT_PATTERNS)):
            assert 0.0 <= candidate.confidence <= 1.0
