"""Line scanner that emits raw chapter candidates."""

from litreader.core.patterns import PatternMatcher
from litreader.core.scoring import adjust_confidence
from litreader.models.toc import ChapterCandidate

MIN_LINE_LENGTH = 2


def detect_candidates(
    text: str,
    matcher: PatternMatcher,
    max_depth: int | None = None,
) -> list[ChapterCandidate]:
    """Scan text line by line and collect heading candidates.

    Positions are absolute character offsets of the start of each line.
    Every line, skipped or not, advances the offset by its length plus
    the newline.
    """
    candidates: list[ChapterCandidate] = []
    position = 0

    for line in text.split("\n"):
        stripped = line.strip()

        if len(stripped) >= MIN_LINE_LENGTH:
            match = matcher.match(stripped)
            if match and (max_depth is None or match.level <= max_depth):
                candidates.append(
                    ChapterCandidate(
                        title=match.title,
                        level=match.level,
                        start_position=position,
                        confidence=adjust_confidence(match.title, match.weight),
                        pattern_label=match.label,
                    )
                )

        position += len(line) + 1

    return candidates
