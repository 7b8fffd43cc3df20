"""Title heuristics that adjust a pattern's base weight."""

CHAPTER_KEYWORDS = ("章", "节", "部", "篇", "卷", "chapter", "section", "part")
TERMINAL_PUNCTUATION = ("。", ".", "！", "!")


def clamp_confidence(value: float) -> float:
    """Clamp to [0, 1], rounding away float drift from repeated +-0.1."""
    return max(0.0, min(1.0, round(value, 6)))


def adjust_confidence(title: str, base_confidence: float) -> float:
    """Adjust confidence from title features."""
    confidence = base_confidence

    # Reasonable heading length
    if 3 <= len(title) <= 50:
        confidence += 0.1

    lowered = title.lower()
    if any(keyword in lowered for keyword in CHAPTER_KEYWORDS):
        confidence += 0.1

    # Single-case text reads like body text or shouting
    if title == title.upper() or title == lowered:
        confidence -= 0.1

    if title.endswith(TERMINAL_PUNCTUATION):
        confidence -= 0.1

    return clamp_confidence(confidence)
