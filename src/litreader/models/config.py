"""Configuration models for TOC generation and search."""

from pydantic import BaseModel, ConfigDict, Field

MARKDOWN_LABEL = "markdown"


class ChapterPattern(BaseModel):
    """Weighted rule for recognizing a heading line."""

    model_config = ConfigDict(frozen=True)

    regex: str
    level: int  # 0 = derive from heading markers (markdown)
    weight: float = Field(ge=0.0, le=1.0)
    label: str


DEFAULT_PATTERNS: list[ChapterPattern] = [
    ChapterPattern(
        regex=r"^第[一二三四五六七八九十\d]+[章节回卷部]",
        level=1,
        weight=0.9,
        label="chinese_chapter",
    ),
    ChapterPattern(regex=r"^Chapter\s+\d+", level=1, weight=0.8, label="english_chapter"),
    ChapterPattern(regex=r"^\d+\.", level=1, weight=0.7, label="numbered"),
    ChapterPattern(
        regex=r"^[一二三四五六七八九十]、", level=1, weight=0.8, label="chinese_numbered"
    ),
    ChapterPattern(
        regex=r"^第[一二三四五六七八九十\d]+节",
        level=2,
        weight=0.7,
        label="chinese_section",
    ),
    ChapterPattern(regex=r"^\d+\.\d+", level=2, weight=0.6, label="decimal"),
    ChapterPattern(regex=r"^#{1,6}\s+", level=0, weight=0.9, label=MARKDOWN_LABEL),
]


class GenerationConfig(BaseModel):
    """Settings for automatic TOC generation."""

    min_chapter_length: int = Field(default=100, ge=0)
    confidence_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    max_chapter_depth: int = Field(default=5, ge=1)
    patterns: list[ChapterPattern] = Field(
        default_factory=lambda: list(DEFAULT_PATTERNS)
    )


class SearchDefaults(BaseModel):
    """Default search options and history sizing."""

    case_sensitive: bool = False
    whole_words: bool = False
    use_regex: bool = False
    history_size: int = Field(default=50, ge=1)
    max_workers: int = Field(default=1, ge=1)
    chars_per_page: int = Field(default=2000, ge=1)


class AppConfig(BaseModel):
    """Project configuration file layout."""

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    search: SearchDefaults = Field(default_factory=SearchDefaults)
