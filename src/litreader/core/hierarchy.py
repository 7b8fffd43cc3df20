"""Flat-list-to-tree conversion by chapter level."""

from litreader.models.toc import Chapter


def build_hierarchy(chapters: list[Chapter]) -> list[Chapter]:
    """Nest chapters under the nearest preceding shallower chapter.

    Chapters must be in document order. Level gaps are allowed: a level 3
    chapter after a level 1 chapter becomes its direct child.
    """
    root_chapters: list[Chapter] = []
    chapter_stack: list[Chapter] = []

    for chapter in chapters:
        # Pop chapters at same or deeper level
        while chapter_stack and chapter_stack[-1].level >= chapter.level:
            chapter_stack.pop()

        if chapter_stack:
            chapter_stack[-1].children.append(chapter)
        else:
            root_chapters.append(chapter)

        chapter_stack.append(chapter)

    return root_chapters
