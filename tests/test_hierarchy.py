"""Tests for litreader.core.hierarchy."""
from litreader.core.hierarchy import build_hierarchy
from litreader.core.toc_generator import flatten
from litreader.models.toc import Chapter


def _chapters(levels: list[int]) -> list[Chapter]:
    return [
        Chapter(id=f"c{i}", title=f"Chapter {i}", level=level, start_position=i * 100)
        for i, level in enumerate(levels)
    ]


def _depths(chapters: list[Chapter], depth: int = 0) -> dict[str, int]:
    result: dict[str, int] = {}
    for chapter in chapters:
        result[chapter.id] = depth
        result.update(_depths(chapter.children, depth + 1))
    return result


class TestBuildHierarchy:
    def test_nesting(self) -> None:
        roots = build_hierarchy(_chapters([1, 2, 3, 2, 1, 2]))

        assert [r.id for r in roots] == ["c0", "c4"]
        assert [c.id for c in roots[0].children] == ["c1", "c3"]
        assert [c.id for c in roots[0].children[0].children] == ["c2"]
        assert [c.id for c in roots[1].children] == ["c5"]

    def test_level_gap_nests_directly(self) -> None:
        roots = build_hierarchy(_chapters([1, 3, 3]))
        assert len(roots) == 1
        assert [c.id for c in roots[0].children] == ["c1", "c2"]

    def test_starts_deep(self) -> None:
        roots = build_hierarchy(_chapters([2, 1, 2]))
        assert [r.id for r in roots] == ["c0", "c1"]
        assert [c.id for c in roots[1].children] == ["c2"]

    def test_depth_first_order_and_depth(self) -> None:
        levels = [1, 2, 2, 3, 4, 3, 1, 2, 3, 1]
        chapters = _chapters(levels)
        roots = build_hierarchy(chapters)

        assert [c.id for c in flatten(roots)] == [f"c{i}" for i in range(len(levels))]
        depths = _depths(roots)
        for i, level in enumerate(levels):
            assert depths[f"c{i}"] == level - 1

    def test_empty(self) -> None:
        assert build_hierarchy([]) == []
