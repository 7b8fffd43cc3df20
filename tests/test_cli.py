"""Tests for the litreader command line."""
import json
from pathlib import Path

from typer.testing import CliRunner

from litreader.cli import app

runner = CliRunner()

BOOK_TEXT = "第一章 开始\n" + "内容" * 60 + "\n第二章 继续\n" + "更多内容" * 30


def _book(tmp_path: Path) -> Path:
    path = tmp_path / "novel.txt"
    path.write_text(BOOK_TEXT, encoding="utf-8")
    return path


class TestTocCommand:
    def test_displays_chapters(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["toc", str(_book(tmp_path)), "--dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "第一章 开始" in result.output
        assert "第二章 继续" in result.output

    def test_export(self, tmp_path: Path) -> None:
        export = tmp_path / "toc.json"
        result = runner.invoke(
            app,
            ["toc", str(_book(tmp_path)), "--dir", str(tmp_path), "--export", str(export)],
        )
        assert result.exit_code == 0
        data = json.loads(export.read_text())
        assert data["document_id"] == "novel.txt"
        assert len(data["chapters"]) == 2

    def test_insufficient_content(self, tmp_path: Path) -> None:
        path = tmp_path / "short.txt"
        path.write_text("第一章 开始", encoding="utf-8")
        result = runner.invoke(app, ["toc", str(path), "--dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "book.docx"
        path.write_text("x")
        result = runner.invoke(app, ["toc", str(path)])
        assert result.exit_code == 1


class TestSearchCommand:
    def test_search_records_history(self, tmp_path: Path) -> None:
        book = _book(tmp_path)
        result = runner.invoke(app, ["search", "第二章", str(book), "--dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "1 result(s)" in result.output

        listed = runner.invoke(app, ["history", "list", "--dir", str(tmp_path)])
        assert listed.exit_code == 0
        assert "第二章" in listed.output

    def test_invalid_regex_reports_skip(self, tmp_path: Path) -> None:
        book = _book(tmp_path)
        result = runner.invoke(
            app, ["search", "(", str(book), "--regex", "--dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert "Skipped" in result.output
        assert "No matches" in result.output


class TestHistoryCommands:
    def test_suggest_stats_clear(self, tmp_path: Path) -> None:
        book = _book(tmp_path)
        for query in ["开始", "继续"]:
            runner.invoke(app, ["search", query, str(book), "--dir", str(tmp_path)])

        suggested = runner.invoke(app, ["history", "suggest", "继", "--dir", str(tmp_path)])
        assert suggested.exit_code == 0
        assert "继续" in suggested.output
        assert "开始" not in suggested.output

        stats = runner.invoke(app, ["history", "stats", "--dir", str(tmp_path)])
        assert "Searches:" in stats.output

        cleared = runner.invoke(app, ["history", "clear", "--dir", str(tmp_path)])
        assert "Cleared 2" in cleared.output

        empty = runner.invoke(app, ["history", "list", "--dir", str(tmp_path)])
        assert "No search history" in empty.output
