"""Tests for litreader.history."""
from pathlib import Path

from litreader.history.manager import HistoryStore, SearchHistory


class TestSearchHistory:
    def test_duplicates_move_to_head(self) -> None:
        history = SearchHistory()
        history.record("foo", 1)
        history.record("bar", 2)
        history.record("foo", 3)

        entries = history.entries
        assert [e.query for e in entries] == ["foo", "bar"]
        assert entries[0].result_count == 3

    def test_cap(self) -> None:
        history = SearchHistory(max_items=3)
        for query in ["a", "b", "c", "d", "e"]:
            history.record(query, 0)
        assert [e.query for e in history.entries] == ["e", "d", "c"]

    def test_default_cap_is_fifty(self) -> None:
        history = SearchHistory()
        for i in range(60):
            history.record(f"q{i}", i)
        assert len(history) == 50
        assert history.entries[0].query == "q59"

    def test_exact_text_only(self) -> None:
        history = SearchHistory()
        history.record("Foo", 0)
        history.record("foo", 0)
        assert len(history) == 2

    def test_suggestions(self) -> None:
        history = SearchHistory()
        for query in ["alpha", "Beta", "alphabet", "gamma", "ALP", "alpine", "salp", "alps"]:
            history.record(query, 0)

        suggestions = history.suggestions("alp")
        assert len(suggestions) == 5
        assert suggestions == ["alps", "salp", "alpine", "ALP", "alphabet"]
        assert history.suggestions("bet") == ["alphabet", "Beta"]
        assert history.suggestions("") == []

    def test_remove_and_clear(self) -> None:
        history = SearchHistory()
        entry = history.record("foo", 0)
        history.record("bar", 0)

        assert history.remove(entry.id)
        assert not history.remove(entry.id)
        assert [e.query for e in history.entries] == ["bar"]

        history.clear()
        assert len(history) == 0

    def test_statistics(self) -> None:
        history = SearchHistory()
        assert history.statistics() == (0, 0, 0.0)

        history.record("foo", 2)
        history.record("bar", 4)
        stats = history.statistics()
        assert stats.total_searches == 2
        assert stats.unique_queries == 2
        assert stats.average_results == 3.0


class TestHistoryStore:
    def test_persists_every_mutation(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        history = SearchHistory(store)
        history.record("foo", 1)
        history.record("bar", 2)

        assert store.history_path.exists()
        reloaded = SearchHistory(HistoryStore(tmp_path))
        assert [e.query for e in reloaded.entries] == ["bar", "foo"]

        reloaded.clear()
        assert SearchHistory(HistoryStore(tmp_path)).entries == []

    def test_corrupt_file_loads_empty(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        store.store_root.mkdir(parents=True)
        store.history_path.write_text("{not json")

        history = SearchHistory(store)
        assert history.entries == []
        history.record("foo", 0)
        assert [e.query for e in SearchHistory(store).entries] == ["foo"]

    def test_undecodable_file_loads_empty(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        store.store_root.mkdir(parents=True)
        store.history_path.write_bytes(b"\xff\xfe\x00garbage")

        assert store.load() == []
        assert SearchHistory(store).entries == []

    def test_non_ascii_queries_round_trip(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        SearchHistory(store).record("第二章 继续", 1)

        assert "第二章" in store.history_path.read_text(encoding="utf-8")
        assert [e.query for e in SearchHistory(store).entries] == ["第二章 继续"]

    def test_unwritable_store_keeps_memory(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        store.history_path.mkdir(parents=True)

        history = SearchHistory(store)
        history.record("foo", 1)
        assert [e.query for e in history.entries] == ["foo"]

        history.clear()
        assert history.entries == []

    def test_clear_removes_file(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        history = SearchHistory(store)
        history.record("foo", 1)

        history.clear()
        assert not store.history_path.exists()

    def test_delete(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path)
        assert not store.delete()
        SearchHistory(store).record("foo", 0)
        assert store.delete()
        assert store.load() == []
