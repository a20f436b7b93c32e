"""Tests for score tracking and best-score persistence."""

import json

import pytest

from mode_snake.persistence import JsonBestScoreStore, MemoryBestScoreStore
from mode_snake.score import ScoreTracker


class TestScoreTracker:
    def test_defaults(self):
        tracker = ScoreTracker()
        assert tracker.score == 0
        assert tracker.best_score == 0

    def test_loads_best_from_store(self):
        tracker = ScoreTracker(MemoryBestScoreStore(initial=7))
        assert tracker.best_score == 7

    def test_record_rejects_decrease(self):
        tracker = ScoreTracker()
        tracker.record(3)
        with pytest.raises(ValueError, match="cannot decrease"):
            tracker.record(2)

    def test_commit_new_best(self):
        store = MemoryBestScoreStore(initial=2)
        tracker = ScoreTracker(store)
        tracker.record(5)
        assert tracker.commit()
        assert tracker.best_score == 5
        assert store.best_score == 5

    def test_commit_not_better(self):
        store = MemoryBestScoreStore(initial=5)
        tracker = ScoreTracker(store)
        tracker.record(5)
        assert not tracker.commit()
        assert store.best_score == 5

    def test_reset_keeps_best(self):
        tracker = ScoreTracker()
        tracker.record(4)
        tracker.commit()
        tracker.reset()
        assert tracker.score == 0
        assert tracker.best_score == 4


class TestJsonBestScoreStore:
    def test_missing_file_reads_zero(self, tmp_path):
        store = JsonBestScoreStore(tmp_path / "missing.json")
        assert store.load_best_score() == 0

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "best.json"
        store = JsonBestScoreStore(path)
        store.save_best_score(12)
        assert json.loads(path.read_text()) == {"best_score": 12}
        assert JsonBestScoreStore(path).load_best_score() == 12

    def test_save_replaces_without_leftovers(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text(json.dumps({"best_score": 4}))
        store = JsonBestScoreStore(path)
        store.save_best_score(7)
        assert store.load_best_score() == 7
        assert sorted(p.name for p in tmp_path.iterdir()) == ["best.json"]

    def test_failed_save_keeps_previous_best(self, tmp_path, monkeypatch):
        path = tmp_path / "best.json"
        store = JsonBestScoreStore(path)
        store.save_best_score(5)

        def fail_replace(self, target):
            raise OSError("disk gone")

        monkeypatch.setattr(type(path), "replace", fail_replace)
        with pytest.raises(OSError):
            store.save_best_score(9)
        monkeypatch.undo()
        assert store.load_best_score() == 5

    @pytest.mark.parametrize(
        "content",
        ["not json", '{"best_score": "abc"}', '{"best_score": [1]}', "true"],
    )
    def test_malformed_reads_zero(self, tmp_path, content):
        path = tmp_path / "best.json"
        path.write_text(content)
        assert JsonBestScoreStore(path).load_best_score() == 0

    def test_numeric_string_accepted(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text('{"best_score": "9"}')
        assert JsonBestScoreStore(path).load_best_score() == 9

    def test_bare_number_accepted(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text("15")
        assert JsonBestScoreStore(path).load_best_score() == 15

    def test_tracker_round_trip(self, tmp_path):
        path = tmp_path / "best.json"
        tracker = ScoreTracker(JsonBestScoreStore(path))
        tracker.record(3)
        tracker.commit()
        assert ScoreTracker(JsonBestScoreStore(path)).best_score == 3
