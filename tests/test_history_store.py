"""
Tests for HistoryStore: ordering, aggregates and JSONL persistence.
"""

import json
from datetime import datetime, timedelta

import pytest

from sculpt.core.models import ExerciseRecord, Session
from sculpt.io.history_store import HistoryStore, get_default_history_path
from sculpt.io.serializers import (
    ValidationError,
    dict_to_record,
    dict_to_session,
    json_line_to_session,
    session_to_dict,
)

T0 = datetime(2026, 10, 1, 7, 30)


def _session(*entries: tuple[str, int, int, float], days: int = 0) -> Session:
    return Session(
        created_at=T0 + timedelta(days=days),
        entries=[
            ExerciseRecord(name=name, muscle_group="Chest", sets=s, reps=r, weight=w)
            for name, s, r, w in entries
        ],
    )


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history.jsonl"


class TestCommit:
    def test_newest_first(self):
        store = HistoryStore()
        s1 = _session(("Bench Press", 3, 5, 100.0))
        s2 = _session(("Squat", 3, 5, 200.0), days=1)
        store.commit(s1)
        store.commit(s2)
        assert store.sessions[0] is s2
        assert store.sessions[1] is s1
        assert store.latest() is s2

    def test_total_sessions_counts_commits(self):
        store = HistoryStore()
        for i in range(4):
            store.commit(_session(("Squat", 1, 1, 1.0), days=i))
        assert store.total_sessions() == 4
        assert len(store) == 4

    def test_commit_adds_exact_volume(self):
        store = HistoryStore()
        store.commit(_session(("Squat", 3, 5, 200.0)))
        before = store.total_volume_all_time()
        new = _session(("Bench Press", 3, 5, 100.0), ("Bench Press", 2, 8, 80.0))
        store.commit(new)
        assert store.total_volume_all_time() - before == pytest.approx(new.total_volume)
        assert new.total_volume == pytest.approx(1500.0 + 1280.0)

    def test_personal_record_across_sessions(self):
        store = HistoryStore()
        store.commit(_session(("Bench Press", 1, 5, 100.0)))
        store.commit(_session(("Bench Press", 1, 10, 90.0), days=1))
        assert store.personal_record("Bench Press") == pytest.approx(120.0)
        assert store.personal_record("bench press") == store.personal_record("Bench Press")
        assert store.personal_record("Deadlift") == 0

    def test_personal_records_keeps_order(self):
        store = HistoryStore()
        store.commit(_session(("Squat", 1, 0, 100.0)))
        prs = store.personal_records(["Squat", "Bench Press"])
        assert list(prs) == ["Squat", "Bench Press"]
        assert prs == {"Squat": pytest.approx(100.0), "Bench Press": 0}

    def test_edit_after_commit_is_visible(self):
        store = HistoryStore()
        session = _session(("Bench Press", 3, 5, 100.0))
        store.commit(session)
        session.update_field(0, "weight", 110.0)
        assert store.total_volume_all_time() == pytest.approx(1650.0)
        assert store.personal_record("Bench Press") == pytest.approx(110.0 * (1 + 5 / 30))

    def test_grouped_summary_and_best_set(self):
        store = HistoryStore()
        session = _session(("Bench Press", 3, 5, 100.0), ("Bench Press", 1, 3, 120.0))
        groups = store.grouped_summary(session)
        assert len(groups) == 1
        assert groups[0].total_sets == 4
        assert (groups[0].best_weight, groups[0].best_reps) == (100.0, 5)
        assert store.best_set_for("Bench Press", session.entries) is session.entries[0]


class TestPersistence:
    def test_missing_file_loads_empty(self, history_path):
        store = HistoryStore(history_path)
        assert store.load() == []
        assert not store.exists()

    def test_commit_writes_file(self, history_path):
        store = HistoryStore(history_path)
        assert store.commit(_session(("Squat", 3, 5, 200.0))) is True
        lines = history_path.read_text().splitlines()
        assert len(lines) == 1
        data = json.loads(lines[0])
        assert data["created_at"] == "2026-10-01T07:30:00"
        assert data["entries"][0] == {
            "name": "Squat", "muscle_group": "Chest", "sets": 3, "reps": 5, "weight": 200.0,
        }

    def test_round_trip_preserves_aggregates(self, history_path):
        store = HistoryStore(history_path)
        store.commit(_session(("Bench Press", 1, 5, 100.0), ("Squat", 3, 5, 200.0)))
        store.commit(_session(("Bench Press", 1, 10, 90.0), days=2))

        reloaded = HistoryStore(history_path)
        reloaded.load()
        assert reloaded.total_sessions() == store.total_sessions()
        assert reloaded.total_volume_all_time() == pytest.approx(store.total_volume_all_time())
        for name in ("Bench Press", "Squat", "Deadlift"):
            assert reloaded.personal_record(name) == pytest.approx(store.personal_record(name))
        assert [s.created_at for s in reloaded.sessions] == [s.created_at for s in store.sessions]

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "history.jsonl"
        HistoryStore(path).commit(_session(("Squat", 1, 1, 1.0)))
        assert path.exists()

    def test_corrupt_file_falls_back_to_empty(self, history_path):
        history_path.write_text("{not json}\n")
        store = HistoryStore(history_path)
        with pytest.warns(UserWarning, match="empty history"):
            assert store.load() == []

    def test_invalid_record_falls_back_to_empty(self, history_path):
        good = json.dumps(session_to_dict(_session(("Squat", 1, 1, 1.0))))
        bad = json.dumps({"created_at": "yesterday", "entries": []})
        history_path.write_text(good + "\n" + bad + "\n")
        store = HistoryStore(history_path)
        with pytest.warns(UserWarning):
            store.load()
        assert store.total_sessions() == 0

    @pytest.mark.parametrize(
        "bad_entry",
        [
            '{"name":"Squat","muscle_group":"Legs","sets":NaN,"reps":5,"weight":100.0}',
            '{"name":"Squat","muscle_group":"Legs","sets":Infinity,"reps":5,"weight":100.0}',
            '{"name":"Squat","muscle_group":"Legs","sets":3,"reps":5,"weight":NaN}',
            '{"name":"Squat","muscle_group":"Legs","sets":2.7,"reps":5,"weight":100.0}',
        ],
    )
    def test_non_finite_or_fractional_values_fall_back_to_empty(self, history_path, bad_entry):
        history_path.write_text('{"created_at":"2026-10-01T07:30:00","entries":[' + bad_entry + "]}\n")
        store = HistoryStore(history_path)
        with pytest.warns(UserWarning, match="empty history"):
            assert store.load() == []
        assert store.total_volume_all_time() == 0

    def test_deeply_nested_line_falls_back_to_empty(self, history_path):
        history_path.write_text("[" * 100000 + "]" * 100000 + "\n")
        store = HistoryStore(history_path)
        with pytest.warns(UserWarning, match="empty history"):
            assert store.load() == []

    def test_iterates_newest_first(self):
        store = HistoryStore()
        s1 = _session(("Squat", 1, 1, 1.0))
        s2 = _session(("Squat", 2, 2, 2.0), days=1)
        store.commit(s1)
        store.commit(s2)
        assert list(store) == [s2, s1]

    def test_blank_lines_are_skipped(self, history_path):
        line = json.dumps(session_to_dict(_session(("Squat", 1, 1, 1.0))))
        history_path.write_text("\n" + line + "\n\n")
        store = HistoryStore(history_path)
        assert len(store.load()) == 1

    def test_save_failure_keeps_in_memory_commit(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = HistoryStore(blocker / "history.jsonl")
        with pytest.warns(UserWarning, match="could not save"):
            saved = store.commit(_session(("Squat", 3, 5, 200.0)))
        assert saved is False
        assert store.total_sessions() == 1
        assert store.total_volume_all_time() == pytest.approx(3000.0)

    def test_failed_save_leaves_previous_file_intact(self, history_path, monkeypatch):
        store = HistoryStore(history_path)
        store.commit(_session(("Squat", 1, 1, 1.0)))
        before = history_path.read_text()

        def boom(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("sculpt.io.history_store.os.replace", boom)
        with pytest.warns(UserWarning):
            store.commit(_session(("Squat", 2, 2, 2.0), days=1))
        assert history_path.read_text() == before
        assert [p.name for p in history_path.parent.iterdir()] == ["history.jsonl"]

    def test_in_memory_store_never_touches_disk(self):
        store = HistoryStore()
        assert store.commit(_session(("Squat", 1, 1, 1.0))) is True
        assert store.history_path is None

    def test_default_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_default_history_path() == tmp_path / ".sculpt" / "history.jsonl"


class TestSerializers:
    def test_record_defaults_missing_muscle_group(self):
        rec = dict_to_record({"name": "Squat", "sets": 1, "reps": 1, "weight": 1})
        assert rec.muscle_group == "Unknown"

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "", "sets": 1, "reps": 1, "weight": 1},
            {"name": "Squat", "sets": -1, "reps": 1, "weight": 1},
            {"name": "Squat", "sets": 1, "reps": "5", "weight": 1},
            {"name": "Squat", "sets": 1, "reps": 1, "weight": True},
            ["Squat", 1, 1, 1],
        ],
    )
    def test_invalid_records(self, data):
        with pytest.raises(ValidationError):
            dict_to_record(data)

    def test_session_requires_timestamp(self):
        with pytest.raises(ValidationError):
            dict_to_session({"entries": []})

    def test_json_line_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            json_line_to_session("[1, 2")

    @pytest.mark.parametrize("field_name", ["sets", "reps", "weight"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_values_rejected(self, field_name, value):
        data = {"name": "Squat", "sets": 1, "reps": 1, "weight": 1.0, field_name: value}
        with pytest.raises(ValidationError):
            dict_to_record(data)

    @pytest.mark.parametrize("field_name", ["sets", "reps"])
    def test_fractional_counts_rejected(self, field_name):
        data = {"name": "Squat", "sets": 1, "reps": 1, "weight": 1.0, field_name: 2.7}
        with pytest.raises(ValidationError, match="whole number"):
            dict_to_record(data)

    def test_integral_float_counts_accepted(self):
        rec = dict_to_record({"name": "Squat", "sets": 3.0, "reps": 5.0, "weight": 100})
        assert (rec.sets, rec.reps, rec.weight) == (3, 5, 100.0)
        assert isinstance(rec.sets, int) and isinstance(rec.reps, int)

    def test_json_constants_are_validation_errors(self):
        line = '{"created_at":"2026-10-01T07:30:00","entries":[{"name":"Squat","sets":NaN,"reps":1,"weight":1}]}'
        with pytest.raises(ValidationError):
            json_line_to_session(line)

    def test_deep_nesting_is_validation_error(self):
        with pytest.raises(ValidationError):
            json_line_to_session("[" * 100000 + "]" * 100000)
