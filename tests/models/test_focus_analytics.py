"""Unit tests for focusguard.models.focus.analytics.

The recorder runs on a *tmp_path* SQLite database with an injectable
clock so dates and streaks are deterministic.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from focusguard.models.focus.analytics import PomodoroRecorder
from focusguard.models.focus.presets import FocusPresetType


class _Clock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def next_day(self, days: int = 1) -> None:
        self.now += timedelta(days=days)


@pytest.fixture()
def day_clock() -> _Clock:
    return _Clock(datetime(2026, 3, 10, 9, 30))


@pytest.fixture()
def recorder(tmp_path, day_clock) -> PomodoroRecorder:
    return PomodoroRecorder(db_path=tmp_path / "history.db", clock=day_clock)


class TestInit:
    def test_creates_schema(self, tmp_path, recorder):
        with sqlite3.connect(tmp_path / "history.db") as conn:
            tables = {
                r[0]
                for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            }
        assert "pomodoro_sessions" in tables

    def test_default_path_uses_platformdirs(self, tmp_path):
        with patch("platformdirs.user_data_dir", return_value=str(tmp_path)):
            rec = PomodoroRecorder()
        assert rec.db_path == tmp_path / "focus_history.db"


class TestRecordPomodoro:
    def test_records_event(self, recorder):
        recorder.record_pomodoro(FocusPresetType.CLASSIC, 25, "task-1")

        rows = recorder.get_recent_sessions()
        assert len(rows) == 1
        assert rows[0]["preset"] == "classic"
        assert rows[0]["duration_minutes"] == 25
        assert rows[0]["linked_task_id"] == "task-1"
        assert rows[0]["partial"] == 0
        assert rows[0]["date"] == "2026-03-10"

    def test_accepts_string_mode(self, recorder):
        recorder.record_pomodoro("sprint", 15)
        assert recorder.get_recent_sessions()[0]["preset"] == "sprint"

    def test_zero_duration_is_partial(self, recorder):
        recorder.record_pomodoro(FocusPresetType.DEEPWORK, 0)
        assert recorder.get_recent_sessions()[0]["partial"] == 1

    def test_database_error_is_swallowed(self, recorder):
        with patch(
            "focusguard.models.focus.analytics.sqlite3.connect",
            side_effect=sqlite3.OperationalError("locked"),
        ):
            recorder.record_pomodoro(FocusPresetType.CLASSIC, 25)  # should not raise
        assert recorder.get_recent_sessions() == []


class TestRecentSessions:
    def test_newest_first_and_limit(self, recorder, day_clock):
        for minutes in (25, 50, 15):
            recorder.record_pomodoro("classic", minutes)
            day_clock.now += timedelta(minutes=30)

        rows = recorder.get_recent_sessions(limit=2)
        assert [r["duration_minutes"] for r in rows] == [15, 50]

    def test_filter_by_preset(self, recorder):
        recorder.record_pomodoro("classic", 25)
        recorder.record_pomodoro("sprint", 15)

        rows = recorder.get_recent_sessions(preset="sprint")
        assert [r["preset"] for r in rows] == ["sprint"]


class TestStreaks:
    def test_no_history(self, recorder):
        assert recorder.get_streaks() == {
            "current_streak": 0,
            "longest_streak": 0,
            "last_active_date": None,
        }

    def test_first_pomodoro_starts_streak(self, recorder):
        recorder.record_pomodoro("classic", 25)
        streaks = recorder.get_streaks()
        assert streaks["current_streak"] == 1
        assert streaks["longest_streak"] == 1
        assert streaks["last_active_date"] == "2026-03-10"

    def test_same_day_keeps_streak(self, recorder):
        recorder.record_pomodoro("classic", 25)
        recorder.record_pomodoro("classic", 25)
        assert recorder.get_streaks()["current_streak"] == 1

    def test_consecutive_days_extend_streak(self, recorder, day_clock):
        for _ in range(3):
            recorder.record_pomodoro("classic", 25)
            day_clock.next_day()

        streaks = recorder.get_streaks()
        assert streaks["current_streak"] == 3
        assert streaks["longest_streak"] == 3

    def test_gap_resets_current_but_keeps_longest(self, recorder, day_clock):
        for _ in range(3):
            recorder.record_pomodoro("classic", 25)
            day_clock.next_day()
        day_clock.next_day(2)
        recorder.record_pomodoro("sprint", 15)

        streaks = recorder.get_streaks()
        assert streaks["current_streak"] == 1
        assert streaks["longest_streak"] == 3

    def test_partial_marker_counts_as_activity(self, recorder, day_clock):
        recorder.record_pomodoro("classic", 25)
        day_clock.next_day()
        recorder.record_pomodoro("classic", 0)
        assert recorder.get_streaks()["current_streak"] == 2


class TestSummary:
    def test_empty_summary(self, recorder):
        summary = recorder.get_summary()
        assert summary["total_completed"] == 0
        assert summary["total_focus_minutes"] == 0
        assert summary["sessions_ended_early"] == 0
        assert summary["by_preset"] == {"classic": 0, "deepwork": 0, "sprint": 0}
        assert summary["last_session_date"] is None
        assert summary["current_streak"] == 0

    def test_totals_exclude_partial_markers(self, recorder):
        recorder.record_pomodoro("classic", 25)
        recorder.record_pomodoro("classic", 25)
        recorder.record_pomodoro("deepwork", 50)
        recorder.record_pomodoro("classic", 0)

        summary = recorder.get_summary()
        assert summary["total_completed"] == 3
        assert summary["total_focus_minutes"] == 100
        assert summary["sessions_ended_early"] == 1
        assert summary["by_preset"] == {"classic": 2, "deepwork": 1, "sprint": 0}
        assert summary["last_session_date"].startswith("2026-03-10")


class TestDailyCounts:
    def test_zero_filled_window(self, recorder, day_clock):
        recorder.record_pomodoro("classic", 25)
        day_clock.next_day(2)
        recorder.record_pomodoro("sprint", 15)
        recorder.record_pomodoro("sprint", 0)

        days = recorder.get_daily_counts(days=3)

        assert [d["date"] for d in days] == ["2026-03-10", "2026-03-11", "2026-03-12"]
        assert [d["pomodoros"] for d in days] == [1, 0, 1]
        assert [d["focus_minutes"] for d in days] == [25, 0, 15]

    def test_excludes_older_days(self, recorder, day_clock):
        recorder.record_pomodoro("classic", 25)
        day_clock.next_day(10)
        days = recorder.get_daily_counts(days=7)
        assert sum(d["pomodoros"] for d in days) == 0


def test_reset_clears_history(recorder):
    recorder.record_pomodoro("classic", 25)
    recorder.reset()
    assert recorder.get_recent_sessions() == []
    assert recorder.get_summary()["total_completed"] == 0
