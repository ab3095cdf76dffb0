"""Pomodoro history with SQLite storage, streaks and totals."""

import logging
import sqlite3
import uuid
from collections.abc import Callable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from .presets import FocusPresetType

logger = logging.getLogger(__name__)


class PomodoroRecorder:
    """Records pomodoro events and computes analytics from them.

    A row with ``duration_minutes == 0`` is the partial marker written when
    a session is ended after at least one pomodoro; it counts towards streaks
    but not towards completed pomodoros.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the recorder and its schema."""
        if db_path is None:
            from platformdirs import user_data_dir

            db_path = Path(user_data_dir("focusguard")) / "focus_history.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock or datetime.now
        self._init_database()

    def _init_database(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS pomodoro_sessions (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    preset TEXT NOT NULL,
                    duration_minutes INTEGER NOT NULL,
                    linked_task_id TEXT,
                    partial INTEGER DEFAULT 0,
                    completed_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_pomodoro_date
                ON pomodoro_sessions(date)
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_pomodoro_preset
                ON pomodoro_sessions(preset)
                """
            )
            conn.commit()

    def _query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(sql, params)
            return [dict(row) for row in cursor.fetchall()]

    def record_pomodoro(
        self,
        mode: FocusPresetType | str,
        duration_minutes: int,
        linked_task_id: str | None = None,
    ) -> None:
        """
        Append one pomodoro event.

        Args:
            mode: Preset the pomodoro ran under
            duration_minutes: Work minutes, or 0 for a session ended mid-cycle
            linked_task_id: Task the session was focused on, if any
        """
        now = self._clock()
        preset = FocusPresetType(mode).value
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO pomodoro_sessions (
                        id, date, preset, duration_minutes,
                        linked_task_id, partial, completed_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(uuid.uuid4()),
                        now.date().isoformat(),
                        preset,
                        duration_minutes,
                        linked_task_id,
                        1 if duration_minutes == 0 else 0,
                        now.isoformat(),
                    ),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.warning("Could not record %s pomodoro: %s", preset, e)
            return

        logger.debug(
            "Recorded %s pomodoro (%d min, task=%s)",
            preset,
            duration_minutes,
            linked_task_id,
        )

    def get_recent_sessions(
        self, limit: int = 20, preset: str | None = None
    ) -> list[dict[str, Any]]:
        """Most recent events first, optionally filtered by preset."""
        if preset:
            return self._query(
                """
                SELECT * FROM pomodoro_sessions
                WHERE preset = ?
                ORDER BY completed_at DESC
                LIMIT ?
                """,
                (FocusPresetType(preset).value, limit),
            )
        return self._query(
            """
            SELECT * FROM pomodoro_sessions
            ORDER BY completed_at DESC
            LIMIT ?
            """,
            (limit,),
        )

    def get_streaks(self) -> dict[str, Any]:
        """
        Current and longest streak of consecutive active days.

        The current streak is the run ending on the last active day; a gap
        of more than one day starts a new run.

        Returns:
            Dict with current_streak, longest_streak and last_active_date
        """
        rows = self._query(
            "SELECT DISTINCT date FROM pomodoro_sessions ORDER BY date"
        )
        if not rows:
            return {
                "current_streak": 0,
                "longest_streak": 0,
                "last_active_date": None,
            }

        dates = [date.fromisoformat(r["date"]) for r in rows]
        longest = run = 1
        for prev, cur in zip(dates, dates[1:]):
            if (cur - prev).days == 1:
                run += 1
            else:
                run = 1
            longest = max(longest, run)

        return {
            "current_streak": run,
            "longest_streak": longest,
            "last_active_date": dates[-1].isoformat(),
        }

    def get_daily_counts(self, days: int = 7) -> list[dict[str, Any]]:
        """Completed pomodoros and focus minutes per day, oldest first."""
        today = self._clock().date()
        start = today - timedelta(days=days - 1)
        rows = self._query(
            """
            SELECT date,
                   SUM(CASE WHEN partial = 0 THEN 1 ELSE 0 END) AS pomodoros,
                   SUM(duration_minutes) AS focus_minutes
            FROM pomodoro_sessions
            WHERE date >= ?
            GROUP BY date
            """,
            (start.isoformat(),),
        )
        by_date = {r["date"]: r for r in rows}

        result = []
        for i in range(days):
            day = (start + timedelta(days=i)).isoformat()
            row = by_date.get(day)
            result.append(
                {
                    "date": day,
                    "pomodoros": row["pomodoros"] if row else 0,
                    "focus_minutes": row["focus_minutes"] if row else 0,
                }
            )
        return result

    def get_summary(self) -> dict[str, Any]:
        """Lifetime totals, per-preset counts and streaks."""
        totals = self._query(
            """
            SELECT
                SUM(CASE WHEN partial = 0 THEN 1 ELSE 0 END) AS completed,
                SUM(CASE WHEN partial = 1 THEN 1 ELSE 0 END) AS ended_early,
                SUM(duration_minutes) AS focus_minutes,
                MAX(completed_at) AS last_session
            FROM pomodoro_sessions
            """
        )[0]
        by_preset = {p.value: 0 for p in FocusPresetType}
        for row in self._query(
            """
            SELECT preset, COUNT(*) AS n FROM pomodoro_sessions
            WHERE partial = 0
            GROUP BY preset
            """
        ):
            by_preset[row["preset"]] = row["n"]

        return {
            "total_completed": totals["completed"] or 0,
            "total_focus_minutes": totals["focus_minutes"] or 0,
            "sessions_ended_early": totals["ended_early"] or 0,
            "by_preset": by_preset,
            "last_session_date": totals["last_session"],
            **self.get_streaks(),
        }

    def reset(self) -> None:
        """Delete all recorded history."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM pomodoro_sessions")
            conn.commit()
