"""Focus session state machine.

The engine owns at most one :class:`FocusSession` and derives the countdown
from wall-clock subtraction, so a host process that was suspended for a
while picks up correctly on its next :meth:`FocusSessionEngine.tick`.

Missed phases are not replayed: however far past the deadline a tick lands,
it performs a single transition.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from .presets import MINUTE_MS, FocusPreset, FocusPresetType, FocusState, get_preset
from .session import FocusSession, new_session_id, now_ms, progress, time_remaining

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Single-slot persistence for the current session."""

    def load(self) -> FocusSession | None: ...

    def save(self, session: FocusSession | None) -> None: ...


class SessionRecorder(Protocol):
    """Receives pomodoro events for analytics and streak bookkeeping."""

    def record_pomodoro(
        self,
        mode: FocusPresetType,
        duration_minutes: int,
        linked_task_id: str | None = None,
    ) -> None: ...


@dataclass(frozen=True)
class FocusStatus:
    """Point-in-time view of the engine for rendering."""

    session: FocusSession
    preset: FocusPreset
    remaining: int  # ms, clamped at 0
    progress: float  # fraction of the current phase, 0..1


class FocusSessionEngine:
    """Drives work/break transitions for a single focus session."""

    def __init__(
        self,
        store: SessionStore,
        recorder: SessionRecorder,
        clock: Callable[[], int] | None = None,
    ):
        self._store = store
        self._recorder = recorder
        self._clock = clock or now_ms
        self._session: FocusSession | None = None

    @property
    def session(self) -> FocusSession | None:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def preset(self) -> FocusPreset | None:
        if self._session is None:
            return None
        return get_preset(self._session.mode)

    def load(self) -> FocusSession | None:
        """Restore the persisted session, if any."""
        try:
            self._session = self._store.load()
        except Exception:
            logger.exception("Failed to load persisted focus session")
            self._session = None
        if self._session is not None:
            logger.info(
                "Restored session %s (%s, %s)",
                self._session.id,
                self._session.mode.value,
                self._session.state.value,
            )
        return self._session

    def reload(self) -> bool:
        """Pick up changes another engine made to the stored session.

        Returns False, dropping the in-memory session without persisting or
        recording anything, when the slot is empty or holds a different
        session. A stored copy of the same session that is at least as far
        along replaces the in-memory one. A failing store keeps the current
        state.
        """
        if self._session is None:
            return False
        try:
            stored = self._store.load()
        except Exception:
            logger.warning("Failed to reload focus session", exc_info=True)
            return True

        if stored is None or stored.id != self._session.id:
            logger.info("Session %s was ended or replaced elsewhere", self._session.id)
            self._session = None
            return False
        if stored.start_time >= self._session.start_time:
            self._session = stored
        return True

    def start_session(
        self, mode: FocusPresetType | str, linked_task_id: str | None = None
    ) -> FocusSession:
        """Start a new session, replacing any existing one."""
        mode = FocusPresetType(mode)
        preset = get_preset(mode)
        if self._session is not None:
            logger.info("Discarding session %s for a new one", self._session.id)

        self._session = FocusSession(
            id=new_session_id(),
            start_time=self._clock(),
            duration=preset.work_duration,
            mode=mode,
            state=FocusState.WORKING,
            linked_task_id=linked_task_id,
            pomodoros_completed=0,
            current_session_in_cycle=1,
        )
        logger.info("Started %s session %s", mode.value, self._session.id)
        self._persist()
        return self._session

    def time_remaining(self) -> int:
        """Milliseconds left in the current phase, never negative. No side effects."""
        if self._session is None:
            return 0
        return max(0, time_remaining(self._session, self._clock()))

    def tick(self) -> int:
        """Advance the machine against the clock and return the countdown in ms.

        Before the deadline this only reads. The first tick at or past the
        deadline performs exactly one transition and reports 0.
        """
        if self._session is None:
            return 0

        remaining = time_remaining(self._session, self._clock())
        if remaining > 0:
            return remaining

        if self._session.state is FocusState.WORKING:
            self._complete_work_period()
        else:
            self._complete_break()
        return 0

    def complete_work_period(self) -> bool:
        """Finish the current work period early. Only valid while working."""
        if self._session is None or self._session.state is not FocusState.WORKING:
            return False
        self._complete_work_period()
        return True

    def skip_break(self) -> bool:
        """Cut the current break short. No-op unless on a break."""
        if self._session is None or not self._session.state.is_break:
            return False
        self._complete_break()
        return True

    def end_session(self) -> None:
        """Discard the session, recording a partial marker if anything was done."""
        session = self._session
        if session is None:
            return

        if session.pomodoros_completed > 0:
            self._record(session.mode, 0, session.linked_task_id)

        logger.info(
            "Ended session %s after %d pomodoro(s)",
            session.id,
            session.pomodoros_completed,
        )
        self._session = None
        self._persist()

    def snapshot(self) -> FocusStatus | None:
        if self._session is None:
            return None
        now = self._clock()
        return FocusStatus(
            session=self._session.copy(),
            preset=get_preset(self._session.mode),
            remaining=max(0, time_remaining(self._session, now)),
            progress=progress(self._session, now),
        )

    def _complete_work_period(self) -> None:
        session = self._session
        preset = get_preset(session.mode)
        now = self._clock()

        session.pomodoros_completed += 1
        if session.pomodoros_completed % preset.long_break_after == 0:
            session.state = FocusState.LONG_BREAK
        else:
            session.state = FocusState.SHORT_BREAK
        session.duration = preset.duration_for(session.state)
        session.start_time = now
        session.break_start_time = now

        logger.debug(
            "Session %s: work period %d done, %s",
            session.id,
            session.pomodoros_completed,
            session.state.value,
        )
        self._persist()
        self._record(
            session.mode, preset.work_duration // MINUTE_MS, session.linked_task_id
        )

    def _complete_break(self) -> None:
        session = self._session
        preset = get_preset(session.mode)

        if session.state is FocusState.LONG_BREAK:
            session.current_session_in_cycle = 1
        else:
            session.current_session_in_cycle = (
                session.current_session_in_cycle % preset.long_break_after
            ) + 1
        session.state = FocusState.WORKING
        session.duration = preset.work_duration
        session.start_time = self._clock()
        session.break_start_time = None

        logger.debug(
            "Session %s: back to work (%d/%d)",
            session.id,
            session.current_session_in_cycle,
            preset.long_break_after,
        )
        self._persist()

    def _persist(self) -> None:
        try:
            self._store.save(self._session)
        except Exception:
            logger.warning("Failed to persist focus session", exc_info=True)

    def _record(
        self, mode: FocusPresetType, minutes: int, linked_task_id: str | None
    ) -> None:
        try:
            self._recorder.record_pomodoro(mode, minutes, linked_task_id)
        except Exception:
            logger.warning("Failed to record pomodoro", exc_info=True)
