"""Focus session entity and wall-clock time helpers."""

import time
import uuid
from dataclasses import dataclass, replace

from .presets import FocusPresetType, FocusState, get_preset


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def new_session_id() -> str:
    return f"focus_{uuid.uuid4().hex}"


@dataclass
class FocusSession:
    """A running focus session.

    ``start_time`` marks the start of the *current* phase and is reset at
    every transition; ``duration`` is the length of that phase.
    """

    id: str
    start_time: int  # epoch ms
    duration: int  # ms
    mode: FocusPresetType
    state: FocusState = FocusState.WORKING
    linked_task_id: str | None = None
    pomodoros_completed: int = 0
    current_session_in_cycle: int = 1
    break_start_time: int | None = None

    @property
    def deadline(self) -> int:
        """Epoch ms at which the current phase ends."""
        return self.start_time + self.duration

    def copy(self) -> "FocusSession":
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to the persisted (camelCase) representation."""
        return {
            "id": self.id,
            "startTime": self.start_time,
            "duration": self.duration,
            "mode": self.mode.value,
            "linkedTaskId": self.linked_task_id,
            "state": self.state.value,
            "pomodorosCompleted": self.pomodoros_completed,
            "currentSessionInCycle": self.current_session_in_cycle,
            "breakStartTime": self.break_start_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FocusSession":
        """Create from the persisted representation.

        Raises:
            KeyError: A required key is missing.
            ValueError: ``mode`` or ``state`` is not a known value, or the
                cycle position or phase duration does not fit the preset.
            TypeError: ``data`` is not a mapping or a numeric field is malformed.
        """
        session = cls(
            id=str(data["id"]),
            start_time=int(data["startTime"]),
            duration=int(data["duration"]),
            mode=FocusPresetType(data["mode"]),
            state=FocusState(data["state"]),
            linked_task_id=data.get("linkedTaskId"),
            pomodoros_completed=int(data.get("pomodorosCompleted", 0)),
            current_session_in_cycle=int(data.get("currentSessionInCycle", 1)),
            break_start_time=data.get("breakStartTime"),
        )

        preset = get_preset(session.mode)
        if not 1 <= session.current_session_in_cycle <= preset.long_break_after:
            raise ValueError(
                f"cycle position {session.current_session_in_cycle} outside "
                f"1..{preset.long_break_after}"
            )
        if session.duration != preset.duration_for(session.state):
            raise ValueError(
                f"duration {session.duration} does not match {session.state.value}"
            )
        if session.pomodoros_completed < 0:
            raise ValueError("pomodorosCompleted must not be negative")
        return session


def time_remaining(session: FocusSession, now: int) -> int:
    """Milliseconds left in the current phase at ``now``.

    Negative once the deadline has passed.
    """
    return session.duration - (now - session.start_time)


def progress(session: FocusSession, now: int) -> float:
    """Completed fraction of the current phase, clamped to [0, 1]."""
    if session.duration <= 0:
        return 1.0
    elapsed = now - session.start_time
    return min(1.0, max(0.0, elapsed / session.duration))
