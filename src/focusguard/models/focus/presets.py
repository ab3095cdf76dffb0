"""Focus presets: the three fixed work/break cadences."""

from dataclasses import dataclass
from enum import Enum

MINUTE_MS = 60 * 1000


class FocusPresetType(str, Enum):
    """Named focus preset."""

    CLASSIC = "classic"
    DEEPWORK = "deepwork"
    SPRINT = "sprint"


class FocusState(str, Enum):
    """Phase of a running focus session."""

    WORKING = "working"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"

    @property
    def is_break(self) -> bool:
        return self is not FocusState.WORKING

    @property
    def label(self) -> str:
        """Human readable phase name."""
        return _STATE_LABELS[self]


_STATE_LABELS = {
    FocusState.WORKING: "Focus Time",
    FocusState.SHORT_BREAK: "Short Break",
    FocusState.LONG_BREAK: "Long Break",
}


@dataclass(frozen=True)
class FocusPreset:
    """Durations (milliseconds) and long-break cadence of a preset."""

    name: str
    work_duration: int
    short_break_duration: int
    long_break_duration: int
    long_break_after: int

    @property
    def work_minutes(self) -> int:
        return self.work_duration // MINUTE_MS

    def duration_for(self, state: FocusState) -> int:
        """Nominal duration of a phase under this preset."""
        if state is FocusState.WORKING:
            return self.work_duration
        if state is FocusState.SHORT_BREAK:
            return self.short_break_duration
        return self.long_break_duration


FOCUS_PRESETS: dict[FocusPresetType, FocusPreset] = {
    FocusPresetType.CLASSIC: FocusPreset(
        name="Classic Pomodoro",
        work_duration=25 * MINUTE_MS,
        short_break_duration=5 * MINUTE_MS,
        long_break_duration=15 * MINUTE_MS,
        long_break_after=4,
    ),
    FocusPresetType.DEEPWORK: FocusPreset(
        name="Deep Work",
        work_duration=50 * MINUTE_MS,
        short_break_duration=10 * MINUTE_MS,
        long_break_duration=20 * MINUTE_MS,
        long_break_after=3,
    ),
    FocusPresetType.SPRINT: FocusPreset(
        name="Sprint",
        work_duration=15 * MINUTE_MS,
        short_break_duration=5 * MINUTE_MS,
        long_break_duration=15 * MINUTE_MS,
        long_break_after=4,
    ),
}


def get_preset(mode: FocusPresetType | str) -> FocusPreset:
    """Look up a preset by enum member or name.

    Raises:
        ValueError: If ``mode`` is not one of the known presets.
    """
    return FOCUS_PRESETS[FocusPresetType(mode)]

