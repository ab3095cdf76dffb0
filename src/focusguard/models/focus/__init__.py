"""Focus mode - pomodoro session engine for FocusGuard."""

from .analytics import PomodoroRecorder
from .engine import FocusSessionEngine, FocusStatus, SessionRecorder, SessionStore
from .presets import (
    FOCUS_PRESETS,
    FocusPreset,
    FocusPresetType,
    FocusState,
    get_preset,
)
from .session import FocusSession, now_ms, time_remaining
from .store import JsonSessionStore

__all__ = [
    "FOCUS_PRESETS",
    "FocusPreset",
    "FocusPresetType",
    "FocusSession",
    "FocusSessionEngine",
    "FocusState",
    "FocusStatus",
    "JsonSessionStore",
    "PomodoroRecorder",
    "SessionRecorder",
    "SessionStore",
    "get_preset",
    "now_ms",
    "time_remaining",
]
