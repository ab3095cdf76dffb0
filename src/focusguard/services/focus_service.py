"""Wiring for the focus engine and its collaborators."""

from __future__ import annotations

from focusguard.models.focus.analytics import PomodoroRecorder
from focusguard.models.focus.engine import FocusSessionEngine
from focusguard.models.focus.store import JsonSessionStore
from focusguard.services.config_service import ConfigService, get_config_service


def get_recorder(config_service: ConfigService | None = None) -> PomodoroRecorder:
    """PomodoroRecorder backed by the configured history database."""
    svc = config_service or get_config_service()
    return PomodoroRecorder(db_path=svc.history_db_path)


def get_focus_engine(config_service: ConfigService | None = None) -> FocusSessionEngine:
    """Build an engine from configuration and restore any persisted session.

    Construct one engine per process and pass it to whatever drives ``tick()``.
    """
    svc = config_service or get_config_service()
    engine = FocusSessionEngine(
        store=JsonSessionStore(state_dir=svc.state_dir),
        recorder=get_recorder(svc),
    )
    engine.load()
    return engine
