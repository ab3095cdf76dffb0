"""Tests for the focus engine wiring in services/focus_service.py."""

from __future__ import annotations

from focusguard.models.focus.analytics import PomodoroRecorder
from focusguard.models.focus.presets import FocusState
from focusguard.services.config_service import ConfigService
from focusguard.services.focus_service import get_focus_engine, get_recorder


def test_engine_uses_configured_paths(tmp_path):
    svc = ConfigService()
    svc.set("focus.state_dir", str(tmp_path / "state"))

    engine = get_focus_engine(svc)
    engine.start_session("sprint")

    assert (tmp_path / "state" / "current_session.json").exists()


def test_engine_restores_session_across_processes():
    svc = ConfigService()
    first = get_focus_engine(svc)
    session = first.start_session("deepwork", linked_task_id="t-3")

    second = get_focus_engine(svc)

    assert second.session == session
    assert second.session.state is FocusState.WORKING


def test_ended_session_is_not_restored():
    svc = ConfigService()
    engine = get_focus_engine(svc)
    engine.start_session("classic")
    engine.end_session()

    assert get_focus_engine(svc).is_active is False


def test_get_recorder_uses_history_db():
    svc = ConfigService()
    recorder = get_recorder(svc)
    assert isinstance(recorder, PomodoroRecorder)
    assert recorder.db_path == svc.history_db_path
