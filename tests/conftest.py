"""Shared test fixtures and configuration.

Isolates every test from the real platform directories and provides a
controllable clock plus in-memory collaborators for the focus engine.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from focusguard.models.focus.presets import FocusPresetType
from focusguard.models.focus.session import FocusSession

START_MS = 1_700_000_000_000


class FakeClock:
    """Callable clock returning epoch milliseconds under test control."""

    def __init__(self, start: int = START_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class MemoryStore:
    """SessionStore keeping the slot in memory and every save in ``saves``."""

    def __init__(self, session: FocusSession | None = None):
        self.slot = session
        self.saves: list[FocusSession | None] = []

    def load(self) -> FocusSession | None:
        return self.slot.copy() if self.slot else None

    def save(self, session: FocusSession | None) -> None:
        self.slot = session.copy() if session else None
        self.saves.append(self.slot)


class FakeKeys:
    """Key source replaying a scripted sequence, then reporting no key."""

    def __init__(self, *keys: str | None):
        self.keys = list(keys)
        self.stopped = False

    def get_key(self) -> str | None:
        return self.keys.pop(0) if self.keys else None

    def stop(self) -> None:
        self.stopped = True


class RecorderSpy:
    """SessionRecorder collecting ``(mode, minutes, task)`` tuples."""

    def __init__(self):
        self.calls: list[tuple[FocusPresetType, int, str | None]] = []

    def record_pomodoro(self, mode, duration_minutes, linked_task_id=None) -> None:
        self.calls.append((mode, duration_minutes, linked_task_id))


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def recorder() -> RecorderSpy:
    return RecorderSpy()


@pytest.fixture()
def fake_keys():
    """Factory for scripted key sources: ``fake_keys("s", None, "e")``."""
    return FakeKeys


@pytest.fixture()
def engine(store, recorder, clock):
    from focusguard.models.focus.engine import FocusSessionEngine

    return FocusSessionEngine(store=store, recorder=recorder, clock=clock)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config, data and log directories at *tmp_path*.

    Also clears the lru_cache'd config service and the logger singleton so
    each test starts fresh.
    """
    import focusguard.utils.logger as logger_mod
    from focusguard.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    log_dir = tmp_path / "logs"

    get_config_service.cache_clear()
    logger_mod._logger = None
    logging.getLogger("focusguard").handlers.clear()

    with patch(
        "focusguard.services.config_service.user_config_dir",
        return_value=str(config_dir),
    ), patch(
        "focusguard.services.config_service.user_data_dir",
        return_value=str(data_dir),
    ), patch(
        "focusguard.utils.logger.user_log_dir",
        return_value=str(log_dir),
    ):
        yield tmp_path

    get_config_service.cache_clear()
    logger_mod._logger = None
    logging.getLogger("focusguard").handlers.clear()
