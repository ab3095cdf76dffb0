"""Single-slot JSON persistence for the current focus session."""

import json
import logging
from pathlib import Path

from .session import FocusSession

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "current_session.json"


class JsonSessionStore:
    """Persists the current session to a JSON file.

    Failures never propagate: a write that fails is logged and the caller's
    in-memory session stays authoritative.
    """

    def __init__(self, state_dir: Path | None = None):
        """Initialize the store, creating ``state_dir`` if needed."""
        if state_dir is None:
            from platformdirs import user_data_dir

            state_dir = Path(user_data_dir("focusguard")) / "state"

        self.state_dir = Path(state_dir)
        self.state_dir.mkdir(parents=True, exist_ok=True)
        self.state_file = self.state_dir / STATE_FILE_NAME

    def load(self) -> FocusSession | None:
        """Load the session. Returns None if the file is missing or invalid."""
        if not self.state_file.exists():
            return None

        try:
            with open(self.state_file, encoding="utf-8") as f:
                data = json.load(f)
            return FocusSession.from_dict(data)
        except (OSError, json.JSONDecodeError, TypeError, KeyError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.state_file, e)
            return None

    def save(self, session: FocusSession | None) -> None:
        """Write ``session``, or clear the slot when it is None."""
        if session is None:
            self.clear()
            return

        try:
            with open(self.state_file, "w", encoding="utf-8") as f:
                json.dump(session.to_dict(), f, indent=2)
            self.state_file.chmod(0o600)
        except OSError as e:
            logger.warning("Could not save session %s: %s", session.id, e)

    def clear(self) -> None:
        try:
            self.state_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", self.state_file, e)
