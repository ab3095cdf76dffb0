"""Configuration service for managing FocusGuard configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Config file initialization with defaults on first run
- Dotted-key reads and validated writes (``focus.default_mode``)
- Resolving the session state directory and history database paths
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from focusguard.models.config_models import AppConfig


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("focusguard"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("focusguard"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        if self.config_path.exists():
            self.config_path.unlink()
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Read a value by dotted key, e.g. ``focus.tick_interval``.

        Raises:
            KeyError: If the key does not exist.
        """
        value: Any = self.config.model_dump(mode="json")
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                raise KeyError(key)
            value = value[part]
        return value

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a value by dotted key and persist it.

        Raises:
            KeyError: If the key does not exist.
            ValueError: If the new value fails validation.
        """
        data = self.config.model_dump(mode="json")
        *parents, leaf = key.split(".")
        node = data
        for part in parents:
            if not isinstance(node.get(part), dict):
                raise KeyError(key)
            node = node[part]
        if leaf not in node or isinstance(node[leaf], dict):
            raise KeyError(key)
        node[leaf] = value

        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
        self.save_config()
        return self._config

    @property
    def state_dir(self) -> Path:
        """Directory holding the persisted current session."""
        if self.config.focus.state_dir:
            return Path(self.config.focus.state_dir).expanduser()
        return self.data_dir / "state"

    @property
    def history_db_path(self) -> Path:
        """SQLite database holding pomodoro history."""
        if self.config.focus.history_db:
            return Path(self.config.focus.history_db).expanduser()
        return self.data_dir / "focus_history.db"


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide ConfigService."""
    return ConfigService()
