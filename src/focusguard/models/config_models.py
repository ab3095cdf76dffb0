"""Configuration models for FocusGuard.

Persisted as ``config.json`` by :class:`focusguard.services.config_service.ConfigService`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from focusguard.models.focus.presets import FocusPresetType

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class FocusConfig(BaseModel):
    """Focus timer configuration."""

    default_mode: FocusPresetType = Field(default=FocusPresetType.CLASSIC)
    tick_interval: float = Field(
        default=1.0, gt=0, description="Seconds between timer ticks"
    )
    state_dir: str | None = Field(
        default=None, description="Override for the session state directory"
    )
    history_db: str | None = Field(
        default=None, description="Override for the pomodoro history database"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)
    compact: bool = Field(default=False)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level


class AppConfig(BaseModel):
    """Main FocusGuard configuration"""

    focus: FocusConfig = Field(default_factory=FocusConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
