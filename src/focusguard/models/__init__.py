"""Data models for FocusGuard."""

from .config_models import AppConfig, FocusConfig, LoggingConfig, OutputConfig

__all__ = [
    "AppConfig",
    "FocusConfig",
    "LoggingConfig",
    "OutputConfig",
]
