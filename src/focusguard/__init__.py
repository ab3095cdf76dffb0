"""FocusGuard - pomodoro focus timer with local analytics."""

__version__ = "0.3.0"
