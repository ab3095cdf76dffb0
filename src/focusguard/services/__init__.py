"""Service layer for FocusGuard."""
