"""Non-blocking single-key input for the live timer controls."""

import sys
from typing import Protocol


class KeySource(Protocol):
    def get_key(self) -> str | None: ...

    def stop(self) -> None: ...


class KeyboardHandler:
    """Reads keypresses from a POSIX terminal in cbreak mode.

    Does nothing when stdin is not a terminal, so piped or captured runs
    simply get no keys.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.old_settings = None
        self.enabled = self._setup()

    def _setup(self) -> bool:
        try:
            if not self.stream.isatty():
                return False
            import termios
            import tty

            self.fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (AttributeError, ImportError, OSError, ValueError):
            return False
        return True

    def get_key(self) -> str | None:
        """Return the pressed key, lowercased, or None without blocking."""
        if not self.enabled:
            return None

        import select

        if select.select([self.stream], [], [], 0)[0]:
            return self.stream.read(1).lower()
        return None

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.old_settings is not None:
            import termios

            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    def __init__(self):
        import msvcrt

        self.msvcrt = msvcrt

    def get_key(self) -> str | None:
        if not self.msvcrt.kbhit():
            return None
        key = self.msvcrt.getwch()
        return key.lower()

    def stop(self) -> None:
        pass


def get_keyboard_handler() -> KeySource:
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
