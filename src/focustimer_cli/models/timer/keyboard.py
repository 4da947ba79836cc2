"""Non-blocking keyboard input for the live timer view."""

import sys
from typing import Optional


class KeyboardHandler:
    """Reads single keypresses without blocking (POSIX terminals)."""

    def __init__(self):
        self.old_settings = None
        try:
            self.fd = sys.stdin.fileno()
        except (AttributeError, OSError, ValueError):
            self.fd = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode."""
        if self.fd is None:
            return
        try:
            import termios
            import tty
        except ImportError:
            # Windows
            return
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError):
            # stdin is not a terminal
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """
        Get a single keypress without blocking.

        Returns the key character or None if no key pressed.
        """
        if self.old_settings is None:
            return None
        import select

        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is None:
            return
        import termios

        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except (termios.error, OSError):
            pass
