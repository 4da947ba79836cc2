"""Desktop notification dispatch.

Notifications are fire-and-forget: the timer never waits on them and never
learns whether they were shown.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod

from rich.console import Console

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Outbound notification collaborator."""

    @abstractmethod
    def request_notification(self, title: str, body: str) -> None:
        """Ask the platform to show a notification. Must not raise."""
        raise NotImplementedError("Subclasses must implement request_notification()")


def _applescript_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DesktopNotifier(Notifier):
    """Notifies through ``osascript`` on macOS or ``notify-send`` on Linux.

    The notifier process is spawned and not waited on. When a console is
    given the terminal bell rings as well.
    """

    def __init__(self, console: Console | None = None, platform: str | None = None):
        self.console = console
        self.platform = platform or sys.platform

    def build_command(self, title: str, body: str) -> list[str] | None:
        """Return the notifier command line, or None if none is available."""
        if self.platform == "darwin":
            script = (
                f"display notification {_applescript_quote(body)} "
                f"with title {_applescript_quote(title)}"
            )
            return ["osascript", "-e", script]
        if self.platform.startswith("linux") and shutil.which("notify-send"):
            return ["notify-send", "--app-name=focustimer", title, body]
        return None

    def request_notification(self, title: str, body: str) -> None:
        if self.console is not None:
            self.console.bell()

        command = self.build_command(title, body)
        if command is None:
            logger.debug("no notifier available on %s, dropped %r", self.platform, title)
            return

        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug("notification %r not delivered: %s", title, e)
