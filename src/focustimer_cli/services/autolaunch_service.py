"""Launch-at-login registration.

Registers ``focustimer timer run`` with the desktop session so the timer
opens when the user logs in. Linux uses an XDG autostart entry, macOS a
per-user LaunchAgent.
"""

from __future__ import annotations

import logging
import plistlib
import shutil
import sys
from pathlib import Path

from focustimer_cli.models.exceptions import PlatformError

logger = logging.getLogger(__name__)

DESKTOP_FILE_NAME = "focustimer.desktop"
LAUNCH_AGENT_LABEL = "dev.focustimer.cli"
DESKTOP_RESERVED = frozenset(" \t\n\"'\\><~|&;$*?#()`")


def desktop_exec_quote(arg: str) -> str:
    """Quote one argument for a Desktop Entry ``Exec`` key."""
    arg = arg.replace("%", "%%")
    if arg and not any(ch in DESKTOP_RESERVED for ch in arg):
        return arg
    escaped = "".join("\\" + ch if ch in "\"`$\\" else ch for ch in arg)
    # string values unescape backslashes once more
    return '"' + escaped.replace("\\", "\\\\") + '"'


def default_command() -> list[str]:
    """Command line registered for login."""
    executable = shutil.which("focustimer") or "focustimer"
    return [executable, "timer", "run"]


class AutoLaunchService:
    """Toggle launch-at-login for the current user."""

    def __init__(
        self,
        platform: str | None = None,
        home: Path | None = None,
        command: list[str] | None = None,
    ):
        self.platform = platform or sys.platform
        self.home = home or Path.home()
        self.command = command or default_command()

    @property
    def registration_path(self) -> Path:
        """File whose presence means launch-at-login is enabled.

        Raises:
            PlatformError: If the platform is not supported
        """
        if self.platform.startswith("linux"):
            return self.home / ".config" / "autostart" / DESKTOP_FILE_NAME
        if self.platform == "darwin":
            return self.home / "Library" / "LaunchAgents" / f"{LAUNCH_AGENT_LABEL}.plist"
        raise PlatformError(f"launch at login is not supported on {self.platform}")

    def is_enabled(self) -> bool:
        try:
            return self.registration_path.exists()
        except PlatformError:
            return False

    def set_enabled(self, enabled: bool) -> None:
        """Register or unregister launch at login.

        Raises:
            PlatformError: If the registration could not be changed
        """
        path = self.registration_path
        try:
            if enabled:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(self._render())
            else:
                path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("launch at login %s failed: %s", "enable" if enabled else "disable", e)
            raise PlatformError(f"could not update {path}: {e}") from e
        logger.info("launch at login %s", "enabled" if enabled else "disabled")

    def _render(self) -> bytes:
        if self.platform == "darwin":
            return plistlib.dumps(
                {
                    "Label": LAUNCH_AGENT_LABEL,
                    "ProgramArguments": self.command,
                    "RunAtLoad": True,
                }
            )
        exec_line = " ".join(desktop_exec_quote(arg) for arg in self.command)
        return (
            "[Desktop Entry]\n"
            "Type=Application\n"
            "Name=focustimer\n"
            "Comment=Pomodoro timer\n"
            f"Exec={exec_line}\n"
            "Terminal=true\n"
            "X-GNOME-Autostart-enabled=true\n"
        ).encode("utf-8")
