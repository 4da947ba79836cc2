"""Launch-at-login commands."""

import typer

from focustimer_cli.models.exceptions import PlatformError
from focustimer_cli.services.autolaunch_service import AutoLaunchService
from focustimer_cli.utils.exit_codes import ERROR_PLATFORM
from focustimer_cli.utils.typer_helpers import SuggestingGroup
from focustimer_cli.utils.ui.formatters import format_success, get_console

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Open the timer when you log in")


def _set(enabled: bool) -> None:
    service = AutoLaunchService()
    try:
        service.set_enabled(enabled)
    except PlatformError as e:
        raise AppError(str(e), exit_code=ERROR_PLATFORM) from e


@app.command("on")
@command_wrapper
def enable() -> None:
    """Open the timer at login."""
    _set(True)
    format_success("Launch at login enabled")


@app.command("off")
@command_wrapper
def disable() -> None:
    """Stop opening the timer at login."""
    _set(False)
    format_success("Launch at login disabled")


@app.command("status")
@command_wrapper
def status() -> None:
    """Show whether launch at login is enabled."""
    if AutoLaunchService().is_enabled():
        console.print("[green]enabled[/green]")
    else:
        console.print("[dim]disabled[/dim]")
