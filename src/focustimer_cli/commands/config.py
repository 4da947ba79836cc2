"""Settings management commands."""

from typing import Optional

import typer

from focustimer_cli.models.config_models import TimerSettings
from focustimer_cli.services.timer_service import get_timer_service
from focustimer_cli.utils.exit_codes import ERROR_INVALID_ARGS
from focustimer_cli.utils.typer_helpers import SuggestingGroup
from focustimer_cli.utils.ui.formatters import (
    format_output,
    format_success,
    format_warning,
    get_console,
)

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Timer settings")


BOOL_WORDS = ("true", "yes", "on", "1", "false", "no", "off", "0")


def _was_corrected(value: str, effective) -> bool:
    if isinstance(effective, bool):
        return value.strip().lower() not in BOOL_WORDS
    return str(effective) != value.strip().lower()


def _unknown_key(key: str) -> AppError:
    known = ", ".join(TimerSettings.storage_keys().values())
    return AppError(
        f"Unknown setting '{key}'. Known settings: {known}",
        exit_code=ERROR_INVALID_ARGS,
    )


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """View all settings."""
    service = get_timer_service()
    format_output(service.settings_service.as_dict(), output)
    service.close()


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Setting name (e.g. focusMinutes)"),
) -> None:
    """Get a setting value."""
    try:
        name = TimerSettings.resolve_key(key)
    except KeyError as e:
        raise _unknown_key(key) from e

    service = get_timer_service()
    console.print(getattr(service.settings_service.settings, name))
    service.close()


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Setting name (e.g. focusMinutes)"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a setting. Out-of-range numbers are clamped."""
    service = get_timer_service()
    try:
        effective = service.settings_service.update(key, value)
    except KeyError as e:
        raise _unknown_key(key) from e
    finally:
        service.close()

    if _was_corrected(value, effective):
        format_warning(f"'{value}' is not valid for {key}, using {effective}")
    format_success(f"Setting '{key}' set to '{effective}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Setting to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset settings to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all settings"
        if not typer.confirm(f"Reset {target} to defaults?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    service = get_timer_service()
    try:
        service.settings_service.reset(key)
    except KeyError as e:
        raise _unknown_key(key) from e
    finally:
        service.close()

    format_success(f"Reset {key or 'all settings'} to defaults")
