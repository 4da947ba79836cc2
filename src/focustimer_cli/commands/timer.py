"""Pomodoro timer commands for focustimer CLI."""

import typer

from focustimer_cli.models.timer.scheduler import PollingScheduler
from focustimer_cli.models.timer.ui import TimerDisplay
from focustimer_cli.services.notification_service import DesktopNotifier
from focustimer_cli.services.timer_service import (
    TimerService,
    get_timer_service,
    parse_mode,
)
from focustimer_cli.utils.exit_codes import ERROR_INVALID_ARGS
from focustimer_cli.utils.typer_helpers import SuggestingGroup
from focustimer_cli.utils.ui.formatters import (
    format_output,
    format_success,
    get_console,
)

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Pomodoro timer controls")


def _report(service: TimerService, message: str, output: str) -> None:
    status = service.status()
    service.close()
    if output == "table":
        format_success(message)
    format_output(status, output)


@app.command("start")
@command_wrapper
def start_timer(output: str = typer.Option("table", "--output", "-o", help="Output format")) -> None:
    """Start (or resume) the current interval."""
    service = get_timer_service()
    service.engine.tick()
    service.engine.start()
    _report(service, "Timer running", output)


@app.command("pause")
@command_wrapper
def pause_timer(output: str = typer.Option("table", "--output", "-o", help="Output format")) -> None:
    """Pause the running interval."""
    service = get_timer_service()
    service.engine.pause()
    _report(service, "Timer paused", output)


@app.command("reset")
@command_wrapper
def reset_timer(output: str = typer.Option("table", "--output", "-o", help="Output format")) -> None:
    """Stop and refill the current interval."""
    service = get_timer_service()
    service.engine.reset()
    _report(service, "Timer reset", output)


@app.command("skip")
@command_wrapper
def skip_interval(output: str = typer.Option("table", "--output", "-o", help="Output format")) -> None:
    """Skip to the next interval without counting this one."""
    service = get_timer_service()
    service.engine.tick()
    service.engine.skip_to_next()
    _report(service, "Skipped to next interval", output)


@app.command("mode")
@command_wrapper
def switch_mode(
    mode: str = typer.Argument(..., help="focus, short or long"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Switch to another interval type."""
    try:
        target = parse_mode(mode)
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e

    service = get_timer_service()
    service.engine.tick()
    service.engine.switch_mode(target)
    _report(service, f"Switched to {target.value.replace('_', ' ')}", output)


@app.command("status")
@command_wrapper
def timer_status(output: str = typer.Option("table", "--output", "-o", help="Output format")) -> None:
    """Show the current interval and time left."""
    service = get_timer_service()
    status = service.status()
    service.close()
    format_output(status, output)


@app.command("run")
@command_wrapper
def run_timer() -> None:
    """Open the full-screen timer."""
    scheduler = PollingScheduler()
    service = get_timer_service(
        notifier=DesktopNotifier(console=console), scheduler=scheduler
    )
    result = TimerDisplay(console).run(service, scheduler)
    service.close()

    engine = service.engine
    if engine.running:
        console.print(
            f"[dim]Timer still running ({engine.time_string} left). "
            "Use 'focustimer timer status' to check on it.[/dim]"
        )
    if result == "interrupted":
        console.print("[yellow]Interrupted[/yellow]")
