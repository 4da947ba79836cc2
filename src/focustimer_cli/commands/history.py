"""History and statistics commands."""

import typer

from focustimer_cli.models.timer.history import RETENTION_DAYS
from focustimer_cli.models.timer.ui import render_history
from focustimer_cli.services.timer_service import get_timer_service
from focustimer_cli.utils.exit_codes import ERROR_INVALID_ARGS
from focustimer_cli.utils.typer_helpers import SuggestingGroup
from focustimer_cli.utils.ui.formatters import format_output, get_console

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Completed pomodoro history")


@app.command("show")
@command_wrapper
def show_history(
    days: int = typer.Option(7, "--days", "-d", help="Number of days to show"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show completed pomodoros per day."""
    if not 1 <= days <= RETENTION_DAYS:
        raise AppError(
            f"--days must be between 1 and {RETENTION_DAYS}",
            exit_code=ERROR_INVALID_ARGS,
        )

    service = get_timer_service()
    service.engine.tick()
    entries = service.engine.recent_history(days)
    service.close()

    if output != "table":
        format_output([entry._asdict() for entry in entries], output)
        return

    console.print(f"\n[bold]Pomodoros (last {days} days)[/bold]\n")
    console.print(render_history(entries, today=entries[-1].day))
    console.print(f"\nTotal: [bold]{sum(e.count for e in entries)}[/bold]\n")


@app.command("stats")
@command_wrapper
def history_stats(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show today, this week and this month totals."""
    service = get_timer_service()
    engine = service.engine
    engine.tick()
    service.close()

    stats = {
        "today": engine.completed_focus_count_today,
        "this_week": engine.total_pomodoros(7),
        "last_30_days": engine.total_pomodoros(RETENTION_DAYS),
    }
    format_output(stats, output)
