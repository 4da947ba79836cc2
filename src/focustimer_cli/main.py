"""Main entry point for focustimer CLI."""

import typer

from focustimer_cli import __version__
from focustimer_cli.commands import autolaunch, config, history, timer
from focustimer_cli.utils.logger import log_file_path
from focustimer_cli.utils.typer_helpers import SuggestingGroup
from focustimer_cli.utils.ui.formatters import get_console

app = typer.Typer(
    name="focustimer",
    cls=SuggestingGroup,
    help="A Pomodoro timer for the terminal",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(timer.app, name="timer", help="Start, pause and watch the timer")
app.add_typer(history.app, name="history", help="Completed pomodoro history")
app.add_typer(config.app, name="config", help="Timer settings")
app.add_typer(autolaunch.app, name="autolaunch", help="Open the timer at login")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]focustimer[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {log_file_path()}[/dim]")


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
