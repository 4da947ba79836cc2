"""Full-screen timer UI and history rendering."""

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.table import Table
from rich.text import Text

from .engine import TimerEngine
from .history import DayCount
from .messages import mode_name
from .scheduler import PollingScheduler
from .state import IntervalMode

if TYPE_CHECKING:
    from focustimer_cli.services.timer_service import TimerService

MODE_COLORS = {
    IntervalMode.FOCUS: "dark_orange",
    IntervalMode.SHORT_BREAK: "dark_cyan",
    IntervalMode.LONG_BREAK: "medium_purple",
}

MODE_KEYS = {
    "1": IntervalMode.FOCUS,
    "2": IntervalMode.SHORT_BREAK,
    "3": IntervalMode.LONG_BREAK,
}


def progress_bar(fraction: float, width: int = 40) -> str:
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


def handle_key(engine: TimerEngine, key: str) -> bool:
    """Apply a keypress to the engine. Returns True if the key was handled."""
    if key in (" ", "p"):
        if engine.running:
            engine.pause()
        else:
            engine.start()
    elif key == "r":
        engine.reset()
    elif key == "s":
        engine.skip_to_next()
    elif key in MODE_KEYS:
        engine.switch_mode(MODE_KEYS[key])
    else:
        return False
    return True


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def create_layout(self, engine: TimerEngine) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        mode = engine.mode
        color = MODE_COLORS[mode]
        title = mode_name(mode.value, engine.settings.language)
        if not engine.running:
            title = f"{title} (paused)"

        header_text = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(
            Align.center(self._create_body_content(engine), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(engine.running), vertical="middle")
        )
        return layout

    def _create_body_content(self, engine: TimerEngine) -> Group:
        color = MODE_COLORS[engine.mode] if engine.running else "yellow"
        components = [
            Text(engine.time_string, style=f"bold {color}", justify="center"),
            Text(""),
        ]

        pct = int(engine.progress * 100)
        components.append(
            Text(f"{progress_bar(engine.progress)}  {pct}%", style="dim", justify="center")
        )
        components.append(Text(""))

        interval = engine.settings.long_break_interval
        done = engine.completed_focus_count_today
        position = done % interval
        if done and position == 0 and engine.mode is IntervalMode.LONG_BREAK:
            position = interval
        dots = " ".join("●" if i < position else "○" for i in range(interval))
        components.append(Text(dots, style=MODE_COLORS[IntervalMode.FOCUS], justify="center"))
        components.append(Text(f"Completed today: {done}", style="dim", justify="center"))

        return Group(*components)

    def _create_footer_text(self, running: bool) -> Text:
        action = "pause" if running else "start"
        hints = (
            f"space {action}  •  r reset  •  s skip  •  "
            "1/2/3 focus/short/long  •  q quit"
        )
        return Text(hints, style="dim", justify="center")

    def run(
        self,
        service: "TimerService",
        scheduler: PollingScheduler,
        keyboard=None,
        sleep: Callable[[float], None] = time.sleep,
        refresh_seconds: float = 0.25,
    ) -> str:
        """
        Run the fullscreen timer until the user quits.

        Returns 'quit' or 'interrupted'. The timer keeps its deadline after
        quitting, so a running interval continues in the background.
        """
        from .keyboard import KeyboardHandler

        engine = service.engine
        keyboard = keyboard or KeyboardHandler()

        try:
            with Live(
                self.create_layout(engine),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while True:
                    key = keyboard.get_key()
                    if key == "q":
                        return "quit"
                    if key is not None and handle_key(engine, key):
                        service.save()

                    before = (engine.mode, engine.running, engine.completed_focus_count_today)
                    scheduler.run_pending()
                    if (engine.mode, engine.running, engine.completed_focus_count_today) != before:
                        service.save()

                    live.update(self.create_layout(engine))
                    sleep(refresh_seconds)
        except KeyboardInterrupt:
            return "interrupted"
        finally:
            keyboard.stop()
            service.save()


def render_history(entries: list[DayCount], today: str | None = None) -> Table:
    """Render day counts as a table with a horizontal bar per day."""
    peak = max([entry.count for entry in entries] + [1])
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Pomodoros", justify="right")
    table.add_column("")

    for entry in entries:
        bar_len = round(entry.count / peak * 20)
        style = "bold dark_orange" if entry.day == today else "dark_orange"
        table.add_row(entry.day, str(entry.count), Text("█" * bar_len, style=style))
    return table
