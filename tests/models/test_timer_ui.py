"""Tests for the full-screen timer view, key handling and history table."""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from rich.layout import Layout
from rich.table import Table

from focustimer_cli.models.timer.history import DayCount
from focustimer_cli.models.timer.scheduler import PollingScheduler
from focustimer_cli.models.timer.state import STATE_KEY, IntervalMode
from focustimer_cli.models.timer.ui import (
    TimerDisplay,
    handle_key,
    progress_bar,
    render_history,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _string_console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, force_terminal=False, no_color=True, width=100), buf


class ScriptedKeyboard:
    """Returns queued keys, then 'q'."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.stopped = False

    def get_key(self):
        if self.keys:
            key = self.keys.pop(0)
            if isinstance(key, BaseException):
                raise key
            return key
        return "q"

    def stop(self):
        self.stopped = True


# ---------------------------------------------------------------------------
# progress_bar / handle_key
# ---------------------------------------------------------------------------


class TestProgressBar:
    @pytest.mark.parametrize("fraction, filled", [(0.0, 0), (0.5, 20), (1.0, 40)])
    def test_fill(self, fraction, filled):
        bar = progress_bar(fraction)

        assert len(bar) == 40
        assert bar.count("▓") == filled


class TestHandleKey:
    @pytest.mark.parametrize("key", [" ", "p"])
    def test_toggle_start_and_pause(self, engine, key):
        assert handle_key(engine, key) is True
        assert engine.running is True

        handle_key(engine, key)
        assert engine.running is False

    def test_reset(self, engine, clock):
        engine.start()
        clock.advance(100)

        handle_key(engine, "r")

        assert engine.running is False
        assert engine.remaining_seconds == 1500

    def test_skip(self, engine):
        handle_key(engine, "s")
        assert engine.mode is IntervalMode.SHORT_BREAK

    @pytest.mark.parametrize(
        "key, mode",
        [("1", IntervalMode.FOCUS), ("2", IntervalMode.SHORT_BREAK), ("3", IntervalMode.LONG_BREAK)],
    )
    def test_mode_keys(self, engine, key, mode):
        engine.switch_mode(IntervalMode.LONG_BREAK if mode is IntervalMode.FOCUS else IntervalMode.FOCUS)

        handle_key(engine, key)

        assert engine.mode is mode

    def test_unknown_key(self, engine):
        before = engine.state.to_dict()

        assert handle_key(engine, "x") is False
        assert engine.state.to_dict() == before


# ---------------------------------------------------------------------------
# TimerDisplay
# ---------------------------------------------------------------------------


class TestCreateLayout:
    def test_returns_layout_with_sections(self, engine):
        layout = TimerDisplay().create_layout(engine)

        assert isinstance(layout, Layout)
        for name in ("header", "body", "footer"):
            assert layout[name] is not None

    def test_paused_focus_render(self, engine):
        con, buf = _string_console()

        con.print(TimerDisplay(con).create_layout(engine))

        output = buf.getvalue()
        assert "Focus (paused)" in output
        assert "25:00" in output
        assert "space start" in output
        assert "Completed today: 0" in output

    def test_running_break_render(self, make_engine):
        engine = make_engine(language="zh")
        engine.switch_mode(IntervalMode.SHORT_BREAK)
        engine.start()
        con, buf = _string_console()

        con.print(TimerDisplay(con).create_layout(engine))

        output = buf.getvalue()
        assert "短休息" in output
        assert "(paused)" not in output
        assert "05:00" in output
        assert "space pause" in output


class TestRun:
    def test_quit_saves_snapshot(self, timer_service, store):
        con, _ = _string_console()
        keyboard = ScriptedKeyboard([" ", None])

        result = TimerDisplay(con).run(
            timer_service, PollingScheduler(), keyboard=keyboard, sleep=lambda _: None
        )

        assert result == "quit"
        assert keyboard.stopped is True
        assert store.get(STATE_KEY)["running"] is True

    def test_keyboard_interrupt(self, timer_service):
        con, _ = _string_console()
        keyboard = ScriptedKeyboard([KeyboardInterrupt()])

        result = TimerDisplay(con).run(
            timer_service, PollingScheduler(), keyboard=keyboard, sleep=lambda _: None
        )

        assert result == "interrupted"
        assert keyboard.stopped is True

    def test_scheduled_completion_is_saved(self, timer_service, store, clock, notifier):
        con, _ = _string_console()
        scheduler = MagicMock(spec=PollingScheduler)
        engine = timer_service.engine
        engine.start()

        def finish():
            clock.advance(1500)
            engine.tick()
            return 1

        scheduler.run_pending.side_effect = finish
        keyboard = ScriptedKeyboard([None])

        TimerDisplay(con).run(timer_service, scheduler, keyboard=keyboard, sleep=lambda _: None)

        assert store.get(STATE_KEY)["mode"] == "short_break"
        assert notifier.titles == ["Focus complete"]


# ---------------------------------------------------------------------------
# render_history
# ---------------------------------------------------------------------------


class TestRenderHistory:
    def test_rows_and_bars(self):
        entries = [DayCount("2026-03-09", 2), DayCount("2026-03-10", 4)]
        con, buf = _string_console()

        table = render_history(entries, today="2026-03-10")
        con.print(table)

        assert isinstance(table, Table)
        assert table.row_count == 2
        output = buf.getvalue()
        assert "2026-03-09" in output
        assert "█" * 20 in output
        assert "█" * 10 in output

    def test_all_zero(self):
        table = render_history([DayCount("2026-03-10", 0)])

        assert table.row_count == 1
