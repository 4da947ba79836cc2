"""Pomodoro timer engine.

Remaining time is always derived from a wall-clock deadline
(``ceil(deadline - now)``) rather than decremented per tick, so the countdown
stays correct across laptop sleep, a suspended process, or a tick loop that
fell behind. The recurring tick only decides *when* to look at the clock.

Mode advance
------------
Focus       -> LongBreak if count > 0 and count % long_break_interval == 0,
               otherwise ShortBreak
ShortBreak  -> Focus
LongBreak   -> Focus

On natural completion of a Focus interval the count is incremented first and
then checked. ``skip_to_next()`` checks the current count without incrementing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from focustimer_cli.models.config_models import TimerSettings

from .history import DayCount, HistoryStore
from .messages import notification_text
from .scheduler import ScheduledCallback, Scheduler
from .state import IntervalMode, TimerState

if TYPE_CHECKING:
    from focustimer_cli.services.notification_service import Notifier

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 0.5


def local_now() -> datetime:
    return datetime.now().astimezone()


class TimerEngine:
    """Owns a TimerState and exposes its transitions.

    Every operation is total: invalid preconditions are silent no-ops.
    """

    def __init__(
        self,
        settings: TimerSettings,
        history: HistoryStore,
        notifier: Notifier | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] = local_now,
        state: TimerState | None = None,
    ):
        self._settings = settings
        self.history = history
        self.notifier = notifier
        self.scheduler = scheduler
        self._clock = clock
        self._scheduled: ScheduledCallback | None = None
        self._generation = 0

        today = clock().date()
        if state is None:
            state = TimerState(
                mode=IntervalMode.FOCUS,
                remaining_seconds=self.duration_for(IntervalMode.FOCUS),
                completed_focus_count_today=history.get_count(today),
                count_day=today,
            )
        self.state = state
        self._sync_day(today)

        if state.running:
            self._schedule_tick()

    # ---- Read-only properties ----

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def mode(self) -> IntervalMode:
        return self.state.mode

    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def completed_focus_count_today(self) -> int:
        return self.state.completed_focus_count_today

    @property
    def time_string(self) -> str:
        """Remaining time as zero-padded MM:SS."""
        minutes, seconds = divmod(self.state.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def progress(self) -> float:
        """Fraction of the current interval already elapsed, 0.0 to 1.0."""
        total = self.duration_for(self.state.mode)
        fraction = 1.0 - self.state.remaining_seconds / total
        return min(max(fraction, 0.0), 1.0)

    def duration_for(self, mode: IntervalMode) -> int:
        """Configured duration of ``mode`` in seconds."""
        if mode is IntervalMode.FOCUS:
            return self._settings.focus_minutes * 60
        if mode is IntervalMode.SHORT_BREAK:
            return self._settings.short_break_minutes * 60
        return self._settings.long_break_minutes * 60

    def recent_history(self, days: int) -> list[DayCount]:
        return self.history.recent(days)

    def total_pomodoros(self, days: int) -> int:
        return self.history.total(days)

    # ---- Transitions ----

    def start(self) -> None:
        """Start counting down. No-op while already running."""
        if self.state.running:
            return
        self.state.running = True
        self.state.deadline = self._clock() + timedelta(
            seconds=self.state.remaining_seconds
        )
        self._schedule_tick()
        logger.debug(
            "started %s, %ds left, deadline %s",
            self.state.mode.value,
            self.state.remaining_seconds,
            self.state.deadline.isoformat(),
        )

    def pause(self) -> None:
        """Freeze the countdown at the time left on the deadline.

        If the deadline has already passed, the interval completes instead.
        """
        if not self.state.running:
            return
        self.tick()
        if self.state.running:
            self._halt()
            logger.debug("paused at %ds", self.state.remaining_seconds)

    def reset(self) -> None:
        self._halt()
        self.state.remaining_seconds = self.duration_for(self.state.mode)

    def switch_mode(self, mode: IntervalMode) -> None:
        self._halt()
        self.state.mode = mode
        self.state.remaining_seconds = self.duration_for(mode)
        logger.debug("switched to %s", mode.value)

    def skip_to_next(self) -> None:
        """Move to the next interval without crediting the current one."""
        self._halt()
        self._sync_day(self._clock().date())
        self.state.mode = self._next_mode()
        self.state.remaining_seconds = self.duration_for(self.state.mode)
        logger.debug("skipped to %s", self.state.mode.value)

    def tick(self) -> None:
        """Recompute remaining time from the deadline; complete at zero."""
        if not self.state.running or self.state.deadline is None:
            return
        left = (self.state.deadline - self._clock()).total_seconds()
        remaining = math.ceil(left)
        if remaining > 0:
            self.state.remaining_seconds = remaining
        else:
            self.state.remaining_seconds = 0
            self._complete()

    def apply_duration_change(self, mode: IntervalMode) -> None:
        """Retarget an idle timer after its mode's duration setting changed."""
        if mode is self.state.mode and not self.state.running:
            self.state.remaining_seconds = self.duration_for(mode)

    def update_settings(self, settings: TimerSettings) -> None:
        """Adopt new settings, retargeting the idle timer if its duration moved."""
        old = self._settings
        self._settings = settings
        for mode in IntervalMode:
            if self._duration_minutes(old, mode) != self._duration_minutes(settings, mode):
                self.apply_duration_change(mode)

    # ---- Internals ----

    @staticmethod
    def _duration_minutes(settings: TimerSettings, mode: IntervalMode) -> int:
        if mode is IntervalMode.FOCUS:
            return settings.focus_minutes
        if mode is IntervalMode.SHORT_BREAK:
            return settings.short_break_minutes
        return settings.long_break_minutes

    def _sync_day(self, today: date) -> None:
        """Reload the cached count if it belongs to an earlier day."""
        if self.state.count_day != today:
            self.state.completed_focus_count_today = self.history.get_count(today)
            self.state.count_day = today

    def _next_mode(self) -> IntervalMode:
        if self.state.mode.is_break:
            return IntervalMode.FOCUS
        count = self.state.completed_focus_count_today
        if count > 0 and count % self._settings.long_break_interval == 0:
            return IntervalMode.LONG_BREAK
        return IntervalMode.SHORT_BREAK

    def _halt(self) -> None:
        """Stop the countdown and drop the scheduled tick."""
        self.state.running = False
        self.state.deadline = None
        self._generation += 1
        if self._scheduled is not None:
            self._scheduled.cancel()
            self._scheduled = None

    def _schedule_tick(self) -> None:
        if self.scheduler is None:
            return
        generation = self._generation

        def on_tick() -> None:
            # a callback from an earlier start must never touch state
            if generation != self._generation or not self.state.running:
                return
            self.tick()

        self._scheduled = self.scheduler.schedule_repeating(
            TICK_INTERVAL_SECONDS, on_tick
        )

    def _complete(self) -> None:
        self._halt()
        completed = self.state.mode

        if completed is IntervalMode.FOCUS:
            today = self._clock().date()
            self.state.completed_focus_count_today += 1
            stored = self.history.increment(today)
            if self.state.count_day != today:
                # crossed midnight since the count was loaded
                self.state.completed_focus_count_today = stored
                self.state.count_day = today
            logger.info(
                "focus complete, %d today", self.state.completed_focus_count_today
            )
            self._notify("focus_done")
        else:
            logger.info("%s complete", completed.value)
            self._notify("break_done")

        self.state.mode = self._next_mode()
        self.state.remaining_seconds = self.duration_for(self.state.mode)

        if self._settings.auto_start_next:
            self.start()

    def _notify(self, kind: str) -> None:
        if self.notifier is None:
            return
        title, body = notification_text(kind, self._settings.language)
        self.notifier.request_notification(title, body)
