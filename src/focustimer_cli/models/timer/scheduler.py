"""Recurring callback scheduling for the timer tick.

The scheduler is only a polling trigger. The engine derives remaining time
from its stored deadline, so a late, skipped or doubled callback is harmless.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable


class ScheduledCallback:
    """Handle for a repeating callback registered with a scheduler."""

    def __init__(self, interval: float, callback: Callable[[], None], next_run: float):
        self.interval = interval
        self.callback = callback
        self.next_run = next_run
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler(ABC):
    """Source of recurring callbacks."""

    @abstractmethod
    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledCallback:
        """Call ``callback`` every ``interval`` seconds until cancelled."""
        raise NotImplementedError("Subclasses must implement schedule_repeating()")


class PollingScheduler(Scheduler):
    """Scheduler pumped by the owner's event loop.

    ``run_pending()`` must be called regularly from the thread that owns the
    timer. Callbacks never run on another thread. Missed periods are not
    replayed: a callback that is late by several intervals runs once.
    """

    def __init__(self, monotonic: Callable[[], float] = time.monotonic):
        self._monotonic = monotonic
        self._callbacks: list[ScheduledCallback] = []

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledCallback:
        handle = ScheduledCallback(interval, callback, self._monotonic() + interval)
        self._callbacks.append(handle)
        return handle

    @property
    def pending(self) -> int:
        """Number of live callbacks."""
        return sum(1 for handle in self._callbacks if not handle.cancelled)

    def run_pending(self) -> int:
        """Run every due callback once.

        Returns:
            Number of callbacks invoked
        """
        now = self._monotonic()
        ran = 0
        for handle in list(self._callbacks):
            # an earlier callback in this pass may have cancelled this one
            if handle.cancelled or handle.next_run > now:
                continue
            handle.next_run = now + handle.interval
            handle.callback()
            ran += 1
        self._callbacks = [h for h in self._callbacks if not h.cancelled]
        return ran
