"""Timer service: wires the engine to settings, history and persistence.

Every CLI invocation builds one TimerService, which restores the saved timer
snapshot, applies a single operation and saves the snapshot again. Because
the snapshot stores the deadline rather than a countdown, a timer keeps
running between invocations without any process alive.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from focustimer_cli.models.config_models import TimerSettings
from focustimer_cli.models.timer.engine import TimerEngine, local_now
from focustimer_cli.models.timer.history import RETENTION_DAYS, HistoryStore
from focustimer_cli.models.timer.messages import mode_name
from focustimer_cli.models.timer.scheduler import Scheduler
from focustimer_cli.models.timer.state import IntervalMode, TimerStateManager
from focustimer_cli.repositories.repository import KeyValueStore
from focustimer_cli.services.config_service import (
    SettingsService,
    get_settings_service,
    get_store,
)
from focustimer_cli.services.notification_service import DesktopNotifier, Notifier

logger = logging.getLogger(__name__)

MODE_ALIASES = {
    "focus": IntervalMode.FOCUS,
    "work": IntervalMode.FOCUS,
    "short": IntervalMode.SHORT_BREAK,
    "short_break": IntervalMode.SHORT_BREAK,
    "long": IntervalMode.LONG_BREAK,
    "long_break": IntervalMode.LONG_BREAK,
}


def parse_mode(value: str) -> IntervalMode:
    """Parse a user-supplied mode name.

    Raises:
        ValueError: If the name is not recognised
    """
    try:
        return MODE_ALIASES[value.strip().lower().replace("-", "_")]
    except KeyError:
        raise ValueError(
            f"Unknown mode '{value}'. Use one of: focus, short, long"
        ) from None


class TimerService:
    """Owns one TimerEngine and keeps its snapshot persisted."""

    def __init__(
        self,
        store: KeyValueStore,
        settings_service: SettingsService | None = None,
        notifier: Notifier | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self.store = store
        self.settings_service = settings_service or SettingsService(store)
        self.state_manager = TimerStateManager(store)
        self.history = HistoryStore(store, today=lambda: clock().date())
        self.history.prune(RETENTION_DAYS)

        self.engine = TimerEngine(
            settings=self.settings_service.settings,
            history=self.history,
            notifier=notifier,
            scheduler=scheduler,
            clock=clock,
            state=self.state_manager.load(),
        )
        self.settings_service.add_listener(self._on_settings_changed)

    def _on_settings_changed(self, old: TimerSettings, new: TimerSettings) -> None:
        self.engine.update_settings(new)
        self.save()

    def save(self) -> None:
        self.state_manager.save(self.engine.state)

    def close(self) -> None:
        """Persist and detach from the settings service."""
        self.save()
        self.settings_service.remove_listener(self._on_settings_changed)

    def status(self) -> dict[str, Any]:
        """Refresh the countdown and describe the timer."""
        self.engine.tick()
        self.save()
        state = self.engine.state
        language = self.engine.settings.language
        return {
            "mode": state.mode.value,
            "mode_name": mode_name(state.mode.value, language),
            "time": self.engine.time_string,
            "remaining_seconds": state.remaining_seconds,
            "running": state.running,
            "progress": round(self.engine.progress, 3),
            "completed_today": state.completed_focus_count_today,
            "deadline": state.deadline.isoformat() if state.deadline else None,
        }


def get_timer_service(
    notifier: Notifier | None = None,
    scheduler: Scheduler | None = None,
) -> TimerService:
    """Build a TimerService on the default store and settings service."""
    if notifier is None:
        notifier = DesktopNotifier()
    return TimerService(
        store=get_store(),
        settings_service=get_settings_service(),
        notifier=notifier,
        scheduler=scheduler,
    )
