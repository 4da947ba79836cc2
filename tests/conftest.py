"""Shared test fixtures and configuration.

Provides a controllable clock, an in-memory store and a recording notifier
so timer behaviour can be tested without touching the filesystem or waiting
on wall-clock time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from focustimer_cli.adapters.memory_store import MemoryStore
from focustimer_cli.models.config_models import TimerSettings
from focustimer_cli.models.timer.engine import TimerEngine
from focustimer_cli.models.timer.history import HistoryStore
from focustimer_cli.models.timer.scheduler import PollingScheduler
from focustimer_cli.services.config_service import SettingsService
from focustimer_cli.services.notification_service import Notifier
from focustimer_cli.services.timer_service import TimerService


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 10, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def today(self):
        return self.now.date()


class FakeMonotonic:
    """Monotonic counter for PollingScheduler."""

    def __init__(self):
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class RecordingNotifier(Notifier):
    """Collects notification requests instead of showing them."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def request_notification(self, title: str, body: str) -> None:
        self.sent.append((title, body))

    @property
    def titles(self) -> list[str]:
        return [title for title, _ in self.sent]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Keep the application log file inside tmp_path."""
    import logging

    import focustimer_cli.utils.logger as logger_mod

    logger_mod._logger = None
    app_logger = logging.getLogger("focustimer_cli")
    app_logger.handlers.clear()
    app_logger.propagate = True
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger_mod._logger = None
    app_logger = logging.getLogger("focustimer_cli")
    app_logger.handlers.clear()
    app_logger.propagate = True


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture()
def scheduler(monotonic) -> PollingScheduler:
    return PollingScheduler(monotonic=monotonic)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def history(store, clock) -> HistoryStore:
    return HistoryStore(store, today=clock.today)


@pytest.fixture()
def make_engine(history, notifier, clock):
    """Factory building a TimerEngine with optional settings overrides."""

    def _make(state=None, scheduler=None, **settings) -> TimerEngine:
        return TimerEngine(
            settings=TimerSettings(**settings),
            history=history,
            notifier=notifier,
            scheduler=scheduler,
            clock=clock,
            state=state,
        )

    return _make


@pytest.fixture()
def engine(make_engine) -> TimerEngine:
    return make_engine()


@pytest.fixture()
def timer_service(store, notifier, clock) -> TimerService:
    """A TimerService wired to the in-memory store and fake clock."""
    return TimerService(
        store=store,
        settings_service=SettingsService(store),
        notifier=notifier,
        clock=clock,
    )


@pytest.fixture()
def patch_timer_service(store, notifier, clock):
    """Make command modules build their TimerService on the in-memory store.

    Yields the shared SettingsService so tests can inspect settings.
    """
    settings_service = SettingsService(store)

    def _build(scheduler=None, **_kwargs):
        return TimerService(
            store=store,
            settings_service=settings_service,
            notifier=notifier,
            scheduler=scheduler,
            clock=clock,
        )

    targets = [
        "focustimer_cli.commands.timer.get_timer_service",
        "focustimer_cli.commands.history.get_timer_service",
        "focustimer_cli.commands.config.get_timer_service",
    ]
    patches = [patch(target, side_effect=_build) for target in targets]
    for p in patches:
        p.start()
    try:
        yield settings_service
    finally:
        for p in patches:
            p.stop()
