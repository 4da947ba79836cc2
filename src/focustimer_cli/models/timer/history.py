"""Day-keyed history of completed focus intervals."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import Any, NamedTuple

from focustimer_cli.repositories.repository import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "pomodoroHistory"
RETENTION_DAYS = 30


class DayCount(NamedTuple):
    day: str  # YYYY-MM-DD
    count: int


def day_key(day: date | str) -> str:
    """Return the storage key for ``day``."""
    if isinstance(day, str):
        return day
    return day.isoformat()


def _parse_day(key: Any) -> date | None:
    if not isinstance(key, str):
        return None
    try:
        return date.fromisoformat(key)
    except ValueError:
        return None


def _coerce_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


class HistoryStore:
    """Completed focus counts per calendar day.

    The whole mapping lives under one store key, so every increment and prune
    is a single atomic replace of the persisted state.
    """

    def __init__(
        self,
        store: KeyValueStore,
        today: Callable[[], date] | None = None,
    ):
        self.store = store
        self._today = today or date.today

    def _load(self) -> dict[str, Any]:
        history = self.store.get(HISTORY_KEY, {})
        if not isinstance(history, dict):
            logger.warning("history record malformed, treating as empty")
            return {}
        return history

    def get_count(self, day: date | str) -> int:
        """Return the count stored for ``day``, 0 if absent."""
        return _coerce_count(self._load().get(day_key(day)))

    def increment(self, day: date | str | None = None) -> int:
        """Add one completed focus interval to ``day`` (default today).

        Returns:
            The new count for that day
        """
        key = day_key(day if day is not None else self._today())
        history = self._load()
        history[key] = _coerce_count(history.get(key)) + 1
        self.store.set(HISTORY_KEY, history)
        logger.debug("history %s -> %d", key, history[key])
        return history[key]

    def recent(self, days: int) -> list[DayCount]:
        """Counts for the last ``days`` calendar days ending today, oldest first.

        Days without a record are included with a zero count.
        """
        if days <= 0:
            return []
        today = self._today()
        history = self._load()
        result = []
        for offset in range(days - 1, -1, -1):
            key = day_key(today - timedelta(days=offset))
            result.append(DayCount(key, _coerce_count(history.get(key))))
        return result

    def total(self, days: int) -> int:
        """Sum of the counts returned by ``recent(days)``."""
        return sum(entry.count for entry in self.recent(days))

    def prune(self, retention_days: int = RETENTION_DAYS) -> int:
        """Remove records strictly older than ``today - retention_days``.

        Keys that are not valid dates are removed too.

        Returns:
            Number of records removed
        """
        cutoff = self._today() - timedelta(days=retention_days)
        history = self._load()
        kept = {}
        for key, value in history.items():
            parsed = _parse_day(key)
            if parsed is not None and parsed >= cutoff:
                kept[key] = value

        removed = len(history) - len(kept)
        if removed:
            self.store.set(HISTORY_KEY, kept)
            logger.info("pruned %d history records older than %s", removed, cutoff)
        return removed
