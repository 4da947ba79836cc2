"""Timer state and snapshot persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from focustimer_cli.repositories.repository import KeyValueStore

logger = logging.getLogger(__name__)

STATE_KEY = "timerState"


class IntervalMode(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not IntervalMode.FOCUS


@dataclass
class TimerState:
    """Mutable timer session.

    ``deadline`` is set if and only if ``running`` is true. The engine is the
    only writer.
    """

    mode: IntervalMode
    remaining_seconds: int
    running: bool = False
    deadline: datetime | None = None
    completed_focus_count_today: int = 0
    count_day: date | None = None  # day the cached count belongs to

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "mode": self.mode.value,
            "remaining_seconds": self.remaining_seconds,
            "running": self.running,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "completed_focus_count_today": self.completed_focus_count_today,
            "count_day": self.count_day.isoformat() if self.count_day else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimerState":
        """Create from dictionary.

        Raises:
            ValueError: If a field is missing or malformed
        """
        try:
            mode = IntervalMode(data["mode"])
            remaining = int(data["remaining_seconds"])
            running = data["running"]
            deadline = (
                datetime.fromisoformat(data["deadline"]) if data.get("deadline") else None
            )
            count = int(data.get("completed_focus_count_today", 0))
            count_day = (
                date.fromisoformat(data["count_day"]) if data.get("count_day") else None
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"invalid timer state: {e}") from e

        if not isinstance(running, bool):
            raise ValueError("invalid timer state: running must be a boolean")
        if remaining < 0 or count < 0:
            raise ValueError("invalid timer state: negative counter")
        if running != (deadline is not None):
            raise ValueError("invalid timer state: deadline/running mismatch")
        if deadline is not None and deadline.tzinfo is None:
            raise ValueError("invalid timer state: deadline has no timezone")

        return cls(
            mode=mode,
            remaining_seconds=remaining,
            running=running,
            deadline=deadline,
            completed_focus_count_today=count,
            count_day=count_day,
        )


class TimerStateManager:
    """Saves and restores the timer snapshot so CLI invocations share a timer."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, state: TimerState) -> None:
        self.store.set(STATE_KEY, state.to_dict())

    def load(self) -> TimerState | None:
        """Load the snapshot. Returns None if missing or invalid."""
        data = self.store.get(STATE_KEY)
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("discarding malformed timer snapshot")
            return None
        try:
            return TimerState.from_dict(data)
        except ValueError as e:
            logger.warning("discarding malformed timer snapshot: %s", e)
            return None

    def delete(self) -> None:
        self.store.delete(STATE_KEY)
