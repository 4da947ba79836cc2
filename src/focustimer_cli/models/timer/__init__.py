"""Pomodoro timer core: state machine, history and tick scheduling."""

from .engine import TimerEngine
from .history import DayCount, HistoryStore
from .scheduler import PollingScheduler, Scheduler
from .state import IntervalMode, TimerState, TimerStateManager

__all__ = [
    "DayCount",
    "HistoryStore",
    "IntervalMode",
    "PollingScheduler",
    "Scheduler",
    "TimerEngine",
    "TimerState",
    "TimerStateManager",
]
