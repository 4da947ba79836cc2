"""Data models for focustimer CLI."""

from .config_models import TimerSettings
from .exceptions import FocusTimerError, PlatformError

__all__ = ["FocusTimerError", "PlatformError", "TimerSettings"]
