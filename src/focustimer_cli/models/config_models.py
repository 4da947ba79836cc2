"""Timer configuration models.

Settings are persisted as individual camelCase keys in the key-value store.
Reading them never fails: out-of-range integers are clamped into range and
malformed values fall back to the documented default.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DURATION_MIN = 1
DURATION_MAX = 120
LONG_BREAK_INTERVAL_MIN = 2
LONG_BREAK_INTERVAL_MAX = 10

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_LONG_BREAK_INTERVAL = 4

SUPPORTED_LANGUAGES = ("en", "zh")

Language = Literal["en", "zh"]


def _coerce_int(value: Any, default: int, lower: int, upper: int) -> int:
    """Parse ``value`` as an int clamped to [lower, upper]."""
    # bool is an int subclass; a stored True is not a duration
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        return default
    return min(max(value, lower), upper)


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    return default


class TimerSettings(BaseModel):
    """User-adjustable timer settings."""

    model_config = {"populate_by_name": True}

    focus_minutes: int = Field(default=DEFAULT_FOCUS_MINUTES, alias="focusMinutes")
    short_break_minutes: int = Field(
        default=DEFAULT_SHORT_BREAK_MINUTES, alias="shortBreakMinutes"
    )
    long_break_minutes: int = Field(
        default=DEFAULT_LONG_BREAK_MINUTES, alias="longBreakMinutes"
    )
    long_break_interval: int = Field(
        default=DEFAULT_LONG_BREAK_INTERVAL,
        alias="longBreakInterval",
        description="Completed focus intervals before a long break",
    )
    auto_start_next: bool = Field(default=False, alias="autoStartNext")
    language: Language = Field(default="en", description="Notification language")

    @field_validator("focus_minutes", mode="before")
    @classmethod
    def clamp_focus(cls, v: Any) -> int:
        return _coerce_int(v, DEFAULT_FOCUS_MINUTES, DURATION_MIN, DURATION_MAX)

    @field_validator("short_break_minutes", mode="before")
    @classmethod
    def clamp_short_break(cls, v: Any) -> int:
        return _coerce_int(v, DEFAULT_SHORT_BREAK_MINUTES, DURATION_MIN, DURATION_MAX)

    @field_validator("long_break_minutes", mode="before")
    @classmethod
    def clamp_long_break(cls, v: Any) -> int:
        return _coerce_int(v, DEFAULT_LONG_BREAK_MINUTES, DURATION_MIN, DURATION_MAX)

    @field_validator("long_break_interval", mode="before")
    @classmethod
    def clamp_interval(cls, v: Any) -> int:
        return _coerce_int(
            v,
            DEFAULT_LONG_BREAK_INTERVAL,
            LONG_BREAK_INTERVAL_MIN,
            LONG_BREAK_INTERVAL_MAX,
        )

    @field_validator("auto_start_next", mode="before")
    @classmethod
    def parse_auto_start(cls, v: Any) -> bool:
        return _coerce_bool(v, False)

    @field_validator("language", mode="before")
    @classmethod
    def known_language(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip().lower() in SUPPORTED_LANGUAGES:
            return v.strip().lower()
        return "en"

    @classmethod
    def storage_keys(cls) -> dict[str, str]:
        """Map field names to the keys they are persisted under."""
        return {
            name: field.alias or name for name, field in cls.model_fields.items()
        }

    @classmethod
    def resolve_key(cls, key: str) -> str:
        """Return the field name for a field name or storage alias.

        Raises:
            KeyError: If ``key`` names no setting
        """
        for name, alias in cls.storage_keys().items():
            if key in (name, alias):
                return name
        raise KeyError(key)
