"""Localized notification strings."""

from __future__ import annotations

from typing import Literal

NotificationKind = Literal["focus_done", "break_done"]

MESSAGES: dict[str, dict[str, tuple[str, str]]] = {
    "en": {
        "focus_done": ("Focus complete", "Nice work. Time for a break."),
        "break_done": ("Break is over", "Ready for the next focus session?"),
    },
    "zh": {
        "focus_done": ("专注完成", "干得好，休息一下吧。"),
        "break_done": ("休息结束", "准备好开始下一个番茄了吗？"),
    },
}

MODE_NAMES: dict[str, dict[str, str]] = {
    "en": {"focus": "Focus", "short_break": "Short Break", "long_break": "Long Break"},
    "zh": {"focus": "专注", "short_break": "短休息", "long_break": "长休息"},
}


def notification_text(kind: NotificationKind, language: str = "en") -> tuple[str, str]:
    """Return ``(title, body)`` for a notification, falling back to English."""
    table = MESSAGES.get(language, MESSAGES["en"])
    return table.get(kind, MESSAGES["en"][kind])


def mode_name(mode: str, language: str = "en") -> str:
    """Display name for an interval mode value."""
    return MODE_NAMES.get(language, MODE_NAMES["en"]).get(mode, mode)
