"""Settings service for focustimer CLI.

This module provides the SettingsService class, the single source of truth
for timer settings. It handles:

- Reading settings from the key-value store with defaults for anything
  missing or corrupted
- Validating, clamping and persisting changes
- Notifying registered listeners after a change is persisted
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from focustimer_cli.adapters.json_store import JsonFileStore
from focustimer_cli.models.config_models import TimerSettings
from focustimer_cli.repositories.repository import KeyValueStore

logger = logging.getLogger(__name__)

SettingsListener = Callable[[TimerSettings, TimerSettings], None]


class SettingsService:
    """Loads, updates and persists TimerSettings.

    Each setting lives under its own camelCase key in the store. Listeners
    receive ``(old, new)`` after every successful update or reset.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._settings: TimerSettings | None = None
        self._listeners: list[SettingsListener] = []

    @property
    def settings(self) -> TimerSettings:
        """Get or load the current settings."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> TimerSettings:
        """Read settings from the store.

        Malformed values are replaced by their defaults; this never raises.
        """
        raw: dict[str, Any] = {}
        for name, key in TimerSettings.storage_keys().items():
            value = self.store.get(key)
            if value is not None:
                raw[name] = value
        settings = TimerSettings.model_validate(raw)

        for name, value in raw.items():
            if getattr(settings, name) != value:
                logger.warning(
                    "setting %s=%r corrected to %r", name, value, getattr(settings, name)
                )
        self._settings = settings
        return settings

    def add_listener(self, listener: SettingsListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SettingsListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update(self, key: str, value: Any) -> Any:
        """Set one setting by field name or storage key.

        Returns:
            The effective value after clamping/defaulting

        Raises:
            KeyError: If ``key`` names no setting
        """
        name = TimerSettings.resolve_key(key)
        old = self.settings
        new = TimerSettings.model_validate({**old.model_dump(), name: value})
        self._persist(new)
        self._emit(old, new)
        return getattr(new, name)

    def reset(self, key: str | None = None) -> TimerSettings:
        """Reset one setting, or all of them, to defaults.

        Raises:
            KeyError: If ``key`` names no setting
        """
        old = self.settings
        defaults = TimerSettings()
        if key is None:
            new = defaults
        else:
            name = TimerSettings.resolve_key(key)
            new = old.model_copy(update={name: getattr(defaults, name)})
        self._persist(new)
        self._emit(old, new)
        return new

    def as_dict(self) -> dict[str, Any]:
        """Settings keyed by their storage names."""
        return self.settings.model_dump(by_alias=True)

    def _persist(self, settings: TimerSettings) -> None:
        for name, key in TimerSettings.storage_keys().items():
            value = getattr(settings, name)
            if self.store.get(key) != value:
                self.store.set(key, value)
        self._settings = settings

    def _emit(self, old: TimerSettings, new: TimerSettings) -> None:
        if old == new:
            return
        for listener in list(self._listeners):
            listener(old, new)


@lru_cache(maxsize=1)
def get_store() -> KeyValueStore:
    """Get the process-wide store under the platform data directory."""
    return JsonFileStore()


@lru_cache(maxsize=1)
def get_settings_service() -> SettingsService:
    """Get a cached SettingsService bound to the default store."""
    return SettingsService(get_store())
