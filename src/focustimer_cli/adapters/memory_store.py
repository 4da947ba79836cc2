"""In-memory key-value store."""

from __future__ import annotations

import copy
from typing import Any

from focustimer_cli.repositories.repository import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dictionary-backed store.

    Values are deep-copied on the way in and out so callers cannot mutate
    stored state behind the store's back, the same as a serialised backend.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
