"""Repository abstraction layer for focustimer CLI.

Settings, history and the timer snapshot all live in one process-local
key-value store. This module defines that store's interface so the timer
engine and history store can run against a JSON file in production and an
in-memory dictionary in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Abstract base class for persisted key-value state.

    Values are JSON-compatible (int, bool, str, dict, list). Every ``set`` and
    ``delete`` must be atomic with respect to process termination: a reader
    sees either the previous document or the new one, never a partial write.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default`` when absent."""
        raise NotImplementedError("Subclasses must implement get()")

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        raise NotImplementedError("Subclasses must implement set()")

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""
        raise NotImplementedError("Subclasses must implement delete()")

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        raise NotImplementedError("Subclasses must implement keys()")

    def __contains__(self, key: str) -> bool:
        return key in self.keys()
