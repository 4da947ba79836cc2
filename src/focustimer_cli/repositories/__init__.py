"""Repository interfaces for focustimer CLI."""

from .repository import KeyValueStore

__all__ = ["KeyValueStore"]
