"""JSON file key-value store with atomic writes."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from focustimer_cli.repositories.repository import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Key-value store persisted as a single JSON object on disk.

    The document is re-read on every access, so several CLI invocations
    observe each other's writes. Writes go to a temporary file in the same
    directory which is then renamed over the original.
    """

    def __init__(self, path: Path | None = None):
        """Initialize the store."""
        if path is None:
            from platformdirs import user_data_dir

            path = Path(user_data_dir("focustimer_cli")) / "store.json"

        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> dict[str, Any]:
        """Load the document. Returns an empty dict if missing or invalid."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("store %s unreadable, starting empty: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("store %s is not a JSON object, starting empty", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        """Replace the document atomically."""
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> list[str]:
        return list(self._read())
