"""Rotating file log for timer transitions, store recovery and platform errors.

Nothing is printed to the terminal; the full-screen timer owns it. Run
``focustimer version`` to see where the file lives.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "focustimer_cli"
_LOG_FILE = "focustimer.log"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Path of the active log file (it may not exist yet)."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _build_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger() -> logging.Logger:
    """Return the ``focustimer_cli`` logger, attaching the file handler once.

    Engine, store and service modules log through ``logging.getLogger(__name__)``
    and reach the file by propagation.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            logger.addHandler(_build_handler(log_file_path()))
        logger.propagate = False
        _logger = logger
    return _logger
