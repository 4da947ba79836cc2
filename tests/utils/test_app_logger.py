"""Tests for the application logger."""

import logging
import logging.handlers

from focustimer_cli.utils import logger as logger_mod
from focustimer_cli.utils.logger import get_logger


def test_logger_writes_to_log_dir(tmp_path):
    log = get_logger()

    log.info("hello from test")
    for handler in log.handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "focustimer.log"
    assert log_file.exists()
    assert "hello from test" in log_file.read_text()


def test_logger_is_singleton():
    assert get_logger() is get_logger()
    assert len(get_logger().handlers) == 1


def test_rotating_handler_configured():
    handler = get_logger().handlers[0]

    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == logger_mod._MAX_BYTES
    assert handler.backupCount == 3


def test_module_loggers_share_the_file(tmp_path):
    get_logger()

    logging.getLogger("focustimer_cli.models.timer.engine").warning("child record")
    for handler in get_logger().handlers:
        handler.flush()

    assert "child record" in (tmp_path / "logs" / "focustimer.log").read_text()


def test_log_file_path_under_user_log_dir(tmp_path):
    assert logger_mod.log_file_path() == tmp_path / "logs" / "focustimer.log"


def test_log_file_path_does_not_create_directory(tmp_path):
    logger_mod.log_file_path()

    assert not (tmp_path / "logs").exists()
