"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger singleton and logging state between tests."""
    import deadline_cli.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None

    existing = logging.getLogger("deadline_cli")
    existing.handlers.clear()

    yield

    logger_mod._logger = None
    for handler in logging.getLogger("deadline_cli").handlers:
        handler.close()
    logging.getLogger("deadline_cli").handlers.clear()
    logging.getLogger("deadline_cli").propagate = True
    logger_mod._logger = original


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from deadline_cli.utils.logger import get_logger

        logger = get_logger()

    log_file = tmp_path / "deadline.log"
    assert log_file.exists(), "Log file should be created on first use"
    assert isinstance(logger, logging.Logger)
    assert logger.name == "deadline_cli"


def test_get_logger_returns_singleton(tmp_path):
    """Repeated calls return the same logger instance."""
    with patch("deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from deadline_cli.utils.logger import get_logger

        assert get_logger() is get_logger()

    assert len(logging.getLogger("deadline_cli").handlers) == 1


def test_child_loggers_write_to_the_same_file(tmp_path):
    """Module loggers under deadline_cli end up in the application log."""
    with patch("deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from deadline_cli.utils.logger import get_logger

        get_logger()
        logging.getLogger("deadline_cli.services.task_service").info(
            "hello from a service"
        )

    for handler in logging.getLogger("deadline_cli").handlers:
        handler.flush()
    content = (tmp_path / "deadline.log").read_text(encoding="utf-8")
    assert "hello from a service" in content
    assert "[deadline_cli.services.task_service]" in content


def test_handler_rotates(tmp_path):
    with patch("deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from deadline_cli.utils.logger import get_logger

        logger = get_logger()

    [handler] = logger.handlers
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == 5 * 1024 * 1024
    assert handler.backupCount == 3
    assert logger.propagate is False


def test_log_file_path(tmp_path):
    with patch("deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from deadline_cli.utils.logger import log_file_path

        assert log_file_path() == tmp_path / "deadline.log"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("warning", logging.WARNING), ("INFO", logging.INFO), ("bogus", logging.DEBUG)],
)
def test_level_from_environment(tmp_path, monkeypatch, value, expected):
    monkeypatch.setenv("DEADLINE_LOG_LEVEL", value)
    with patch("deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from deadline_cli.utils.logger import get_logger

        assert get_logger().level == expected
