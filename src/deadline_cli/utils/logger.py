"""Application log file under platformdirs' user_log_dir.

Modules log through ``logging.getLogger(__name__)``. The first call to
``get_logger`` attaches a rotating file handler to the package logger, so
records from every ``deadline_cli.*`` module land in one file. The level
defaults to DEBUG and can be lowered with ``DEADLINE_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

PACKAGE_LOGGER = "deadline_cli"
LOG_FILE_NAME = "deadline.log"
LOG_LEVEL_ENV = "DEADLINE_LOG_LEVEL"

_ROTATE_AT_BYTES = 5 * 1024 * 1024
_KEEP_FILES = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(PACKAGE_LOGGER)) / LOG_FILE_NAME


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_ROTATE_AT_BYTES, backupCount=_KEEP_FILES, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger() -> logging.Logger:
    """Return the package logger, attaching the file handler on first use."""
    global _logger
    if _logger is None:
        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.setLevel(_level_from_env())
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        # Keep CLI output clean; everything goes to the file.
        logger.propagate = False
        _logger = logger
    return _logger
