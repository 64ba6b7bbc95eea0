"""Database connection management for the local SQLite store.

Unlike a process-wide singleton, each ``DatabaseConnection`` is owned by
whoever opened it and must be closed by the same owner.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from deadline_cli.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from deadline_cli.adapters.sqlite.migrations.runner import MigrationRunner

logger = logging.getLogger(__name__)

APP_DIR_NAME = "deadline_cli"
DEFAULT_DB_NAME = "deadlines.db"


def default_db_path() -> Path:
    """Return the default database location inside the user data dir."""
    return Path(user_data_dir(APP_DIR_NAME)) / DEFAULT_DB_NAME


class DatabaseConnection:
    """Owns one configured SQLite connection.

    Provides:
    - WAL mode and foreign key enforcement
    - Automatic directory creation
    - Owner read/write only permissions on new files
    - Schema migrations on open
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = Path(db_path) if db_path is not None else default_db_path()
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the open connection."""
        if self._connection is None:
            raise RuntimeError("Database connection is not open")
        return self._connection

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self) -> sqlite3.Connection:
        """Open (or return the already open) connection."""
        if self._connection is not None:
            return self._connection

        in_memory = str(self.db_path) == ":memory:"
        is_new_database = not in_memory and not self.db_path.exists()
        if not in_memory:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        connection = sqlite3.connect(str(self.db_path), timeout=30.0)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        if not in_memory:
            connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(self.db_path, 0o600)
            logger.info("created database %s", self.db_path)

        MigrationRunner(connection).migrate(ALL_MIGRATIONS)

        self._connection = connection
        return connection

    def close(self) -> None:
        """Commit pending work and close the connection."""
        if self._connection is None:
            return
        try:
            self._connection.commit()
            self._connection.close()
        finally:
            self._connection = None

    def __enter__(self) -> sqlite3.Connection:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
