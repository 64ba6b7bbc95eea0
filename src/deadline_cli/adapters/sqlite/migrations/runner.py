"""Forward-only schema migrations for the SQLite store.

Each migration has a sequential version. Applied versions are recorded in
``schema_version``; opening a connection applies whatever is still pending.
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterable

from deadline_cli.utils.helpers import now_iso

logger = logging.getLogger(__name__)

_VERSION_TABLE = """
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY,
        description TEXT NOT NULL,
        applied_at TEXT NOT NULL
    )
"""


class Migration(ABC):
    """One schema change."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Sequential version number, starting at 1."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Short human-readable summary."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the change on ``connection``."""


class MigrationRunner:
    """Applies pending migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        with self.connection:
            self.connection.execute(_VERSION_TABLE)

    @property
    def current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        row = self.connection.execute(
            "SELECT MAX(version) FROM schema_version"
        ).fetchone()
        return row[0] or 0

    def pending(self, migrations: Iterable[Migration]) -> list[Migration]:
        """Migrations newer than the database, lowest version first."""
        current = self.current_version
        return sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )

    def apply(self, migration: Migration) -> None:
        """Apply one migration and record it.

        Raises:
            ValueError: If the database is already at or past its version
            RuntimeError: If the migration fails; its recorded state is rolled back
        """
        current = self.current_version
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than "
                f"schema version {current}"
            )

        try:
            with self.connection:
                migration.up(self.connection)
                self.connection.execute(
                    "INSERT INTO schema_version (version, description, applied_at) "
                    "VALUES (?, ?, ?)",
                    (migration.version, migration.description, now_iso()),
                )
        except sqlite3.Error as e:
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        logger.info(
            "applied migration %s: %s", migration.version, migration.description
        )

    def migrate(self, migrations: Iterable[Migration]) -> int:
        """Apply every pending migration; returns how many were applied."""
        pending = self.pending(migrations)
        for migration in pending:
            self.apply(migration)
        return len(pending)

