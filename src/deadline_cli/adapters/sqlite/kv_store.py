"""SQLite implementation of KeyValueStore."""

from __future__ import annotations

import sqlite3

from deadline_cli.models import ConcurrentModificationError
from deadline_cli.repositories import KeyValueStore, VersionedValue
from deadline_cli.utils.helpers import now_iso


class SqliteKeyValueStore(KeyValueStore):
    """KeyValueStore backed by the ``kv_store`` table.

    Writes are compare-and-set on the ``version`` column, so a writer whose
    read has gone stale fails instead of overwriting another writer's data.
    """

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection

    def read(self, key: str) -> VersionedValue | None:
        row = self.connection.execute(
            "SELECT value, version FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return VersionedValue(value=row["value"], version=int(row["version"]))

    def write(self, key: str, value: str, expected_version: int) -> int:
        now = now_iso()
        try:
            if expected_version == 0:
                cursor = self.connection.execute(
                    """INSERT OR IGNORE INTO kv_store (key, value, version, updated_at)
                       VALUES (?, ?, 1, ?)""",
                    (key, value, now),
                )
            else:
                cursor = self.connection.execute(
                    """UPDATE kv_store
                       SET value = ?, version = version + 1, updated_at = ?
                       WHERE key = ? AND version = ?""",
                    (value, now, key, expected_version),
                )

            if cursor.rowcount != 1:
                self.connection.rollback()
                current = self.read(key)
                raise ConcurrentModificationError(
                    key, expected_version, current.version if current else None
                )

            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise

        return expected_version + 1

    def delete(self, key: str) -> bool:
        cursor = self.connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self.connection.commit()
        return cursor.rowcount > 0
