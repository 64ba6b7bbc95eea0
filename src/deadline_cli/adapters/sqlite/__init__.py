"""SQLite adapter module - Local database storage implementation."""

from deadline_cli.adapters.sqlite.connection import DatabaseConnection, default_db_path
from deadline_cli.adapters.sqlite.kv_store import SqliteKeyValueStore

__all__ = [
    "DatabaseConnection",
    "SqliteKeyValueStore",
    "default_db_path",
]
