"""Adapters module - KeyValueStore implementations for different backends.

- sqlite: Local SQLite database storage
- memory: In-process storage for tests and ephemeral use
"""

from .memory import InMemoryKeyValueStore
from .sqlite import DatabaseConnection, SqliteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "DatabaseConnection",
    "SqliteKeyValueStore",
]
