"""Database migration system for the local SQLite store."""

from .runner import Migration, MigrationRunner

__all__ = [
    "Migration",
    "MigrationRunner",
]
