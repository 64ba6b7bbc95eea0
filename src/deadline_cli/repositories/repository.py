"""Repository abstraction layer for Deadline CLI.

This module defines the keyed durable store interface that all persistence
goes through, following the Ports & Adapters pattern. The concrete adapters
live in ``deadline_cli.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VersionedValue:
    """A stored value together with the version it was read at."""

    value: str
    version: int


class KeyValueStore(ABC):
    """Abstract base class for a keyed durable store.

    Each key holds one opaque string document plus a version counter that
    increments on every successful write. Writers pass the version they read
    so that lost updates are detected instead of silently overwritten.
    """

    @abstractmethod
    def read(self, key: str) -> VersionedValue | None:
        """Read the value stored under ``key``.

        Args:
            key: Store key

        Returns:
            VersionedValue, or None if the key is absent
        """
        raise NotImplementedError("KeyValueStore.read() must be implemented by adapter")

    @abstractmethod
    def write(self, key: str, value: str, expected_version: int) -> int:
        """Write ``value`` under ``key`` if the stored version still matches.

        Args:
            key: Store key
            value: Serialized document
            expected_version: Version returned by the last read, or 0 when the
                key was absent

        Returns:
            The new version number

        Raises:
            ConcurrentModificationError: If the stored version differs
        """
        raise NotImplementedError(
            "KeyValueStore.write() must be implemented by adapter"
        )

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete ``key``.

        Returns:
            True if a value was removed
        """
        raise NotImplementedError(
            "KeyValueStore.delete() must be implemented by adapter"
        )

    def close(self) -> None:
        """Release any resources held by the store."""
        return
