"""In-memory KeyValueStore for tests and throwaway sessions."""

from __future__ import annotations

from deadline_cli.models import ConcurrentModificationError
from deadline_cli.repositories import KeyValueStore, VersionedValue


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store with the same versioning contract as SQLite."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, VersionedValue] = {}
        for key, value in (initial or {}).items():
            self._data[key] = VersionedValue(value=value, version=1)

    def read(self, key: str) -> VersionedValue | None:
        return self._data.get(key)

    def write(self, key: str, value: str, expected_version: int) -> int:
        current = self._data.get(key)
        current_version = current.version if current else 0
        if current_version != expected_version:
            raise ConcurrentModificationError(
                key, expected_version, current.version if current else None
            )
        new_version = current_version + 1
        self._data[key] = VersionedValue(value=value, version=new_version)
        return new_version

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)
