"""Application context: wires storage, identity and task services together.

Usage:
    from deadline_cli.services.app_context import AppContext

    with AppContext.from_config(config_service, profile="default") as app:
        task = app.tasks.create_task("Ship it", deadline=...)

The context owns the database connection; nothing is kept in module-level
state, so several contexts (or in-memory ones in tests) can coexist.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from deadline_cli.adapters.memory import InMemoryKeyValueStore
from deadline_cli.adapters.sqlite import DatabaseConnection, SqliteKeyValueStore
from deadline_cli.repositories import KeyValueStore, TaskRepository
from deadline_cli.services.config_service import ConfigService
from deadline_cli.services.identity_service import DEFAULT_PROFILE, IdentityService
from deadline_cli.services.task_service import DEFAULT_SHARE_BASE_URL, TaskService
from deadline_cli.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class AppContext:
    """Holds the services for one CLI invocation or test.

    Args:
        db_path: SQLite file to use; ignored when ``store`` is given
        store: Pre-built store (e.g. ``InMemoryKeyValueStore``)
        profile: Identity profile name
        clock: Callable returning the current aware datetime
        share_base_url: Base address for group invite links
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        store: KeyValueStore | None = None,
        profile: str = DEFAULT_PROFILE,
        clock: Callable[[], datetime] = utc_now,
        share_base_url: str = DEFAULT_SHARE_BASE_URL,
    ):
        self.db_path = db_path
        self.profile = profile
        self.clock = clock
        self.share_base_url = share_base_url
        self._store = store
        self._database: DatabaseConnection | None = None
        self._identity: IdentityService | None = None
        self._tasks: TaskService | None = None

    @classmethod
    def from_config(
        cls,
        config_service: ConfigService,
        profile: str = DEFAULT_PROFILE,
        clock: Callable[[], datetime] = utc_now,
    ) -> AppContext:
        return cls(
            config_service.get_db_path(),
            profile=profile,
            clock=clock,
            share_base_url=config_service.config.share.base_url,
        )

    @classmethod
    def in_memory(
        cls,
        profile: str = DEFAULT_PROFILE,
        clock: Callable[[], datetime] = utc_now,
    ) -> AppContext:
        return cls(store=InMemoryKeyValueStore(), profile=profile, clock=clock)

    @property
    def is_open(self) -> bool:
        return self._tasks is not None

    @property
    def store(self) -> KeyValueStore:
        if self._store is None:
            raise RuntimeError("AppContext is not open")
        return self._store

    @property
    def identity(self) -> IdentityService:
        if self._identity is None:
            raise RuntimeError("AppContext is not open")
        return self._identity

    @property
    def tasks(self) -> TaskService:
        if self._tasks is None:
            raise RuntimeError("AppContext is not open")
        return self._tasks

    def open(self) -> AppContext:
        if self.is_open:
            return self

        if self._store is None:
            self._database = DatabaseConnection(self.db_path)
            self._store = SqliteKeyValueStore(self._database.open())
            logger.debug("opened store at %s", self._database.db_path)

        self._identity = IdentityService(self._store, profile=self.profile)
        self._tasks = TaskService(
            TaskRepository(self._store),
            self._identity,
            clock=self.clock,
            share_base_url=self.share_base_url,
        )
        return self

    def close(self) -> None:
        self._tasks = None
        self._identity = None
        if self._database is not None:
            self._database.close()
            self._database = None
            self._store = None

    def __enter__(self) -> AppContext:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
