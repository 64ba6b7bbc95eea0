"""Shared test fixtures and configuration.

Provides a controllable clock, in-memory services and isolation of the
platformdirs locations so no test touches real user files.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from deadline_cli.adapters.memory import InMemoryKeyValueStore
from deadline_cli.repositories import TaskRepository
from deadline_cli.services.identity_service import IdentityService
from deadline_cli.services.task_service import TaskService

T0 = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now

    def set(self, value: datetime) -> datetime:
        self.now = value
        return self.now


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def repository(store) -> TaskRepository:
    return TaskRepository(store)


@pytest.fixture()
def identity(store) -> IdentityService:
    return IdentityService(store)


@pytest.fixture()
def service(repository, identity, clock) -> TaskService:
    """TaskService for the default profile over an in-memory store."""
    return TaskService(repository, identity, clock=clock)


@pytest.fixture()
def other_service(store, clock) -> TaskService:
    """A second identity acting on the same store."""
    return TaskService(
        TaskRepository(store), IdentityService(store, profile="friend"), clock=clock
    )


# ---------------------------------------------------------------------------
# Config / filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from deadline_cli.services.config_service import ConfigService, get_config_service

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    get_config_service.cache_clear()
    with (
        patch(
            "deadline_cli.services.config_service.user_config_dir",
            return_value=config_dir,
        ),
        patch(
            "deadline_cli.services.config_service.user_data_dir",
            return_value=data_dir,
        ),
    ):
        yield ConfigService()
    get_config_service.cache_clear()


@pytest.fixture()
def isolated_cli(tmp_path, tmp_config):
    """Isolate config, data and log directories for CLI invocations."""
    import logging

    import deadline_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("deadline_cli").handlers.clear()
    with patch(
        "deadline_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield tmp_path
    for handler in logging.getLogger("deadline_cli").handlers:
        handler.close()
    logging.getLogger("deadline_cli").handlers.clear()
    logging.getLogger("deadline_cli").propagate = True
    logger_mod._logger = None
