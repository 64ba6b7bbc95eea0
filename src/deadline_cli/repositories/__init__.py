"""Repository interfaces and collection persistence for Deadline CLI.

``KeyValueStore`` is the port; implementations (adapters) are in
``deadline_cli.adapters``.
"""

from .repository import KeyValueStore, VersionedValue
from .task_repository import (
    TASKS_KEY,
    TaskCollection,
    TaskRepository,
    dump_tasks,
    load_tasks,
)

__all__ = [
    "KeyValueStore",
    "VersionedValue",
    "TASKS_KEY",
    "TaskCollection",
    "TaskRepository",
    "dump_tasks",
    "load_tasks",
]
