"""Whole-collection task persistence on top of a KeyValueStore."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import TypeAdapter

from deadline_cli.models import Task
from deadline_cli.repositories.repository import KeyValueStore

TASKS_KEY = "deadline-groups-tasks"

_TASK_LIST = TypeAdapter(list[Task])


@dataclass
class TaskCollection:
    """All tasks as loaded from the store, plus the version they were read at."""

    tasks: list[Task] = field(default_factory=list)
    version: int = 0

    def find(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


def dump_tasks(tasks: list[Task]) -> str:
    """Serialize tasks to a JSON array with ISO-8601 timestamps."""
    return _TASK_LIST.dump_json(tasks).decode("utf-8")


def load_tasks(raw: str) -> list[Task]:
    """Deserialize a JSON array produced by ``dump_tasks``."""
    return _TASK_LIST.validate_json(raw)


class TaskRepository:
    """Reads and writes the full task collection as a single document.

    Every write replaces the whole collection. The version read by ``load``
    must be handed back to ``save``; a concurrent writer in between causes
    ``ConcurrentModificationError`` and nothing is written.
    """

    def __init__(self, store: KeyValueStore, key: str = TASKS_KEY):
        self.store = store
        self.key = key

    def load(self) -> TaskCollection:
        stored = self.store.read(self.key)
        if stored is None:
            return TaskCollection()
        return TaskCollection(tasks=load_tasks(stored.value), version=stored.version)

    def save(self, collection: TaskCollection) -> TaskCollection:
        """Persist the collection and return it with its new version."""
        collection.version = self.store.write(
            self.key, dump_tasks(collection.tasks), collection.version
        )
        return collection

    def list_all(self) -> list[Task]:
        return self.load().tasks

    def get(self, task_id: str) -> Task | None:
        return self.load().find(task_id)
