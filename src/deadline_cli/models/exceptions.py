"""Custom exceptions for Deadline CLI."""

from __future__ import annotations

from collections.abc import Iterable


class DeadlineError(Exception):
    """Base exception for all Deadline CLI domain errors."""


class TaskValidationError(DeadlineError):
    """Raised when input for a new task, update or subtask is invalid."""


class TaskNotFoundError(DeadlineError):
    """Raised when a task id does not exist."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class SubtaskNotFoundError(DeadlineError):
    """Raised when a subtask id does not exist on its task."""

    def __init__(self, task_id: str, subtask_id: str):
        super().__init__(f"Subtask not found: {subtask_id} (task {task_id})")
        self.task_id = task_id
        self.subtask_id = subtask_id


class TaskLockedError(DeadlineError):
    """Raised when the task's derived status does not permit an operation."""

    def __init__(self, operation: str, status: str, allowed: Iterable[str]):
        self.operation = operation
        self.status = str(status)
        self.allowed = tuple(str(s) for s in allowed)
        super().__init__(
            f"Cannot {operation.replace('_', ' ')}: task is {self.status} "
            f"(requires {' or '.join(self.allowed)})"
        )


class NotGroupTaskError(DeadlineError):
    """Raised when a group-only operation targets a solo task."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} is not a group task")
        self.task_id = task_id


class CreatorCannotLeaveError(DeadlineError):
    """Raised when the creator of a group task tries to leave it."""

    def __init__(self, task_id: str):
        super().__init__(f"The creator cannot leave task {task_id}")
        self.task_id = task_id


class ConcurrentModificationError(DeadlineError):
    """Raised when the stored collection changed between read and write."""

    def __init__(self, key: str, expected_version: int, actual_version: int | None):
        super().__init__(
            f"Store key '{key}' was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )
        self.key = key
        self.expected_version = expected_version
        self.actual_version = actual_version
