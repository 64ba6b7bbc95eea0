"""Task helper utilities."""

from __future__ import annotations

from deadline_cli.models import (
    SubtaskNotFoundError,
    Task,
    TaskNotFoundError,
    TaskValidationError,
)
from deadline_cli.services.task_service import TaskService


def _find_shortest_unique_prefix(ids: list[str], target_id: str) -> str:
    """
    Find the shortest prefix of target_id that uniquely identifies it.

    Args:
        ids: List of all IDs
        target_id: The ID to find a unique prefix for

    Returns:
        The shortest unique prefix
    """
    for length in range(1, len(target_id) + 1):
        prefix = target_id[:length]
        matches = [i for i in ids if i.startswith(prefix)]
        if len(matches) == 1:
            return prefix
    return target_id


def _ambiguous(kind: str, prefix: str, candidates: list[tuple[str, str]]) -> str:
    ids = [cid for cid, _ in candidates]
    suggestions = []
    for cid, label in candidates:
        if len(label) > 60:
            label = label[:57] + "..."
        suggestions.append(f"  [{_find_shortest_unique_prefix(ids, cid)}] {label}")
    return (
        f"Multiple {kind}s match '{prefix}':\n"
        + "\n".join(suggestions)
        + "\n\nUse a longer prefix to select one."
    )


def resolve_task_id(task_service: TaskService, task_id_or_prefix: str) -> str:
    """
    Resolve a task ID or ID prefix to a full task ID.

    Args:
        task_service: The task service instance
        task_id_or_prefix: Full task ID or a prefix of one

    Returns:
        The full task ID

    Raises:
        TaskNotFoundError: If no task matches
        TaskValidationError: If the prefix matches several tasks
    """
    tasks = task_service.get_tasks()
    if any(task.id == task_id_or_prefix for task in tasks):
        return task_id_or_prefix

    matching = [task for task in tasks if task.id.startswith(task_id_or_prefix)]
    if not matching:
        raise TaskNotFoundError(task_id_or_prefix)
    if len(matching) > 1:
        raise TaskValidationError(
            _ambiguous(
                "task", task_id_or_prefix, [(t.id, t.title) for t in matching]
            )
        )
    return matching[0].id


def resolve_subtask_id(task: Task, subtask_id_or_prefix: str) -> str:
    """Resolve a subtask ID or ID prefix within one task.

    Raises:
        SubtaskNotFoundError: If no subtask matches
        TaskValidationError: If the prefix matches several subtasks
    """
    if task.find_subtask(subtask_id_or_prefix) is not None:
        return subtask_id_or_prefix

    matching = [s for s in task.subtasks if s.id.startswith(subtask_id_or_prefix)]
    if not matching:
        raise SubtaskNotFoundError(task.id, subtask_id_or_prefix)
    if len(matching) > 1:
        raise TaskValidationError(
            _ambiguous(
                "subtask", subtask_id_or_prefix, [(s.id, s.title) for s in matching]
            )
        )
    return matching[0].id
