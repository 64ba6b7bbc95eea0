"""Task lifecycle: derived status and mutation gating.

The persisted ``status`` field is only authoritative for ``completed``.
Every other state is recomputed from the deadline and ``now`` on each call.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from types import MappingProxyType

from deadline_cli.models import Task, TaskLockedError, TaskStatus

EXECUTION_WINDOW = timedelta(hours=1)

UPCOMING_ONLY = frozenset({TaskStatus.UPCOMING})
ACTIVE_ONLY = frozenset({TaskStatus.ACTIVE})

# operation -> derived statuses that permit it
GATES = MappingProxyType(
    {
        "join_task": UPCOMING_ONLY,
        "leave_task": UPCOMING_ONLY,
        "add_update": ACTIVE_ONLY,
        "add_subtask": ACTIVE_ONLY,
        "toggle_subtask": ACTIVE_ONLY,
        "complete_task": ACTIVE_ONLY,
        "add_focus_session": ACTIVE_ONLY,
        "update_manual_progress": ACTIVE_ONLY,
    }
)

TERMINAL_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.EXPIRED})


def resolve_status(task: Task, now: datetime) -> TaskStatus:
    """Resolve the current lifecycle status of a task.

    Args:
        task: Task to inspect
        now: Current time (aware datetime)

    Returns:
        ``completed`` if the task was completed, otherwise ``expired`` once the
        deadline has passed, ``active`` inside the final hour and
        ``upcoming`` before that.
    """
    if task.status == TaskStatus.COMPLETED:
        return TaskStatus.COMPLETED
    if now > task.deadline:
        return TaskStatus.EXPIRED
    if now >= task.deadline - EXECUTION_WINDOW:
        return TaskStatus.ACTIVE
    return TaskStatus.UPCOMING


def is_locked(task: Task, now: datetime) -> bool:
    """Return True once a task is completed or expired."""
    return resolve_status(task, now) in TERMINAL_STATUSES


def is_allowed(operation: str, status: TaskStatus) -> bool:
    """Return True if ``operation`` may run while a task is in ``status``."""
    return status in GATES[operation]


def check_gate(operation: str, task: Task, now: datetime) -> TaskStatus:
    """Re-derive the task's status and reject the operation if it is gated.

    Args:
        operation: Key into ``GATES``
        task: Freshly loaded task
        now: Current time

    Returns:
        The derived status, when the operation is allowed

    Raises:
        KeyError: If ``operation`` has no gate entry
        TaskLockedError: If the derived status does not permit the operation
    """
    allowed = GATES[operation]
    status = resolve_status(task, now)
    if status not in allowed:
        raise TaskLockedError(
            operation, status, sorted(allowed, key=list(TaskStatus).index)
        )
    return status
