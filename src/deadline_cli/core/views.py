"""Derived views over a loaded task collection.

All functions are pure: they never touch storage or read the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from deadline_cli.core.status import TERMINAL_STATUSES, resolve_status
from deadline_cli.models import ProgressUpdate, Task, TaskStatus

OPEN_STATUSES = frozenset({TaskStatus.UPCOMING, TaskStatus.ACTIVE})


@dataclass(frozen=True)
class ProgressSummary:
    """Aggregated progress figures for one task."""

    subtasks_done: int
    subtasks_total: int
    focus_sessions: int
    focus_seconds: int
    manual_progress: int | None

    @property
    def subtask_percent(self) -> float:
        if self.subtasks_total == 0:
            return 0.0
        return self.subtasks_done / self.subtasks_total * 100


def partition(
    tasks: Iterable[Task], now: datetime
) -> tuple[list[Task], list[Task]]:
    """Split tasks into (upcoming or active, completed or expired)."""
    open_tasks: list[Task] = []
    closed_tasks: list[Task] = []
    for task in tasks:
        if resolve_status(task, now) in TERMINAL_STATUSES:
            closed_tasks.append(task)
        else:
            open_tasks.append(task)
    return open_tasks, closed_tasks


def sort_soonest_first(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda t: t.deadline)


def sort_most_recent_first(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda t: t.deadline, reverse=True)


def dashboard_tasks(tasks: Iterable[Task], now: datetime) -> list[Task]:
    """Upcoming and active tasks, soonest deadline first."""
    open_tasks, _ = partition(tasks, now)
    return sort_soonest_first(open_tasks)


def archive_tasks(tasks: Iterable[Task], now: datetime) -> list[Task]:
    """Completed and expired tasks, most recent deadline first."""
    _, closed_tasks = partition(tasks, now)
    return sort_most_recent_first(closed_tasks)


def group_by_status(
    tasks: Iterable[Task], now: datetime
) -> dict[TaskStatus, list[Task]]:
    """Group tasks under each of the four statuses.

    Open groups are ordered soonest first, closed groups most recent first.
    Every status key is present, possibly with an empty list.
    """
    groups: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
    for task in tasks:
        groups[resolve_status(task, now)].append(task)
    for status, members in groups.items():
        if status in OPEN_STATUSES:
            groups[status] = sort_soonest_first(members)
        else:
            groups[status] = sort_most_recent_first(members)
    return groups


def updates_newest_first(task: Task) -> list[ProgressUpdate]:
    # Stored in posting order.
    return list(reversed(task.updates))


def time_remaining(task: Task, now: datetime) -> timedelta:
    """Time left until the deadline, never negative."""
    remaining = task.deadline - now
    if remaining < timedelta(0):
        return timedelta(0)
    return remaining


def summarize_progress(task: Task) -> ProgressSummary:
    """Summarise subtasks, focus sessions and manual progress of a task."""
    done = sum(1 for subtask in task.subtasks if subtask.completed)
    completed_sessions = [s for s in task.focus_sessions if s.completed]
    return ProgressSummary(
        subtasks_done=done,
        subtasks_total=len(task.subtasks),
        focus_sessions=len(completed_sessions),
        focus_seconds=sum(s.duration for s in completed_sessions),
        manual_progress=task.manual_progress,
    )
