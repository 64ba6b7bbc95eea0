"""Pure domain logic: lifecycle status, gating and derived views."""

from .status import (
    EXECUTION_WINDOW,
    GATES,
    check_gate,
    is_allowed,
    is_locked,
    resolve_status,
)
from .views import (
    ProgressSummary,
    archive_tasks,
    dashboard_tasks,
    group_by_status,
    partition,
    summarize_progress,
    time_remaining,
    updates_newest_first,
)

__all__ = [
    "EXECUTION_WINDOW",
    "GATES",
    "check_gate",
    "is_allowed",
    "is_locked",
    "resolve_status",
    "ProgressSummary",
    "archive_tasks",
    "dashboard_tasks",
    "group_by_status",
    "partition",
    "summarize_progress",
    "time_remaining",
    "updates_newest_first",
]
