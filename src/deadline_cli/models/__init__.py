"""Deadline CLI domain models.

This package contains Pydantic models that represent the core domain entities
of the application, plus the exception hierarchy raised by the services.
"""

from .config_models import AppConfig
from .core import (
    FocusSession,
    GroupMember,
    Identity,
    ProgressUpdate,
    Subtask,
    SubtaskCreate,
    Task,
    TaskCreate,
    TaskStatus,
    TaskType,
    UpdateCreate,
)
from .exceptions import (
    ConcurrentModificationError,
    CreatorCannotLeaveError,
    DeadlineError,
    NotGroupTaskError,
    SubtaskNotFoundError,
    TaskLockedError,
    TaskNotFoundError,
    TaskValidationError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskType",
    "GroupMember",
    "ProgressUpdate",
    "UpdateCreate",
    "Subtask",
    "SubtaskCreate",
    "FocusSession",
    # Identity
    "Identity",
    # Config
    "AppConfig",
    # Errors
    "DeadlineError",
    "TaskValidationError",
    "TaskNotFoundError",
    "SubtaskNotFoundError",
    "TaskLockedError",
    "NotGroupTaskError",
    "CreatorCannotLeaveError",
    "ConcurrentModificationError",
]
