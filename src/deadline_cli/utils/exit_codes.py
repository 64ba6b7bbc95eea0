"""
Exit codes for Deadline CLI.

Semantic exit codes so scripts can tell why a command failed without
parsing its output.
"""

from deadline_cli.models import (
    ConcurrentModificationError,
    CreatorCannotLeaveError,
    DeadlineError,
    NotGroupTaskError,
    SubtaskNotFoundError,
    TaskLockedError,
    TaskNotFoundError,
    TaskValidationError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Resource not found (task or subtask)
ERROR_NOT_FOUND = 5

# Permission denied (e.g. the creator leaving their own group)
ERROR_PERMISSION_DENIED = 6

# The task's current status does not allow the operation
ERROR_LOCKED = 7

# The task store changed underneath us
ERROR_CONFLICT = 8


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_PERMISSION_DENIED: "ERROR_PERMISSION_DENIED",
        ERROR_LOCKED: "ERROR_LOCKED",
        ERROR_CONFLICT: "ERROR_CONFLICT",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_NOT_FOUND: "Resource not found",
        ERROR_PERMISSION_DENIED: "Permission denied",
        ERROR_LOCKED: "Operation not available in the task's current status",
        ERROR_CONFLICT: "Tasks were modified by another process - retry",
    }
    return descriptions.get(code, "Unknown error")


# Most specific class first; lookups walk this in order.
_ERROR_CODES: list[tuple[type[DeadlineError], int]] = [
    (TaskValidationError, ERROR_INVALID_ARGS),
    (NotGroupTaskError, ERROR_INVALID_ARGS),
    (TaskNotFoundError, ERROR_NOT_FOUND),
    (SubtaskNotFoundError, ERROR_NOT_FOUND),
    (CreatorCannotLeaveError, ERROR_PERMISSION_DENIED),
    (TaskLockedError, ERROR_LOCKED),
    (ConcurrentModificationError, ERROR_CONFLICT),
]


def exit_code_for(error: BaseException) -> int:
    """Map a raised error to its exit code."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ERROR_GENERAL
