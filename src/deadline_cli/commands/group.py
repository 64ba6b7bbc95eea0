"""Group membership commands: join and leave.

Registered directly on the root app in ``main.py``.
"""

from typing import Annotated

import typer

from deadline_cli.utils.task_helpers import resolve_task_id
from deadline_cli.utils.ui.formatters import format_info, format_success

from .common import open_app
from .decorators import command_wrapper

TaskIdArgument = Annotated[
    str, typer.Argument(help="Task ID, unique prefix or invite link")
]


def _task_ref(value: str) -> str:
    # Accept a pasted invite link as well as a bare id.
    if "/join/" in value:
        return value.rstrip("/").rsplit("/join/", 1)[1]
    return value


@command_wrapper
def join_command(ctx: typer.Context, task_id: TaskIdArgument) -> None:
    """Join a group task before its final hour begins."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        user = deadline_app.identity.get_current_user()
        resolved = resolve_task_id(service, _task_ref(task_id))
        already_member = service.get_task(resolved).is_member(user.id)
        task = service.join_task(resolved)

    if already_member:
        format_info(f"You are already a member of '{task.title}'")
    else:
        format_success(f"Joined '{task.title}' ({len(task.members or [])} members)")


@command_wrapper
def leave_command(ctx: typer.Context, task_id: TaskIdArgument) -> None:
    """Leave a group task before its final hour begins."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        user = deadline_app.identity.get_current_user()
        resolved = resolve_task_id(service, _task_ref(task_id))
        was_member = service.get_task(resolved).is_member(user.id)
        task = service.leave_task(resolved)

    if was_member:
        format_success(f"Left '{task.title}'")
    else:
        format_info(f"You are not a member of '{task.title}'")
