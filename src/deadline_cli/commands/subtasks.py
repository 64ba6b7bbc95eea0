"""Subtask commands."""

from typing import Annotated

import typer

from deadline_cli.utils.task_helpers import resolve_subtask_id, resolve_task_id
from deadline_cli.utils.ui.formatters import format_success, short_id

from .common import open_app
from .decorators import command_wrapper

app = typer.Typer(help="Break a task into checkable steps")


@app.command("add")
@command_wrapper
def add_subtask(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    title: Annotated[str, typer.Argument(help="Subtask title (max 100 chars)")],
) -> None:
    """Add a subtask (only in the final hour)."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        subtask = service.add_subtask(resolve_task_id(service, task_id), title)
    format_success(f"Added subtask {short_id(subtask.id)}: {subtask.title}")


@app.command("toggle")
@command_wrapper
def toggle_subtask(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    subtask_id: Annotated[str, typer.Argument(help="Subtask ID or unique prefix")],
) -> None:
    """Check or uncheck a subtask (only in the final hour)."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        task = service.get_task(resolve_task_id(service, task_id))
        subtask = service.toggle_subtask(
            task.id, resolve_subtask_id(task, subtask_id)
        )
    state = "done" if subtask.completed else "not done"
    format_success(f"Subtask '{subtask.title}' marked {state}")
