"""Top-level task commands.

Registered directly on the root app in ``main.py``.
"""

from datetime import datetime
from typing import Annotated

import typer

from deadline_cli.core.views import archive_tasks, dashboard_tasks, group_by_status
from deadline_cli.models import Task, TaskType
from deadline_cli.utils.deadline_parser import parse_deadline
from deadline_cli.utils.task_helpers import resolve_task_id
from deadline_cli.utils.ui.console import get_console
from deadline_cli.utils.ui.formatters import (
    format_output,
    format_success,
    format_task_detail,
    format_task_list,
    short_id,
    task_row,
    task_to_dict,
)

from .common import JsonOption, OutputOption, open_app, resolve_output
from .decorators import command_wrapper

console = get_console()


@command_wrapper
def create_command(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Task title (max 100 chars)")],
    deadline: Annotated[
        str,
        typer.Option(
            "--deadline",
            "-d",
            help="When it is due: ISO-8601, 'in 90 minutes', 'tomorrow 17:00'...",
        ),
    ],
    description: Annotated[
        str, typer.Option("--description", help="Longer description")
    ] = "",
    commitment: Annotated[
        str, typer.Option("--commitment", "-c", help="What you commit to deliver")
    ] = "",
    group: Annotated[
        bool, typer.Option("--group", "-g", help="Create a group task others can join")
    ] = False,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Create a new solo or group task."""
    output = resolve_output(output, json_opt)
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        now = service.now()
        task = service.create_task(
            title,
            description=description,
            commitment=commitment,
            type=TaskType.GROUP if group else TaskType.SOLO,
            deadline=parse_deadline(deadline, now),
        )

    if output in ("json", "yaml"):
        format_output(task_to_dict(task, now), output)
        return
    format_success(f"Created task {short_id(task.id)}: {task.title}")
    if task.group_link:
        console.print(f"Invite link: {task.group_link}")


@command_wrapper
def list_command(
    ctx: typer.Context,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """List upcoming and active tasks, soonest deadline first."""
    output = resolve_output(output, json_opt)
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        now = service.now()
        tasks = dashboard_tasks(service.get_tasks(), now)
        _show_tasks(tasks, now, output, "Deadlines")


@command_wrapper
def history_command(
    ctx: typer.Context,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """List completed and expired tasks, most recent deadline first."""
    output = resolve_output(output, json_opt)
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        now = service.now()
        tasks = archive_tasks(service.get_tasks(), now)
        _show_tasks(tasks, now, output, "History")


@command_wrapper
def status_command(
    ctx: typer.Context,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Count tasks in each status."""
    output = resolve_output(output, json_opt)
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        groups = group_by_status(service.get_tasks(), service.now())

    counts = {status.value: len(tasks) for status, tasks in groups.items()}
    format_output(counts, output)


@command_wrapper
def show_command(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show a task with its countdown, members, subtasks and updates."""
    output = resolve_output(output, json_opt)
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        task = service.get_task(resolve_task_id(service, task_id))
        now = service.now()

    if output in ("json", "yaml"):
        format_output(task_to_dict(task, now), output)
    else:
        format_task_detail(task, now)


@command_wrapper
def post_command(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    content: Annotated[str, typer.Argument(help="Progress update (max 280 chars)")],
) -> None:
    """Post a progress update (only in the final hour)."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        update = service.add_update(resolve_task_id(service, task_id), content)
    format_success(f"Posted update as {update.user_name}")


@command_wrapper
def complete_command(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
) -> None:
    """Mark a task completed (only in the final hour)."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        task = service.complete_task(resolve_task_id(service, task_id))
    format_success(f"✓ Completed: {task.title}")


@command_wrapper
def progress_command(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    value: Annotated[int, typer.Argument(help="Self-reported progress, 0-100")],
) -> None:
    """Set self-reported progress (only in the final hour)."""
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        task = service.update_manual_progress(resolve_task_id(service, task_id), value)
    format_success(f"Progress for {short_id(task.id)} set to {task.manual_progress}%")


def _show_tasks(tasks: list[Task], now: datetime, output: str, title: str) -> None:
    if output in ("json", "yaml"):
        format_output([task_to_dict(task, now) for task in tasks], output)
    elif output == "table":
        format_output([task_row(task, now) for task in tasks], output)
    else:
        format_task_list(tasks, now, title)
