"""Output formatters for different formats."""

import json
from datetime import datetime, timedelta
from typing import Any

import yaml
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from deadline_cli.core.status import is_allowed, is_locked, resolve_status
from deadline_cli.core.views import (
    summarize_progress,
    time_remaining,
    updates_newest_first,
)
from deadline_cli.models import Task, TaskStatus, TaskType

from .console import get_console

console = get_console()

SHORT_ID_LENGTH = 8

STATUS_STYLES = {
    TaskStatus.UPCOMING: "cyan",
    TaskStatus.ACTIVE: "bold yellow",
    TaskStatus.COMPLETED: "green",
    TaskStatus.EXPIRED: "red",
}

STATUS_ICONS = {
    TaskStatus.UPCOMING: "⏳",
    TaskStatus.ACTIVE: "🔥",
    TaskStatus.COMPLETED: "✅",
    TaskStatus.EXPIRED: "⌛",
}


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LENGTH]


def format_duration(delta: timedelta) -> str:
    """Format a duration compactly, e.g. ``2d 3h``, ``1h 05m`` or ``42s``."""
    seconds = max(0, int(delta.total_seconds()))
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes:02d}m"
    if minutes:
        return f"{minutes}m {seconds:02d}s"
    return f"{seconds}s"


def format_countdown(delta: timedelta) -> str:
    """Format a duration as a ``HH:MM:SS`` clock."""
    seconds = max(0, int(delta.total_seconds()))
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_timestamp(value: datetime) -> str:
    """Format an aware timestamp in the local timezone."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def status_text(status: TaskStatus) -> Text:
    return Text(
        f"{STATUS_ICONS[status]} {status.value}", style=STATUS_STYLES[status]
    )


def task_to_dict(task: Task, now: datetime) -> dict[str, Any]:
    """Serialize a task for machine-readable output.

    The ``status`` key holds the derived status at ``now`` rather than the
    persisted value.
    """
    data = task.model_dump(mode="json")
    data["status"] = resolve_status(task, now).value
    data["seconds_remaining"] = int(time_remaining(task, now).total_seconds())
    return data


def task_row(task: Task, now: datetime) -> dict[str, Any]:
    """Flat summary of a task for tables."""
    status = resolve_status(task, now)
    return {
        "id": short_id(task.id),
        "title": task.title,
        "type": task.type.value,
        "status": status.value,
        "deadline": format_timestamp(task.deadline),
        "remaining": format_duration(time_remaining(task, now))
        if not is_locked(task, now)
        else "-",
    }


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict], title: str | None = None) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_pretty(data: Any) -> None:
    """Fallback pretty output for plain data."""
    if isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list) and data and isinstance(data[0], dict):
        format_dict_table(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Task rendering
# ============================================================================


def format_task_list(tasks: list[Task], now: datetime, title: str) -> None:
    """Render tasks as a rich table with derived status and countdown."""
    if not tasks:
        console.print(f"[dim]{title}: nothing here yet[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Status", no_wrap=True)
    table.add_column("Deadline", no_wrap=True)
    table.add_column("Remaining", justify="right", no_wrap=True)

    for task in tasks:
        row = task_row(task, now)
        kind = "👥 group" if task.type == TaskType.GROUP else "solo"
        table.add_row(
            row["id"],
            escape(task.title),
            kind,
            status_text(resolve_status(task, now)),
            row["deadline"],
            row["remaining"],
        )

    console.print(table)


def format_task_detail(task: Task, now: datetime) -> None:
    """Render everything known about one task."""
    status = resolve_status(task, now)

    header = Table.grid(padding=(0, 2))
    header.add_column(style="cyan")
    header.add_column()
    header.add_row("ID", task.id)
    header.add_row("Status", status_text(status))
    header.add_row("Type", task.type.value)
    header.add_row("Creator", task.creator_name)
    header.add_row("Deadline", format_timestamp(task.deadline))
    if not is_locked(task, now):
        header.add_row("Time left", format_countdown(time_remaining(task, now)))
    if task.description:
        header.add_row("Description", escape(task.description))
    if task.commitment:
        header.add_row("Commitment", Text(task.commitment, style="italic"))
    if task.group_link and is_allowed("join_task", status):
        header.add_row("Invite", task.group_link)

    title = f"[bold]{escape(task.title)}[/bold]"
    console.print(Panel(header, title=title, expand=False))

    summary = summarize_progress(task)
    progress = Table.grid(padding=(0, 2))
    progress.add_column(style="cyan")
    progress.add_column()
    progress.add_row(
        "Subtasks",
        f"{summary.subtasks_done}/{summary.subtasks_total} "
        f"({summary.subtask_percent:.0f}%)",
    )
    progress.add_row(
        "Focus",
        f"{summary.focus_sessions} session(s), "
        f"{format_duration(timedelta(seconds=summary.focus_seconds))}",
    )
    progress.add_row(
        "Self-reported",
        "-" if summary.manual_progress is None else f"{summary.manual_progress}%",
    )
    console.print(progress)

    if task.members:
        console.print("\n[bold]Members[/bold]")
        for member in task.members:
            marker = " (creator)" if member.id == task.creator_id else ""
            console.print(f"  • {escape(member.name)}{marker}")

    if task.subtasks:
        console.print("\n[bold]Subtasks[/bold]")
        for subtask in task.subtasks:
            box = "[green]☑[/green]" if subtask.completed else "☐"
            console.print(
                f"  {box} [dim]{short_id(subtask.id)}[/dim] {escape(subtask.title)}"
            )

    updates = updates_newest_first(task)
    if updates:
        console.print("\n[bold]Updates[/bold]")
        for update in updates:
            console.print(
                f"  [dim]{format_timestamp(update.timestamp)}[/dim] "
                f"[cyan]{escape(update.user_name)}[/cyan]: {escape(update.content)}"
            )
