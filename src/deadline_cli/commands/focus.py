"""Focus session commands."""

import time
from datetime import timedelta
from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from deadline_cli.core.status import check_gate
from deadline_cli.core.views import time_remaining
from deadline_cli.services.config_service import get_config_service
from deadline_cli.utils.exit_codes import ERROR_LOCKED
from deadline_cli.utils.task_helpers import resolve_task_id
from deadline_cli.utils.ui.console import get_console
from deadline_cli.utils.ui.formatters import format_countdown, format_success

from .common import open_app
from .decorators import command_wrapper

app = typer.Typer(help="Focus sessions for tasks in their final hour")
console = get_console()

# Slack between the end of a capped countdown and the deadline.
RECORD_MARGIN = timedelta(seconds=5)


def _clock(seconds: int) -> str:
    return format_countdown(timedelta(seconds=seconds))


def _countdown(label: str, total_seconds: int) -> None:
    """Block for ``total_seconds`` while showing a rich countdown."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
    ) as progress:
        bar = progress.add_task(label, total=total_seconds)
        for remaining in range(total_seconds, 0, -1):
            progress.update(
                bar,
                completed=total_seconds - remaining,
                description=f"⏱️  {label} {_clock(remaining)}",
            )
            time.sleep(1)
        progress.update(bar, completed=total_seconds)


@app.command("log")
@command_wrapper
def log_session(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    minutes: Annotated[
        int | None,
        typer.Option("--minutes", "-m", min=1, help="Length of the session"),
    ] = None,
) -> None:
    """Record a focus session that just ended."""
    minutes = minutes or get_config_service().config.focus.focus_minutes
    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        session = service.add_focus_session(
            resolve_task_id(service, task_id), minutes * 60
        )
    format_success(f"Logged {session.duration // 60} minute focus session")


@app.command("start")
@command_wrapper
def start_session(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    minutes: Annotated[
        int | None,
        typer.Option("--minutes", "-m", min=1, help="Override focus length"),
    ] = None,
    take_break: Annotated[
        bool, typer.Option("--break/--no-break", help="Run the break timer after")
    ] = False,
) -> None:
    """Run a focus countdown and record the session when it finishes.

    Interrupting the countdown with Ctrl+C records nothing.
    """
    focus_config = get_config_service().config.focus
    focus_seconds = (minutes or focus_config.focus_minutes) * 60

    with open_app(ctx) as deadline_app:
        service = deadline_app.tasks
        resolved = resolve_task_id(service, task_id)
        task = service.get_task(resolved)
        now = service.now()
        # Fail fast instead of after the countdown.
        check_gate("add_focus_session", task, now)

    # The session must be recorded before the deadline locks the task.
    available = int((time_remaining(task, now) - RECORD_MARGIN).total_seconds())
    if available <= 0:
        console.print("[red]Too close to the deadline to start a session[/red]")
        raise typer.Exit(ERROR_LOCKED)
    if available < focus_seconds:
        focus_seconds = available
        console.print(
            f"[yellow]Session shortened to {_clock(focus_seconds)} "
            "to end before the deadline[/yellow]"
        )

    console.print(f"\n[bold green]Focus: {task.title}[/bold green]")
    try:
        _countdown("focus", focus_seconds)
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Session interrupted, nothing recorded[/yellow]")
        raise typer.Exit(1) from None

    with open_app(ctx) as deadline_app:
        deadline_app.tasks.add_focus_session(resolved, focus_seconds)
    format_success(f"🎉 Session complete: {_clock(focus_seconds)} recorded")

    if take_break:
        try:
            _countdown("break", focus_config.break_minutes * 60)
        except KeyboardInterrupt:
            console.print("\n[yellow]Break skipped[/yellow]")
            return
        console.print("[bold]Break over[/bold]")
