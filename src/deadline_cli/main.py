"""Main entry point for Deadline CLI."""

from typing import Annotated

import typer

from deadline_cli import __version__
from deadline_cli.commands import config, focus, group, subtasks, tasks
from deadline_cli.commands.common import (
    JsonOption,
    OutputOption,
    open_app,
    resolve_output,
)
from deadline_cli.commands.decorators import command_wrapper
from deadline_cli.services.config_service import get_config_service
from deadline_cli.services.identity_service import DEFAULT_PROFILE
from deadline_cli.utils.typer_helpers import SuggestingGroup
from deadline_cli.utils.ui.console import get_console, set_color
from deadline_cli.utils.ui.formatters import format_output

app = typer.Typer(
    name="deadline",
    cls=SuggestingGroup,
    help="Deadline-bound tasks with a final-hour execution window",
    no_args_is_help=True,
)

console = get_console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    profile: Annotated[
        str,
        typer.Option(
            "--profile",
            "-p",
            envvar="DEADLINE_PROFILE",
            help="Identity profile to act as",
        ),
    ] = DEFAULT_PROFILE,
) -> None:
    """Deadline CLI."""
    ctx.obj = {"profile": profile}
    set_color(get_config_service().config.output.color)


# Task lifecycle
app.command("create")(tasks.create_command)
app.command("list")(tasks.list_command)
app.command("history")(tasks.history_command)
app.command("status")(tasks.status_command)
app.command("show")(tasks.show_command)
app.command("post")(tasks.post_command)
app.command("complete")(tasks.complete_command)
app.command("progress")(tasks.progress_command)

# Group membership
app.command("join")(group.join_command)
app.command("leave")(group.leave_command)

# Subcommands
app.add_typer(subtasks.app, name="subtask", help="Manage subtasks")
app.add_typer(focus.app, name="focus", help="Focus sessions")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
@command_wrapper
def whoami(
    ctx: typer.Context,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show the local identity for the current profile."""
    output = resolve_output(output, json_opt)
    with open_app(ctx) as deadline_app:
        user = deadline_app.identity.get_current_user()
        profile = deadline_app.profile
    format_output({"profile": profile, **user.model_dump()}, output)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Deadline CLI[/bold] version [cyan]{__version__}[/cyan]")


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
