"""Configuration management commands."""

from typing import Annotated, Any

import typer

from deadline_cli.services.config_service import get_config_service
from deadline_cli.utils.exit_codes import ERROR_INVALID_ARGS
from deadline_cli.utils.ui.console import get_console
from deadline_cli.utils.ui.formatters import format_output, format_success

from .common import JsonOption, OutputOption, resolve_output
from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _parse_value(value: str) -> Any:
    """Convert a command-line string to bool or int where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    return value


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. share.base_url)")],
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e
    if hasattr(value, "model_dump"):
        format_output(value.model_dump(), "pretty")
    else:
        console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. share.base_url)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    try:
        new_value = get_config_service().set(key, _parse_value(value))
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{new_value}'")


@app.command("list")
@command_wrapper
def list_config(
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show every configuration value."""
    output = resolve_output(output, json_opt)
    format_output(get_config_service().flatten(), output)


@app.command("reset")
@command_wrapper
def reset_config(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset all settings to their defaults?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
