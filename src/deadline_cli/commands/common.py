"""Helpers shared by the command modules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer

from deadline_cli.services.app_context import AppContext
from deadline_cli.services.config_service import get_config_service
from deadline_cli.services.identity_service import DEFAULT_PROFILE
from deadline_cli.utils.exit_codes import ERROR_INVALID_ARGS
from deadline_cli.utils.helpers import utc_now

from .decorators import AppError

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")

OutputOption = Annotated[
    str | None,
    typer.Option("--output", "-o", help="Output format: pretty, table, json, yaml"),
]
JsonOption = Annotated[
    bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
]


def get_profile(ctx: typer.Context | None) -> str:
    """Return the identity profile chosen on the root command."""
    if ctx is None:
        return DEFAULT_PROFILE
    obj = ctx.find_root().obj or {}
    return obj.get("profile", DEFAULT_PROFILE)


@contextmanager
def open_app(ctx: typer.Context | None) -> Iterator[AppContext]:
    """Open an AppContext for the configured store and selected profile."""
    app = AppContext.from_config(
        get_config_service(), profile=get_profile(ctx), clock=utc_now
    )
    with app:
        yield app


def resolve_output(output: str | None, json_opt: bool = False) -> str:
    """Pick the output format: --json, then --output, then the config default."""
    if json_opt:
        return "json"
    if output is None:
        return get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"--output must be one of: {', '.join(OUTPUT_FORMATS)}",
            ERROR_INVALID_ARGS,
        )
    return output
