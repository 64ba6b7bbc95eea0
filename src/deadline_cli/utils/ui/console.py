"""Shared rich consoles for Deadline CLI output."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Return the process-wide console for the given highlight setting."""
    return Console(highlight=highlight)


def set_color(enabled: bool) -> None:
    """Turn colour on or off for every console handed out so far and later."""
    for highlight in (True, False):
        get_console(highlight).no_color = not enabled
