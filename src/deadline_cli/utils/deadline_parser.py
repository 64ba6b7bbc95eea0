"""Parse user-entered deadlines.

Accepts ISO-8601 timestamps, short relative phrases ("in 90 minutes",
"in 2h") and anything else ``dateparser`` understands ("tomorrow at 5pm",
"friday 18:00"). Naive results are interpreted in the local timezone and
returned as aware UTC datetimes.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

import dateparser

from deadline_cli.models import TaskValidationError

_RELATIVE_PATTERN = re.compile(
    r"^\s*in\s+(\d+)\s*(m|min|mins|minutes?|h|hr|hrs|hours?|d|days?)\s*$",
    re.IGNORECASE,
)

_UNIT_SECONDS = {"m": 60, "h": 3600, "d": 86400}


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC)


def _parse_iso(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def _parse_relative(text: str, now: datetime) -> datetime | None:
    match = _RELATIVE_PATTERN.match(text)
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2).lower()[0]
    try:
        return now + timedelta(seconds=amount * _UNIT_SECONDS[unit])
    except (OverflowError, ValueError) as e:
        raise TaskValidationError(
            f"deadline: '{text.strip()}' is too far away"
        ) from e


def parse_deadline(text: str, now: datetime) -> datetime:
    """Parse a deadline relative to ``now``.

    Args:
        text: User input
        now: Current aware datetime used as the base for relative phrases

    Returns:
        Aware UTC datetime

    Raises:
        TaskValidationError: If the text cannot be understood
    """
    if not text or not text.strip():
        raise TaskValidationError("deadline: Field required")

    parsed = _parse_iso(text)
    if parsed is None:
        parsed = _parse_relative(text, now)
    if parsed is None:
        parsed = dateparser.parse(
            text,
            settings={
                "PREFER_DATES_FROM": "future",
                "RELATIVE_BASE": now.astimezone().replace(tzinfo=None),
                "RETURN_AS_TIMEZONE_AWARE": True,
            },
        )
    if parsed is None:
        raise TaskValidationError(f"deadline: could not understand '{text}'")
    return _to_utc(parsed)
