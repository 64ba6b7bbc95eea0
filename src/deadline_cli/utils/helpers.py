"""Identifier and clock helpers shared across layers."""

from __future__ import annotations

import secrets
import uuid
from datetime import UTC, datetime

DISPLAY_NAME_PREFIX = "User_"


def generate_uuid() -> str:
    """Return a random (version 4) UUID string.

    Collisions are negligible: about 2**-122 for any pair of ids.
    """
    return str(uuid.uuid4())


def generate_display_name() -> str:
    """Return a throwaway display name such as ``User_3fa8``."""
    return DISPLAY_NAME_PREFIX + secrets.token_hex(2)


def utc_now() -> datetime:
    """Default clock: the current instant as an aware UTC datetime."""
    return datetime.now(UTC)


def now_iso() -> str:
    return utc_now().isoformat()
