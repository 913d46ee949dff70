"""nodecred.core.time

The only time helper surface in the codebase.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def utc_now() -> datetime:
    """Return an aware UTC datetime."""

    return datetime.now(tz=UTC)


def unix_seconds(value: datetime | int) -> int:
    """Return whole Unix seconds for a datetime or an integer.

    Naive datetimes are assumed UTC. Fractions are floored, so instants before
    the epoch round toward the past.

    Raises:
        TypeError: if value is neither a datetime nor an int.
    """

    if isinstance(value, bool):
        raise TypeError("timestamp must be a datetime or int, not bool")
    if isinstance(value, int):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return math.floor(value.timestamp())
    raise TypeError(f"timestamp must be a datetime or int, got {type(value).__name__}")


def in_int64_range(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def from_unix_seconds(value: int) -> datetime:
    """Inverse of :func:`unix_seconds` for whole seconds."""

    return datetime.fromtimestamp(value, tz=UTC)
