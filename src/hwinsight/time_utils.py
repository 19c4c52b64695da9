"""
Time conversion helpers.

The engine works in integer epoch milliseconds so that bucket boundaries are
exact multiples of the step. Conversions to and from ISO-8601 happen only at
the archive boundary (query literals and row timestamps).
"""

import math
import time
from datetime import datetime, timezone
from typing import Any, Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def to_iso(ms: int) -> str:
    """
    Format epoch milliseconds as a UTC ISO-8601 string with millisecond precision.

    The format (``2024-01-31T12:00:00.000Z``) matches the timestamps written by
    the sampler, so string comparison in the store orders correctly.
    """
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> Optional[int]:
    """
    Convert a row timestamp to epoch milliseconds.

    Accepts ISO-8601 strings (naive strings are UTC), datetimes and numeric
    epoch milliseconds. Returns None for values that cannot be interpreted.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        # SQLite DATETIME columns may use a space separator.
        try:
            parsed = datetime.fromisoformat(text.replace(" ", "T", 1))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(round(parsed.timestamp() * 1000))


def ceil_to_step(ms: int, step: int) -> int:
    """Smallest multiple of ``step`` that is >= ``ms``."""
    return -(-ms // step) * step


def floor_to_step(ms: int, step: int) -> int:
    """Largest multiple of ``step`` that is <= ``ms``."""
    return (ms // step) * step
