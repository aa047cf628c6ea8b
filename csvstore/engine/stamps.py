"""
Auto-fill values for the id, created_at and updated_at columns.
"""

import time
from datetime import datetime, timezone

NANOS_PER_SECOND = 1_000_000_000


def new_record_id() -> str:
    """
    Return a time-derived record id (nanoseconds since the epoch).

    Not collision-free: two inserts within the same clock tick get the
    same id.
    """
    return str(time.time_ns())


def format_timestamp(ns: int) -> str:
    """
    Format epoch nanoseconds as RFC 3339 UTC text.

    The fractional part keeps nanosecond precision with trailing zeros
    trimmed, e.g. "2024-05-01T12:00:00.1234Z".
    """
    seconds, nanos = divmod(ns, NANOS_PER_SECOND)
    base = datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    fraction = f"{nanos:09d}".rstrip("0")
    return f"{base}.{fraction}Z" if fraction else f"{base}Z"


def now_timestamp() -> str:
    return format_timestamp(time.time_ns())
