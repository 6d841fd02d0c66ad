"""Timestamps for image records."""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time, e.g. `2024-01-15T10:42:31.123456+00:00`.

    `created_at` is the range key of the owner index, so these strings
    must sort in the order they were produced.
    """
    return datetime.now(timezone.utc).isoformat()
