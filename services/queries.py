"""Shared SQL helpers for the services."""

from datetime import datetime


def contains_pattern(text: str) -> str:
    """Build a LIKE pattern matching rows that contain ``text``.

    Wildcards in ``text`` are escaped so they match literally; pair the
    pattern with ``ESCAPE '\\'`` in the query.
    """
    escaped = (
        text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp stored as ISO-8601 text (SQLite's CURRENT_TIMESTAMP included)."""
    return datetime.fromisoformat(value)
