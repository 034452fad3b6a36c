"""Canonical timestamp codec shared by the JSON files and the wire shape.

Timestamps are RFC 3339 at second precision, e.g. ``2024-05-01T10:00:00Z``
or ``2024-05-01T12:00:00+02:00``. A missing timestamp is written as the
zero timestamp so consumers always receive a string.
"""

from datetime import datetime, timedelta
from typing import Optional

ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"


def now() -> datetime:
    """Current local time, timezone-aware, truncated to whole seconds."""
    return datetime.now().astimezone().replace(microsecond=0)


def format_timestamp(value: Optional[datetime]) -> str:
    """Render an aware datetime (or None) as RFC 3339 text."""
    if value is None:
        return ZERO_TIMESTAMP
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.replace(microsecond=0).isoformat()
    if value.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    """Parse RFC 3339 text back into an aware datetime.

    ``None``, the empty string and the zero timestamp all mean "never".

    Raises:
        ValueError: If the text is not a valid timestamp.
    """
    if not text or text == ZERO_TIMESTAMP:
        return None
    if not isinstance(text, str):
        raise ValueError(f"Timestamp must be a string, got {type(text).__name__}")
    parsed = datetime.fromisoformat(text)
    if parsed.year == 1 and parsed.month == 1 and parsed.day == 1:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed
