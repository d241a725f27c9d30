"""UTC clock and timestamp helpers shared by the core and the HTTP layer."""

import re
from datetime import datetime, timezone

from errors import InvalidArgument

# YYYY-MM-DDTHH:MM:SS, optionally followed by Z or +HH:MM / -HH:MM (no fractional seconds)
_ISO_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(Z|[+-]\d{2}:\d{2})$")


def utc_now() -> datetime:
    """Current wall-clock time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Normalise an aware datetime to UTC. Naive values are rejected."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidArgument("Timestamp must be timezone-aware")
    return value.astimezone(timezone.utc)


def seconds_between(start: datetime, end: datetime) -> float:
    """Seconds from start to end (negative when end is earlier)."""
    return (end - start).total_seconds()


def parse_timestamp(text: str) -> datetime:
    """
    Parse an ISO-8601 timestamp without fractional seconds.
    Text without an offset (exactly 19 chars) is taken as UTC.
    """
    if not text or not text.strip():
        raise InvalidArgument("Invalid time specified")
    text = text.strip()
    if len(text) == 19:
        text = text + "+00:00"
    if not _ISO_PATTERN.match(text):
        raise InvalidArgument(f"Invalid date/time: {text!r}")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        # offsets near the calendar edges can push the UTC value out of range
        return datetime.fromisoformat(text).astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise InvalidArgument(f"Invalid date/time: {text!r}") from e
