"""
Chain timestamp utilities.

Cosmos SDK and CometBFT emit RFC 3339 timestamps with up to nanosecond
precision and a trailing 'Z'. These helpers turn them into aware UTC
datetimes without ever raising.
"""

import re
from datetime import datetime, timezone
from typing import Optional

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_FRACTION = re.compile(r"\.(\d+)")


def parse_chain_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a chain timestamp into an aware UTC datetime.

    Fractional seconds beyond microseconds are truncated.

    Args:
        value: ISO-8601 timestamp string, e.g. 2024-05-01T12:00:00.123456789Z

    Returns:
        Aware datetime in UTC, or None if the value is empty or malformed
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip().replace("Z", "+00:00").replace("z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def is_zero_time(value: Optional[str]) -> bool:
    """Check whether a timestamp is the zero-value sentinel."""
    parsed = parse_chain_timestamp(value)
    return parsed is not None and parsed == ZERO_TIME


def format_chain_timestamp(value: Optional[str]) -> str:
    """
    Format a chain timestamp for display.

    Args:
        value: ISO-8601 timestamp string

    Returns:
        "YYYY-MM-DD HH:MM:SS UTC", or the input unchanged if it cannot be parsed
    """
    parsed = parse_chain_timestamp(value)
    if parsed is None:
        return value or ""
    return parsed.strftime("%Y-%m-%d %H:%M:%S UTC")
