"""
Server-timezone datetime utilities.

Chat timestamps travel as naive "yyyy-MM-dd HH:mm:ss" strings that are
interpreted in a single fixed server timezone. Stored values are naive
datetimes in that zone with sub-second precision truncated.
"""

import re
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from mentorchat.core.config import get_settings

WIRE_FORMAT = "%Y-%m-%d %H:%M:%S"
WIRE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)


def truncate_to_second(dt: datetime) -> datetime:
    """
    Drop the sub-second part of a datetime.

    Truncates, never rounds: 10:00:00.999 becomes 10:00:00.
    """
    return dt.replace(microsecond=0)


def now_server(timezone_name: Optional[str] = None) -> datetime:
    """
    Get the current time in the server timezone, naive and second-truncated.

    Args:
        timezone_name: IANA timezone name, defaults to SERVER_TIMEZONE

    Returns:
        datetime: Naive local time with microsecond == 0
    """
    tz = ZoneInfo(timezone_name or get_settings().SERVER_TIMEZONE)
    return truncate_to_second(datetime.now(tz).replace(tzinfo=None))


def parse_wire_time(value: str) -> datetime:
    """
    Parse a wire timestamp ("yyyy-MM-dd HH:mm:ss").

    Every field is zero-padded and nothing may surround the timestamp.

    Raises:
        ValueError: If the string does not match the wire format exactly
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a string timestamp, got {type(value).__name__}")
    if not WIRE_PATTERN.fullmatch(value):
        raise ValueError(f"Timestamp {value!r} does not match {WIRE_FORMAT}")
    return datetime.strptime(value, WIRE_FORMAT)


def format_wire_time(dt: datetime) -> str:
    """Format a datetime in the wire format."""
    return truncate_to_second(dt).strftime(WIRE_FORMAT)
