"""Strict parsing of trip timestamps and whole-second arithmetic."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from .errors import TimestampParseError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
# strptime alone accepts single-digit fields and non-ASCII digits.
_TIMESTAMP_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
_ONE_SECOND = timedelta(seconds=1)


def parse_timestamp(text: str) -> datetime:
    """
    Parse ``YYYY-MM-DD HH:MM:SS`` into a naive datetime.

    Args:
        text: Raw timestamp text from a trip record.
    Returns:
        Second-resolution datetime without timezone information.
    Raises:
        TimestampParseError: when the text deviates from the format or names
            an impossible calendar date or time of day.
    """
    if not isinstance(text, str):
        raise TimestampParseError(text, "expected a string")
    if not _TIMESTAMP_PATTERN.fullmatch(text):
        raise TimestampParseError(text)
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise TimestampParseError(text, str(exc)) from exc


def duration_seconds(start: datetime, end: datetime) -> int:
    """Signed ``end - start`` in whole seconds; negative when end precedes start."""
    return (end - start) // _ONE_SECOND


__all__ = ["TIMESTAMP_FORMAT", "duration_seconds", "parse_timestamp"]
