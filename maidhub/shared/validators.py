"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Optional

from ..exceptions import ValidationError

# 24-hour clock, hour may be written without a leading zero ("9:00")
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def is_valid_time(value: Optional[str]) -> bool:
    """Check that value is a HH:MM (24-hour) time-of-day string"""
    return bool(value) and bool(TIME_PATTERN.match(value))


def normalize_time(value: str) -> str:
    """
    Validate a HH:MM time string and return it zero-padded.

    Raises:
        ValidationError: If the value is not a 24-hour HH:MM time
    """
    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValidationError("Time must be in HH:MM format (24-hour)")
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def time_to_minutes(value: str) -> int:
    """Convert HH:MM to minutes since midnight. Assumes a pre-validated string."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def validate_time_range(start_time: str, end_time: str) -> None:
    """Reject equal or inverted ranges"""
    if time_to_minutes(start_time) >= time_to_minutes(end_time):
        raise ValidationError("End time must be after start time")


def parse_query_date(value: Optional[str]) -> date:
    """
    Parse a YYYY-MM-DD query parameter into a calendar day.

    Time-of-day components (e.g. an ISO datetime) are accepted and dropped.
    """
    if not value:
        raise ValidationError("Please provide a date")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid date format. Expected YYYY-MM-DD") from None
