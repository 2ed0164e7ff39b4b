"""
Date Range Utility

Turns YYYY-MM-DD query strings into inclusive UTC epoch-second bounds.
"""

import re
from dataclasses import dataclass
from datetime import datetime, time, timezone
from typing import Optional

from app.services.base import InvalidDateError

DATE_FORMAT = "%Y-%m-%d"
EXPECTED_FORMAT = "YYYY-MM-DD"

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


@dataclass(frozen=True)
class DateRange:
    """Inclusive window in epoch seconds. A missing bound is unbounded."""

    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def start_ms(self) -> Optional[int]:
        return None if self.start is None else self.start * 1000

    @property
    def end_ms(self) -> Optional[int]:
        return None if self.end is None else self.end * 1000


def parse_date(value: str) -> datetime:
    """
    Parse a strict YYYY-MM-DD string into a UTC midnight datetime.

    strptime alone accepts single-digit months and days, so the literal
    shape is checked first. Impossible calendar dates fail in strptime.

    Raises:
        InvalidDateError: If the value is malformed or not a real date
    """
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidDateError(value)
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise InvalidDateError(value) from None
    return parsed.replace(tzinfo=timezone.utc)


def _bound(value: Optional[str], at: time) -> Optional[int]:
    if value is None:
        return None
    day = parse_date(value)
    return int(datetime.combine(day.date(), at, tzinfo=timezone.utc).timestamp())


def parse_start(value: Optional[str]) -> Optional[int]:
    """First UTC second included for a start date."""
    return _bound(value, DAY_START)


def parse_end(value: Optional[str]) -> Optional[int]:
    """Last UTC second included for an end date (23:59:59, not next midnight)."""
    return _bound(value, DAY_END)


def parse_range(start: Optional[str] = None, end: Optional[str] = None) -> DateRange:
    """
    Build an inclusive DateRange from optional request strings.

    Args:
        start: Start date (YYYY-MM-DD) or None for no lower bound
        end: End date (YYYY-MM-DD) or None for no upper bound

    Returns:
        DateRange in epoch seconds

    Raises:
        InvalidDateError: If either string is present but invalid
    """
    return DateRange(start=parse_start(start), end=parse_end(end))


def millis_to_seconds(timestamp_ms: int) -> int:
    """Convert epoch milliseconds to seconds, truncating toward zero."""
    seconds = abs(timestamp_ms) // 1000
    return -seconds if timestamp_ms < 0 else seconds
