"""
Clock arithmetic on "HH:MM" strings.

All schedule computation happens in minutes since midnight; strings are only
used at the edges. Intervals are half-open, so a match ending at 12:00 does
not overlap a lunch window starting at 12:00.
"""

import re
from typing import Iterable, Optional

from sportsday.models import BreakWindow

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def time_to_minutes(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Args:
        value: Time of day such as "09:05"; hours always take two digits

    Returns:
        Minutes since midnight

    Raises:
        ValueError: If the string is not a valid 24-hour time
    """
    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """
    Format minutes since midnight as "HH:MM".

    Values past midnight are not wrapped: 1500 formats as "25:00".
    """
    if minutes < 0:
        raise ValueError(f"Minutes must be non-negative, got {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: str, minutes: int) -> str:
    return minutes_to_time(time_to_minutes(value) + minutes)


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def window_bounds(window: BreakWindow):
    return time_to_minutes(window.start_time), time_to_minutes(window.end_time)


def find_overlapping_window(start: int, end: int, windows: Iterable[BreakWindow]) -> Optional[BreakWindow]:
    """Return the first window that overlaps [start, end), or None."""
    for window in windows:
        if window is None:
            continue
        window_start, window_end = window_bounds(window)
        if intervals_overlap(start, end, window_start, window_end):
            return window
    return None
