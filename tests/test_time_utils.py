"""
Tests for clock arithmetic on "HH:MM" strings.
"""

import sys
import os

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.models import BreakWindow
from sportsday.services.time_utils import (
    add_minutes, find_overlapping_window, intervals_overlap,
    minutes_to_time, time_to_minutes
)


def test_time_to_minutes():
    """Test conversion of times of day to minutes."""
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("09:05") == 545
    assert time_to_minutes("23:59") == 1439


def test_round_trip_for_every_minute_of_the_day():
    for minutes in range(24 * 60):
        text = minutes_to_time(minutes)
        assert time_to_minutes(text) == minutes
        assert minutes_to_time(time_to_minutes(text)) == text


def test_invalid_times_raise():
    for value in ["", "9", "9:05", "24:00", "12:60", "ab:cd", "12-30", None]:
        with pytest.raises(ValueError):
            time_to_minutes(value)

    with pytest.raises(ValueError):
        minutes_to_time(-1)


def test_minutes_past_midnight_do_not_wrap():
    assert minutes_to_time(1500) == "25:00"
    assert add_minutes("23:50", 20) == "24:10"


def test_intervals_are_half_open():
    """A match ending at 12:00 does not touch lunch starting at 12:00."""
    assert not intervals_overlap(700, 720, 720, 780)
    assert intervals_overlap(701, 721, 720, 780)
    assert intervals_overlap(720, 780, 730, 740)


def test_find_overlapping_window_returns_first_match():
    lunch = BreakWindow("12:00", "13:00", "Lunch")
    short_break = BreakWindow("12:30", "12:40", "Break")

    assert find_overlapping_window(time_to_minutes("11:50"), time_to_minutes("12:10"), [lunch, short_break]) is lunch
    assert find_overlapping_window(time_to_minutes("12:35"), time_to_minutes("12:38"), [short_break, lunch]) is short_break
    assert find_overlapping_window(time_to_minutes("13:00"), time_to_minutes("13:20"), [lunch, short_break]) is None
    assert find_overlapping_window(0, 10, [None]) is None
