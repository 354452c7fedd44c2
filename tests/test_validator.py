"""
Tests for timetable validation.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.models import BreakWindow, Match, ScheduleSettings, SlotType, Team, TimeSlot
from sportsday.services.validator import ScheduleValidator

TEAMS = [
    Team(id="a1", name="1-A Red"), Team(id="b1", name="2-B Red"),
    Team(id="a2", name="1-A Blue"), Team(id="c1", name="3-C"),
    Team(id="d1", name="4-D"), Team(id="e1", name="5-E"),
]

MATCHES = [
    Match(id="m1", team1_id="a1", team2_id="b1"),
    Match(id="m2", team1_id="a2", team2_id="c1"),
    Match(id="m3", team1_id="d1", team2_id="e1"),
    Match(id="playoff_match_1_1", team1_id="a1"),  # bye
]

SETTINGS = ScheduleSettings(start_time="09:00", end_time="12:00", court_count=2,
                            lunch_break=BreakWindow("11:00", "12:00", "Lunch"))


def slot(start, end, court, match_id):
    return TimeSlot(start, end, SlotType.MATCH, court_id=court, match_id=match_id)


def validate(slots):
    return ScheduleValidator().validate_schedule(slots, MATCHES, SETTINGS, TEAMS)


def test_valid_schedule():
    """Test that a clean timetable passes."""
    result = validate([
        slot("09:00", "09:20", "court1", "m1"),
        slot("09:00", "09:20", "court2", "m3"),
        slot("09:25", "09:45", "court1", "m2"),
        TimeSlot("11:00", "12:00", SlotType.LUNCH, title="Lunch"),
    ])
    assert result.is_valid
    assert result.hard_constraint_violations == []
    assert result.total_penalty_score == 0


def test_court_double_booking():
    result = validate([
        slot("09:00", "09:20", "court1", "m1"),
        slot("09:10", "09:30", "court1", "m3"),
        slot("09:40", "10:00", "court1", "m2"),
    ])
    assert not result.is_valid
    assert result.violation_types() == ["court_conflict"]


def test_class_conflict():
    result = validate([
        slot("09:00", "09:20", "court1", "m1"),
        slot("09:00", "09:20", "court2", "m2"),
        slot("09:25", "09:45", "court1", "m3"),
    ])
    assert result.violation_types() == ["class_conflict"]


def test_team_double_booking():
    matches = MATCHES + [Match(id="m4", team1_id="a1", team2_id="e1")]
    result = ScheduleValidator().validate_schedule([
        slot("09:00", "09:20", "court1", "m1"),
        slot("09:00", "09:20", "court2", "m4"),
        slot("09:25", "09:45", "court1", "m2"),
        slot("09:50", "10:10", "court1", "m3"),
    ], matches, SETTINGS, TEAMS)
    assert result.violation_types() == ["team_double_booking"]
    assert result.hard_constraint_violations[0].affected_teams == ["a1"]


def test_lunch_and_day_window():
    result = validate([
        slot("08:40", "09:00", "court1", "m1"),
        slot("10:50", "11:10", "court1", "m2"),
        slot("09:00", "09:20", "court1", "m3"),
    ])
    assert sorted(result.violation_types()) == ["break_overlap", "outside_day_window"]


def test_missing_unknown_and_duplicate_matches():
    result = validate([
        slot("09:00", "09:20", "court1", "m1"),
        slot("09:25", "09:45", "court1", "m1"),
        slot("09:50", "10:10", "court1", "ghost"),
    ])
    types = result.violation_types()
    assert "unknown_match" in types
    assert "duplicate_match" in types
    # m2 and m3 are missing; the bye is never expected on a court
    assert types.count("unscheduled_match") == 2
    assert "Hard Violations: 4" in result.get_summary()
