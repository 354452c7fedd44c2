"""
Tests for the class conflict model.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.models import Match, Team
from sportsday.services.conflicts import (
    build_class_map, extract_class_id, has_class_conflict, resolve_class_id
)


def test_extract_class_id_formats():
    """Test the legacy team-name formats."""
    assert extract_class_id("1-A") == "1-A"
    assert extract_class_id("1A") == "1-A"
    assert extract_class_id("1 a") == "1-A"
    assert extract_class_id("1-A Boys") == "1-A"
    assert extract_class_id("2B Red") == "2-B"
    assert extract_class_id("grade2-3-b") == "2-B"
    assert extract_class_id("3年2組") == "3-2"


def test_extract_class_id_unknown_names():
    assert extract_class_id("Teachers") is None
    assert extract_class_id("") is None
    assert extract_class_id(None) is None
    assert extract_class_id("1Boys") is None


def test_resolve_class_id_precedence():
    """Explicit override beats Team.class_id, which beats the name."""
    team = Team(id="t1", name="1-A", class_id="2-C")
    assert resolve_class_id(team) == "2-C"
    assert resolve_class_id(team, {"t1": "3-D"}) == "3-D"
    assert resolve_class_id(Team(id="t2", name="1-A")) == "1-A"
    assert resolve_class_id(Team(id="t3", name="Staff")) is None


def test_build_class_map_skips_unresolved_teams():
    teams = [Team(id="t1", name="1-A Red"), Team(id="t2", name="Staff")]
    class_map = build_class_map(teams, {"t9": "4-A"})
    assert class_map == {"t1": "1-A", "t9": "4-A"}


def test_has_class_conflict():
    teams = [
        Team(id="a1", name="1-A Red"),
        Team(id="b1", name="2-B Red"),
        Team(id="a2", name="1-A Blue"),
        Team(id="c1", name="3-C Blue"),
        Team(id="d1", name="4-D"),
    ]
    class_map = build_class_map(teams)

    red = Match(id="m1", team1_id="a1", team2_id="b1")
    blue = Match(id="m2", team1_id="a2", team2_id="c1")
    other = Match(id="m3", team1_id="c1", team2_id="d1")
    same_team = Match(id="m4", team1_id="a1", team2_id="d1")

    assert has_class_conflict(red, blue, class_map)       # 1-A on both
    assert not has_class_conflict(red, other, class_map)
    assert has_class_conflict(red, same_team, class_map)  # shared team a1
    assert has_class_conflict(blue, other, {})            # shared team c1
