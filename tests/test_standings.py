"""
Tests for the standings calculator.
"""

import sys
import os

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.core.exceptions import InvalidSettingsError
from sportsday.models import LeagueBlock, Match, RoundRobinSettings, Team
from sportsday.services.standings import calculate_block_standings, calculate_standings


def played(match_id, team1, team2, score1, score2):
    match = Match(id=match_id, team1_id=team1, team2_id=team2)
    match.record_result(score1, score2)
    return match


def test_block_standings_points_order():
    """Win 3, draw 1, loss 0; goal difference breaks the tie."""
    block = LeagueBlock(id="block_1", name="Block A", team_ids=["A", "B", "C"], matches=[
        played("m1", "A", "B", 2, 0),
        played("m2", "A", "C", 1, 0),
        played("m3", "B", "C", 1, 1),
    ])
    # A 6 pts; B 1 pt, gd -2; C 1 pt, gd -1
    assert calculate_block_standings(block) == ["A", "C", "B"]


def test_goals_for_breaks_equal_goal_difference():
    block = LeagueBlock(id="block_1", name="Block A", team_ids=["A", "B", "C"], matches=[
        played("m1", "A", "C", 3, 2),
        played("m2", "B", "C", 1, 0),
    ])
    # A and B: 3 pts, gd +1; A scored more
    assert calculate_block_standings(block) == ["A", "B", "C"]


def test_unfinished_matches_are_ignored():
    pending = Match(id="m2", team1_id="B", team2_id="A", team1_score=9, team2_score=0)
    block = LeagueBlock(id="block_1", name="Block A", team_ids=["A", "B"], matches=[
        played("m1", "A", "B", 1, 0),
        pending,
    ])
    assert calculate_block_standings(block) == ["A", "B"]


def test_name_then_id_fallback_is_deterministic():
    teams = [Team(id="t1", name="Beta"), Team(id="t2", name="Alpha"), Team(id="t3", name="Alpha")]
    block = LeagueBlock(id="block_1", name="Block A", team_ids=["t1", "t2", "t3"])

    assert calculate_block_standings(block, teams) == ["t2", "t3", "t1"]
    assert calculate_block_standings(block) == ["t1", "t2", "t3"]


def test_full_table_rows():
    rows = calculate_standings(["A", "B"], [played("m1", "A", "B", 3, 1), played("m2", "B", "A", 2, 2)])
    top, bottom = rows

    assert (top.team_id, top.rank, top.played, top.won, top.drawn, top.lost) == ("A", 1, 2, 1, 1, 0)
    assert (top.goals_for, top.goals_against, top.goal_difference, top.points) == (5, 3, 2, 4)
    assert (bottom.team_id, bottom.rank, bottom.points, bottom.lost) == ("B", 2, 1, 1)


def test_round_robin_points_settings():
    """Lose points only count when consider_lose_points is set."""
    matches = [played("m1", "A", "B", 1, 0)]

    plain = calculate_standings(["A", "B"], matches, RoundRobinSettings(win_points=2, lose_points=1))
    assert [(row.team_id, row.points) for row in plain] == [("A", 2), ("B", 0)]

    counted = calculate_standings(
        ["A", "B"], matches, RoundRobinSettings(win_points=2, lose_points=1, consider_lose_points=True)
    )
    assert [(row.team_id, row.points) for row in counted] == [("A", 2), ("B", 1)]


def test_ranking_methods():
    matches = [
        played("m1", "A", "B", 1, 0),
        played("m2", "A", "C", 1, 0),
        played("m3", "B", "C", 8, 0),
        played("m4", "C", "A", 0, 0),
    ]
    # A: 7 pts, gd +2, gf 2   B: 3 pts, gd +7, gf 8   C: 1 pt, gd -9, gf 0
    by_points = calculate_standings(["A", "B", "C"], matches)
    by_difference = calculate_standings(["A", "B", "C"], matches, RoundRobinSettings(ranking_method="goalDifference"))
    by_goals = calculate_standings(["A", "B", "C"], matches, RoundRobinSettings(ranking_method="goals"))

    assert [row.team_id for row in by_points] == ["A", "B", "C"]
    assert [row.team_id for row in by_difference] == ["B", "A", "C"]
    assert [row.team_id for row in by_goals] == ["B", "A", "C"]


def test_unknown_ranking_method_raises():
    with pytest.raises(InvalidSettingsError):
        calculate_standings(["A"], [], RoundRobinSettings(ranking_method="luck"))
