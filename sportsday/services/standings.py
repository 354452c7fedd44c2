"""
Standings calculation for blocks and round-robin competitions.
"""

from typing import Dict, List, Optional

from sportsday.core.config import (
    LEAGUE_WIN_POINTS, LEAGUE_DRAW_POINTS, LEAGUE_LOSE_POINTS, RANKING_METHODS
)
from sportsday.core.exceptions import InvalidSettingsError
from sportsday.models import LeagueBlock, Match, RoundRobinSettings, Team, TeamStanding

LEAGUE_POINTS = RoundRobinSettings(
    win_points=LEAGUE_WIN_POINTS,
    draw_points=LEAGUE_DRAW_POINTS,
    lose_points=LEAGUE_LOSE_POINTS,
    consider_lose_points=False
)


def _sort_key(standing: TeamStanding, ranking_method: str):
    if ranking_method == "goalDifference":
        primary = (standing.goal_difference, standing.points, standing.goals_for)
    elif ranking_method == "goals":
        primary = (standing.goals_for, standing.points, standing.goal_difference)
    else:
        primary = (standing.points, standing.goal_difference, standing.goals_for)
    # Descending on the numbers, ascending on name and id
    return tuple(-value for value in primary) + (standing.team_name, standing.team_id)


def calculate_standings(
    team_ids: List[str],
    matches: List[Match],
    settings: Optional[RoundRobinSettings] = None,
    team_names: Optional[Dict[str, str]] = None
) -> List[TeamStanding]:
    """
    Build the standings table for a set of teams.

    Only completed matches count. Matches involving teams outside
    ``team_ids`` are ignored.

    Args:
        team_ids: Teams to rank
        matches: Matches played between them
        settings: Points scheme and ranking method (league 3/1/0 by default)
        team_names: Display names, used as the final tie-break before team id

    Returns:
        Standings rows ordered by rank, ranks starting at 1
    """
    settings = settings or LEAGUE_POINTS
    if settings.ranking_method not in RANKING_METHODS:
        raise InvalidSettingsError(f"Unknown ranking method '{settings.ranking_method}'")

    team_names = team_names or {}
    table = {
        team_id: TeamStanding(team_id=team_id, team_name=team_names.get(team_id, team_id))
        for team_id in team_ids
    }

    for match in matches:
        if not match.is_completed:
            continue
        home = table.get(match.team1_id)
        away = table.get(match.team2_id)
        if home is None or away is None:
            continue

        for standing, scored, conceded in (
            (home, match.team1_score, match.team2_score),
            (away, match.team2_score, match.team1_score)
        ):
            standing.played += 1
            standing.goals_for += scored
            standing.goals_against += conceded
            if scored > conceded:
                standing.won += 1
                standing.points += settings.win_points
            elif scored == conceded:
                standing.drawn += 1
                standing.points += settings.draw_points
            else:
                standing.lost += 1
                if settings.consider_lose_points:
                    standing.points += settings.lose_points

    ordered = sorted(table.values(), key=lambda s: _sort_key(s, settings.ranking_method))
    for rank, standing in enumerate(ordered, start=1):
        standing.rank = rank
    return ordered


def calculate_block_standings(block: LeagueBlock, teams: Optional[List[Team]] = None) -> List[str]:
    """Rank a block's teams with fixed league points (3/1/0); returns team ids."""
    team_names = {team.id: team.name for team in teams or []}
    rows = calculate_standings(block.team_ids, block.matches, LEAGUE_POINTS, team_names)
    return [row.team_id for row in rows]
