"""
Class conflict model.

Teams belong to a homeroom class. Two matches cannot run at the same time if
they share a team or if the same class would be needed on both courts.
"""

import re
from typing import Dict, Iterable, Optional, Set

from sportsday.models import Match, Team

# Legacy team-name formats, tried in order
_CLASS_PATTERNS = [
    re.compile(r"grade(\d)-(\d)-([A-Za-z0-9]+)", re.IGNORECASE),  # grade1-1-A
    re.compile(r"^(\d)\s*[-_ ]?\s*([A-Za-z])(?![A-Za-z])"),        # 1-A, 1A, 1 A, 1-A Boys
    re.compile(r"^(\d)\s*年\s*(\d+)\s*組"),                         # 3年2組
]


def extract_class_id(name: str) -> Optional[str]:
    """
    Derive a "<grade>-<class>" identifier from a team name.

    Only used when a team carries no explicit class. Returns None for names
    that follow none of the known formats.
    """
    if not name:
        return None

    text = name.strip()
    for index, pattern in enumerate(_CLASS_PATTERNS):
        found = pattern.search(text)
        if not found:
            continue
        if index == 0:
            return f"{found.group(1)}-{found.group(3).upper()}"
        return f"{found.group(1)}-{found.group(2).upper()}"
    return None


def resolve_class_id(team: Team, overrides: Optional[Dict[str, str]] = None) -> Optional[str]:
    if overrides and overrides.get(team.id):
        return overrides[team.id]
    if team.class_id:
        return team.class_id
    return extract_class_id(team.name)


def build_class_map(teams: Iterable[Team], overrides: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Map team id to class id for every team whose class can be resolved.

    Args:
        teams: Teams taking part in the sport
        overrides: Explicit team id -> class id assignments

    Returns:
        Dictionary of team id -> class id
    """
    class_map = {}
    for team in teams:
        class_id = resolve_class_id(team, overrides)
        if class_id:
            class_map[team.id] = class_id

    # Overrides may name teams that are not in the roster yet
    for team_id, class_id in (overrides or {}).items():
        if class_id and team_id not in class_map:
            class_map[team_id] = class_id
    return class_map


def match_classes(match: Match, class_map: Dict[str, str]) -> Set[str]:
    return {class_map[team_id] for team_id in match.team_ids if team_id in class_map}


def has_class_conflict(match_a: Match, match_b: Match, class_map: Dict[str, str]) -> bool:
    """True if the two matches share a team or a class and so cannot run together."""
    if set(match_a.team_ids) & set(match_b.team_ids):
        return True
    return bool(match_classes(match_a, class_map) & match_classes(match_b, class_map))
