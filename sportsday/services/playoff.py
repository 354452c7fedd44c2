"""
Playoff generation for league competitions.

Builds a single-elimination bracket from the top teams of every block and
keeps it moving as results come in.
"""

import copy
from typing import Callable, List, Optional

from sportsday.core.config import (
    MESSAGES, PLACEHOLDER_TEAM_PREFIX, PLAYOFF_MATCH_ID_PREFIX,
    THIRD_PLACE_MATCH_ID, THIRD_PLACE_MATCH_NUMBER
)
from sportsday.core.logging_config import get_logger
from sportsday.models import (
    LeagueBlock, LeagueSettings, Match, MatchStatus, PlayoffGenerationResult, Team
)
from sportsday.services.bracket import (
    calculate_team_placements, generate_bracket_structure, next_match_info
)
from sportsday.services.standings import calculate_block_standings

logger = get_logger(__name__)


def default_translate(key: str) -> str:
    return MESSAGES.get(key, key)


def playoff_match_id(round_number: int, match_number: int) -> str:
    return f"{PLAYOFF_MATCH_ID_PREFIX}_{round_number}_{match_number}"


def is_placeholder(team_id: Optional[str]) -> bool:
    return bool(team_id) and team_id.startswith(PLACEHOLDER_TEAM_PREFIX)


def placeholder_name(translate: Optional[Callable[[str], str]] = None) -> str:
    translate = translate or default_translate
    return f"TBD ({translate('tournament.pendingCompletion')})"


def has_placeholder(match: Match) -> bool:
    return any(is_placeholder(team_id) for team_id in match.team_ids)


def is_block_completed(block: LeagueBlock) -> bool:
    return all(match.is_completed for match in block.matches)


def select_qualifiers(blocks: List[LeagueBlock], teams: List[Team], advancing_teams: int) -> List[List[str]]:
    """
    Top ``advancing_teams`` team ids of every block, block order preserved.

    A block with matches still to play is not ranked: it sends
    ``advancing_teams`` placeholders (``tbd_0``, ``tbd_1``, ...) instead.
    """
    count = max(0, advancing_teams)
    qualifiers = []
    placeholders = 0
    for block in blocks:
        if is_block_completed(block):
            qualifiers.append(calculate_block_standings(block, teams)[:count])
        else:
            qualifiers.append([f"{PLACEHOLDER_TEAM_PREFIX}{placeholders + i}" for i in range(count)])
            placeholders += count
    return qualifiers


def seed_qualifiers(qualifiers: List[List[str]]) -> List[str]:
    """
    Order qualifiers rank-major: every block winner, then every runner-up, ...

    Block winners take the top seeds, so two teams from the same block only
    meet late in the bracket.
    """
    seeds = []
    depth = max((len(block) for block in qualifiers), default=0)
    for rank in range(depth):
        for block in qualifiers:
            if rank < len(block):
                seeds.append(block[rank])
    return seeds


def _find_match(matches: List[Match], round_number: int, match_number: int) -> Optional[Match]:
    for match in matches:
        if match.round == round_number and match.match_number == match_number and not match.is_third_place:
            return match
    return None


def _set_slot(match: Match, position: str, team_id: str):
    if position == "team1":
        match.team1_id = team_id
    else:
        match.team2_id = team_id


def build_playoff_matches(seeds: List[str], has_third_place_match: bool) -> List[Match]:
    """
    Create every bracket match for the seeded teams.

    Byes are propagated one level: a first-round match with a single team
    pushes that team into the round-2 match it feeds. A placeholder is never
    pushed forward.
    """
    placements = {
        (p.round, p.match_number, p.position): p.team_id
        for p in calculate_team_placements(seeds)
    }

    matches = []
    for round_number, match_number in generate_bracket_structure(len(seeds)):
        feeders = []
        if round_number > 1:
            feeders = [
                playoff_match_id(round_number - 1, 2 * match_number - 1),
                playoff_match_id(round_number - 1, 2 * match_number)
            ]
        matches.append(Match(
            id=playoff_match_id(round_number, match_number),
            team1_id=placements.get((round_number, match_number, "team1"), ""),
            team2_id=placements.get((round_number, match_number, "team2"), ""),
            round=round_number,
            match_number=match_number,
            status=MatchStatus.SCHEDULED,
            feeder_match_ids=feeders
        ))

    for match in matches:
        if not match.is_bye or has_placeholder(match):
            continue
        next_round, next_number, position = next_match_info(match.round, match.match_number)
        next_match = _find_match(matches, next_round, next_number)
        if next_match:
            _set_slot(next_match, position, match.team1_id or match.team2_id)

    max_round = max(match.round for match in matches)
    semifinals = [match for match in matches if match.round == max_round - 1]
    if has_third_place_match and len(seeds) >= 4 and len(semifinals) >= 2:
        matches.append(Match(
            id=THIRD_PLACE_MATCH_ID,
            round=max_round,
            match_number=THIRD_PLACE_MATCH_NUMBER,
            status=MatchStatus.SCHEDULED,
            feeder_match_ids=[match.id for match in semifinals]
        ))
    return matches


def generate_playoff_tournament(
    blocks: List[LeagueBlock],
    teams: List[Team],
    advancing_teams: int,
    has_third_place_match: bool,
    translate: Optional[Callable[[str], str]] = None
) -> PlayoffGenerationResult:
    """
    Generate the playoff bracket for a league.

    Never raises: failures are reported through the result. Unfinished
    blocks enter placeholders; at least one block must be finished.

    Args:
        blocks: Group-stage blocks with their matches
        teams: All teams of the sport
        advancing_teams: Teams taken from the top of each block
        has_third_place_match: Whether to add a third-place match
        translate: Message lookup, keyed like the front-end catalogue

    Returns:
        PlayoffGenerationResult with the new playoff matches
    """
    translate = translate or default_translate
    try:
        qualifiers = select_qualifiers(blocks, teams, advancing_teams)
        entrants = [team_id for block in qualifiers for team_id in block]
        confirmed = [team_id for team_id in entrants if not is_placeholder(team_id)]
        if len(entrants) < 2 or not confirmed:
            logger.warning(
                f"Cannot build playoff: {len(confirmed)} confirmed of {len(entrants)} entrant(s)"
            )
            message = translate("tournament.needAtLeastTwoTeams")
            if len(confirmed) < len(entrants):
                message += " " + translate("tournament.allBlocksMustBeCompleted")
            return PlayoffGenerationResult(success=False, message=message, matches=[])

        matches = build_playoff_matches(seed_qualifiers(qualifiers), has_third_place_match)
        logger.info(
            f"Generated playoff with {len(entrants)} entrants "
            f"({len(entrants) - len(confirmed)} pending) and {len(matches)} matches"
        )
        return PlayoffGenerationResult(
            success=True, message=translate("tournament.success"), matches=matches
        )
    except Exception:
        logger.exception("Error generating playoff tournament")
        return PlayoffGenerationResult(
            success=False, message=translate("tournament.errorGenerating"), matches=[]
        )


def generate_league_playoff(
    blocks: List[LeagueBlock],
    teams: List[Team],
    settings: LeagueSettings,
    translate: Optional[Callable[[str], str]] = None
) -> PlayoffGenerationResult:
    """Generate the playoff the way the league is configured, or report that it has none."""
    translate = translate or default_translate
    if not settings.has_playoff:
        return PlayoffGenerationResult(success=False, message=translate("tournament.playoffDisabled"), matches=[])
    return generate_playoff_tournament(
        blocks, teams, settings.advancing_teams, settings.has_third_place_match, translate
    )


def update_playoff_matches(matches: List[Match]) -> List[Match]:
    """
    Advance a playoff after results change.

    Works on copies; the input matches are left untouched.

    1. Pending first-round byes are completed (1-0) and their team advanced.
    2. Winners of completed matches move into the slot they feed.
    3. Once both semifinals are decided, their losers fill the third-place match.

    Args:
        matches: Playoff matches (group-stage matches are ignored)

    Returns:
        Updated copies of all given matches, in input order
    """
    updated = [copy.deepcopy(match) for match in matches]
    bracket = [match for match in updated if not match.block_id]

    for match in bracket:
        if match.is_completed or not match.is_bye or has_placeholder(match):
            continue
        match.status = MatchStatus.COMPLETED
        match.team1_score = 1 if match.team1_id else 0
        match.team2_score = 1 if match.team2_id else 0
        match.winner_id = match.team1_id or match.team2_id

    for match in sorted(bracket, key=lambda m: (m.round, m.match_number)):
        if match.is_third_place or not match.is_completed or not match.winner_id:
            continue
        if has_placeholder(match):
            continue
        if not match.is_bye and len(match.team_ids) < 2:
            continue
        next_round, next_number, position = next_match_info(match.round, match.match_number)
        next_match = _find_match(bracket, next_round, next_number)
        if next_match:
            _set_slot(next_match, position, match.winner_id)

    third_place = next((match for match in bracket if match.is_third_place), None)
    if third_place is not None:
        max_round = max(match.round for match in bracket)
        semifinals = sorted(
            (m for m in bracket if m.round == max_round - 1 and not m.is_third_place),
            key=lambda m: m.match_number
        )
        losers = [m.loser_id for m in semifinals if m.is_completed and m.loser_id]
        if len(semifinals) >= 2 and len(losers) == len(semifinals):
            third_place.team1_id = third_place.team1_id or losers[0]
            third_place.team2_id = third_place.team2_id or losers[1]

    return updated

