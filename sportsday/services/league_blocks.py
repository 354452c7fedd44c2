"""
Block and seed generation for league competitions.

Teams are shuffled and dealt into blocks, and every block plays a full
round-robin. The same pairing generator serves plain round-robin sports.
"""

import random
import string
from dataclasses import replace
from typing import Iterable, List, Optional

from sportsday.core.logging_config import get_logger
from sportsday.models import LeagueBlock, Match, MatchStatus, Team

logger = get_logger(__name__)


def block_name(index: int) -> str:
    """Display name for the block at ``index``: Block A, Block B, ... Block AA."""
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = string.ascii_uppercase[remainder] + letters
    return f"Block {letters}"


def generate_round_robin_matches(
    team_ids: List[str],
    block_id: Optional[str] = None,
    existing: Iterable[Match] = ()
) -> List[Match]:
    """
    Generate one match for every unordered pair of teams.

    Args:
        team_ids: Ordered team ids; pair (i, j) with i < j becomes a match
        block_id: Block the matches belong to, if any
        existing: Matches already played or scheduled; their pairings are skipped
            and numbering continues after them

    Returns:
        New matches, numbered from 1 (or after the existing ones)
    """
    existing = list(existing)
    played = {frozenset(match.team_ids) for match in existing if len(match.team_ids) == 2}
    match_number = max((match.match_number for match in existing), default=0)
    prefix = f"match_{block_id}" if block_id else "match"

    matches = []
    for i in range(len(team_ids)):
        for j in range(i + 1, len(team_ids)):
            pairing = frozenset((team_ids[i], team_ids[j]))
            if pairing in played:
                continue
            match_number += 1
            matches.append(Match(
                id=f"{prefix}_{match_number}",
                team1_id=team_ids[i],
                team2_id=team_ids[j],
                round=1,
                match_number=match_number,
                status=MatchStatus.SCHEDULED,
                block_id=block_id
            ))
    return matches


def distribute_teams_to_blocks(
    teams: List[Team],
    block_count: int,
    rng: Optional[random.Random] = None
) -> List[LeagueBlock]:
    """
    Shuffle teams and deal them into blocks, each with its own round-robin.

    Dealing by ``index % block_count`` keeps block sizes within one of each other.

    Args:
        teams: Teams to distribute (left untouched)
        block_count: Number of blocks wanted
        rng: Random source, for reproducible draws

    Returns:
        List of blocks, empty when there are no teams or no blocks
    """
    if block_count <= 0 or not teams:
        return []

    rng = rng or random.Random()
    shuffled = list(teams)
    rng.shuffle(shuffled)

    blocks = [
        LeagueBlock(id=f"block_{index + 1}", name=block_name(index))
        for index in range(block_count)
    ]
    for index, team in enumerate(shuffled):
        blocks[index % block_count].team_ids.append(team.id)

    for block in blocks:
        block.matches = generate_round_robin_matches(block.team_ids, block.id)

    logger.info(
        f"Distributed {len(teams)} teams into {block_count} blocks "
        f"({sum(len(block.matches) for block in blocks)} group matches)"
    )
    return blocks


def assign_blocks(teams: List[Team], blocks: List[LeagueBlock]) -> List[Team]:
    """Return copies of ``teams`` with ``block_id`` set from block membership."""
    membership = {}
    for block in blocks:
        for team_id in block.team_ids:
            membership[team_id] = block.id
    return [replace(team, block_id=membership.get(team.id)) for team in teams]


def group_matches(blocks: List[LeagueBlock]) -> List[Match]:
    return [match for block in blocks for match in block.matches]
