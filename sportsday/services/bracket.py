"""
Single-elimination bracket structure and seeding.

The bracket is always sized to the next power of two. Seeds are placed in the
standard order (1 v N, 2 v N-1, ...) with seeds 1 and 2 in opposite halves,
so the empty slots left over by a short field become byes for the top seeds.
"""

import math
from typing import List, Tuple

from sportsday.models import BracketPlacement


def calculate_total_rounds(team_count: int) -> int:
    if team_count < 2:
        raise ValueError(f"A bracket needs at least two teams, got {team_count}")
    return math.ceil(math.log2(team_count))


def bracket_size(team_count: int) -> int:
    return 2 ** calculate_total_rounds(team_count)


def seed_order(size: int) -> List[int]:
    """
    Seed number for every bracket slot, top to bottom.

    Built by repeatedly pairing each seed ``s`` with ``2 * len + 1 - s``:
    size 8 gives [1, 8, 4, 5, 2, 7, 3, 6].
    """
    if size < 1 or size & (size - 1):
        raise ValueError(f"Bracket size must be a power of two, got {size}")

    order = [1]
    while len(order) < size:
        total = 2 * len(order) + 1
        order = [seed for s in order for seed in (s, total - s)]
    return order


def generate_bracket_structure(team_count: int) -> List[Tuple[int, int]]:
    """
    All (round, match_number) pairs of the bracket, round by round.

    Round 1 always holds ``bracket_size / 2`` matches; matches without an
    opponent are byes. The third-place match is not part of the structure.
    """
    total_rounds = calculate_total_rounds(team_count)
    structure = []
    for round_number in range(1, total_rounds + 1):
        matches_in_round = 2 ** (total_rounds - round_number)
        for match_number in range(1, matches_in_round + 1):
            structure.append((round_number, match_number))
    return structure


def next_match_info(round_number: int, match_number: int) -> Tuple[int, int, str]:
    """Round, match number and slot ("team1"/"team2") the winner advances to."""
    position = "team1" if match_number % 2 == 1 else "team2"
    return round_number + 1, math.ceil(match_number / 2), position


def calculate_team_placements(team_ids: List[str]) -> List[BracketPlacement]:
    """
    Place seeded teams into first-round slots.

    Args:
        team_ids: Team ids in seed order, best seed first

    Returns:
        One placement per team; seeds beyond the field leave their slot empty
    """
    size = bracket_size(len(team_ids))
    placements = []
    for slot, seed in enumerate(seed_order(size)):
        if seed > len(team_ids):
            continue
        placements.append(BracketPlacement(
            round=1,
            match_number=slot // 2 + 1,
            position="team1" if slot % 2 == 0 else "team2",
            team_id=team_ids[seed - 1]
        ))
    return placements


def round_label(round_number: int, total_rounds: int) -> str:
    remaining = total_rounds - round_number
    if remaining == 0:
        return "Final"
    if remaining == 1:
        return "Semifinal"
    if remaining == 2:
        return "Quarterfinal"
    return f"Round {round_number}"
