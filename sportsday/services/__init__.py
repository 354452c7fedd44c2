"""
Competition services: blocks, standings, playoffs and court scheduling.
"""

from .league_blocks import distribute_teams_to_blocks, generate_round_robin_matches, assign_blocks
from .standings import calculate_standings, calculate_block_standings
from .playoff import generate_playoff_tournament, update_playoff_matches
from .court_scheduler import CourtScheduler, generate_schedule
from .schedule_editor import swap_slots, move_slot_up, move_slot_down
from .validator import ScheduleValidator

__all__ = [
    "distribute_teams_to_blocks",
    "generate_round_robin_matches",
    "assign_blocks",
    "calculate_standings",
    "calculate_block_standings",
    "generate_playoff_tournament",
    "update_playoff_matches",
    "CourtScheduler",
    "generate_schedule",
    "swap_slots",
    "move_slot_up",
    "move_slot_down",
    "ScheduleValidator"
]
