"""
Data models for the competition engine.
"""

from .models import (
    SportType,
    MatchStatus,
    SlotType,
    Team,
    Match,
    LeagueBlock,
    BreakWindow,
    TimeSlot,
    ScheduleSettings,
    RoundRobinSettings,
    LeagueSettings,
    Sport,
    BracketPlacement,
    PlayoffGenerationResult,
    TeamStanding,
    SchedulingConstraint,
    ScheduleValidationResult
)

__all__ = [
    "SportType",
    "MatchStatus",
    "SlotType",
    "Team",
    "Match",
    "LeagueBlock",
    "BreakWindow",
    "TimeSlot",
    "ScheduleSettings",
    "RoundRobinSettings",
    "LeagueSettings",
    "Sport",
    "BracketPlacement",
    "PlayoffGenerationResult",
    "TeamStanding",
    "SchedulingConstraint",
    "ScheduleValidationResult"
]
