"""
Data models for the Sports Day competition engine.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict
from enum import Enum

from sportsday.core.config import (
    DEFAULT_START_TIME, DEFAULT_END_TIME,
    DEFAULT_MATCH_DURATION, DEFAULT_BREAK_DURATION,
    DEFAULT_COURT_NAMES, THIRD_PLACE_MATCH_NUMBER, THIRD_PLACE_MARKER
)


class SportType(Enum):
    TOURNAMENT = "tournament"
    ROUND_ROBIN = "roundRobin"
    LEAGUE = "league"
    RANKING = "ranking"


class MatchStatus(Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"


class SlotType(Enum):
    MATCH = "match"
    BREAK = "break"
    LUNCH = "lunch"
    PREPARATION = "preparation"
    CLEANUP = "cleanup"


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    class_id: Optional[str] = None  # Homeroom identity, e.g. "1-A"
    block_id: Optional[str] = None


@dataclass
class Match:
    id: str
    team1_id: str = ""
    team2_id: str = ""
    team1_score: int = 0
    team2_score: int = 0
    round: int = 1
    match_number: int = 1
    status: MatchStatus = MatchStatus.SCHEDULED
    block_id: Optional[str] = None  # Present for group-stage matches only
    winner_id: Optional[str] = None
    feeder_match_ids: List[str] = field(default_factory=list)

    def __str__(self):
        return f"{self.id} (R{self.round} #{self.match_number}): {self.team1_id or '-'} vs {self.team2_id or '-'}"

    @property
    def team_ids(self) -> List[str]:
        return [team_id for team_id in (self.team1_id, self.team2_id) if team_id]

    @property
    def is_third_place(self) -> bool:
        return self.match_number == THIRD_PLACE_MATCH_NUMBER or THIRD_PLACE_MARKER in self.id

    @property
    def is_bye(self) -> bool:
        """A first-round match with exactly one team; it is advanced, never played."""
        if self.is_third_place or self.round != 1:
            return False
        return bool(self.team1_id) != bool(self.team2_id)

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    @property
    def loser_id(self) -> Optional[str]:
        if not self.winner_id or not self.team1_id or not self.team2_id:
            return None
        return self.team2_id if self.winner_id == self.team1_id else self.team1_id

    def record_result(self, team1_score: int, team2_score: int):
        """Store a final score; a draw leaves the match without a winner."""
        self.team1_score = team1_score
        self.team2_score = team2_score
        self.status = MatchStatus.COMPLETED
        if team1_score > team2_score:
            self.winner_id = self.team1_id or None
        elif team2_score > team1_score:
            self.winner_id = self.team2_id or None
        else:
            self.winner_id = None


@dataclass
class LeagueBlock:
    id: str
    name: str
    team_ids: List[str] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)


@dataclass
class BreakWindow:
    start_time: str
    end_time: str
    title: str = ""


@dataclass
class TimeSlot:
    start_time: str
    end_time: str
    type: SlotType
    court_id: Optional[str] = None
    match_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None

    def __str__(self):
        label = self.match_id or self.title or self.type.value
        court = f" [{self.court_id}]" if self.court_id else ""
        return f"{self.start_time}-{self.end_time}{court} {label}"


@dataclass
class ScheduleSettings:
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    match_duration: int = DEFAULT_MATCH_DURATION
    break_duration: int = DEFAULT_BREAK_DURATION
    court_count: int = 1
    court_names: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COURT_NAMES))
    lunch_break: Optional[BreakWindow] = None
    break_times: List[BreakWindow] = field(default_factory=list)
    time_slots: List[TimeSlot] = field(default_factory=list)
    team_classes: Dict[str, str] = field(default_factory=dict)  # team id -> class override
    break_between_stages: int = 0  # League only: minutes between group stage and playoff

    def court_name(self, court_id: str) -> str:
        return self.court_names.get(court_id) or DEFAULT_COURT_NAMES.get(court_id, court_id)


@dataclass
class RoundRobinSettings:
    win_points: int = 3
    draw_points: int = 1
    lose_points: int = 0
    consider_lose_points: bool = False
    ranking_method: str = "points"


@dataclass
class LeagueSettings:
    block_count: int = 2
    advancing_teams: int = 2
    has_playoff: bool = True
    has_third_place_match: bool = False


@dataclass
class Sport:
    id: str
    name: str
    type: SportType
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    league_settings: LeagueSettings = field(default_factory=LeagueSettings)
    schedule_settings: Optional[ScheduleSettings] = None


@dataclass
class BracketPlacement:
    round: int
    match_number: int
    position: str  # "team1" or "team2"
    team_id: str


@dataclass
class PlayoffGenerationResult:
    success: bool
    message: str
    matches: List[Match] = field(default_factory=list)


@dataclass
class TeamStanding:
    team_id: str
    team_name: str = ""
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    rank: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


@dataclass
class SchedulingConstraint:
    constraint_type: str
    severity: str
    description: str
    affected_teams: List[str] = field(default_factory=list)
    affected_matches: List[str] = field(default_factory=list)
    penalty_score: float = 0.0


@dataclass
class ScheduleValidationResult:
    is_valid: bool
    hard_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    soft_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    total_penalty_score: float = 0.0

    def add_violation(self, constraint: SchedulingConstraint):
        if constraint.severity == 'hard':
            self.hard_constraint_violations.append(constraint)
            self.is_valid = False
        else:
            self.soft_constraint_violations.append(constraint)
        self.total_penalty_score += constraint.penalty_score

    def violation_types(self) -> List[str]:
        return [v.constraint_type for v in self.hard_constraint_violations + self.soft_constraint_violations]

    def get_summary(self) -> str:
        summary = f"Schedule Valid: {self.is_valid}\n"
        summary += f"Hard Violations: {len(self.hard_constraint_violations)}\n"
        summary += f"Soft Violations: {len(self.soft_constraint_violations)}\n"
        summary += f"Total Penalty Score: {self.total_penalty_score:.2f}\n"
        return summary
