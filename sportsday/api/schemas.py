"""
Request and response models for the HTTP API.

Field names are camelCase on the wire, matching the front end, and
snake_case in Python.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sportsday.core.config import (
    DEFAULT_START_TIME, DEFAULT_END_TIME,
    DEFAULT_MATCH_DURATION, DEFAULT_BREAK_DURATION, DEFAULT_COURT_NAMES
)
from sportsday.models import (
    BreakWindow, LeagueBlock, LeagueSettings, Match, MatchStatus,
    RoundRobinSettings, ScheduleSettings, SlotType, Sport, SportType,
    Team, TeamStanding, TimeSlot
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TeamSchema(CamelModel):
    id: str
    name: str
    class_id: Optional[str] = None
    block_id: Optional[str] = None

    def to_model(self) -> Team:
        return Team(id=self.id, name=self.name, class_id=self.class_id, block_id=self.block_id)

    @classmethod
    def from_model(cls, team: Team) -> "TeamSchema":
        return cls(id=team.id, name=team.name, class_id=team.class_id, block_id=team.block_id)


class MatchSchema(CamelModel):
    id: str
    team1_id: str = ""
    team2_id: str = ""
    team1_score: int = 0
    team2_score: int = 0
    round: int = 1
    match_number: int = 1
    status: MatchStatus = MatchStatus.SCHEDULED
    block_id: Optional[str] = None
    winner_id: Optional[str] = None
    feeder_match_ids: List[str] = Field(default_factory=list)

    def to_model(self) -> Match:
        return Match(
            id=self.id,
            team1_id=self.team1_id or "",
            team2_id=self.team2_id or "",
            team1_score=self.team1_score,
            team2_score=self.team2_score,
            round=self.round,
            match_number=self.match_number,
            status=self.status,
            block_id=self.block_id,
            winner_id=self.winner_id,
            feeder_match_ids=list(self.feeder_match_ids)
        )

    @classmethod
    def from_model(cls, match: Match) -> "MatchSchema":
        return cls(
            id=match.id,
            team1_id=match.team1_id,
            team2_id=match.team2_id,
            team1_score=match.team1_score,
            team2_score=match.team2_score,
            round=match.round,
            match_number=match.match_number,
            status=match.status,
            block_id=match.block_id,
            winner_id=match.winner_id,
            feeder_match_ids=list(match.feeder_match_ids)
        )


class BlockSchema(CamelModel):
    id: str
    name: str
    team_ids: List[str] = Field(default_factory=list)
    matches: List[MatchSchema] = Field(default_factory=list)

    def to_model(self) -> LeagueBlock:
        return LeagueBlock(
            id=self.id, name=self.name, team_ids=list(self.team_ids),
            matches=[match.to_model() for match in self.matches]
        )

    @classmethod
    def from_model(cls, block: LeagueBlock) -> "BlockSchema":
        return cls(
            id=block.id, name=block.name, team_ids=list(block.team_ids),
            matches=[MatchSchema.from_model(match) for match in block.matches]
        )


class BreakWindowSchema(CamelModel):
    start_time: str
    end_time: str
    title: str = ""

    def to_model(self) -> BreakWindow:
        return BreakWindow(start_time=self.start_time, end_time=self.end_time, title=self.title)


class TimeSlotSchema(CamelModel):
    start_time: str
    end_time: str
    type: SlotType
    court_id: Optional[str] = None
    match_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None

    def to_model(self) -> TimeSlot:
        return TimeSlot(
            start_time=self.start_time, end_time=self.end_time, type=self.type,
            court_id=self.court_id, match_id=self.match_id,
            title=self.title, description=self.description
        )

    @classmethod
    def from_model(cls, slot: TimeSlot) -> "TimeSlotSchema":
        return cls(
            start_time=slot.start_time, end_time=slot.end_time, type=slot.type,
            court_id=slot.court_id, match_id=slot.match_id,
            title=slot.title, description=slot.description
        )


class ScheduleSettingsSchema(CamelModel):
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    match_duration: int = DEFAULT_MATCH_DURATION
    break_duration: int = DEFAULT_BREAK_DURATION
    court_count: int = 1
    court_names: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COURT_NAMES))
    lunch_break: Optional[BreakWindowSchema] = None
    break_times: List[BreakWindowSchema] = Field(default_factory=list)
    time_slots: List[TimeSlotSchema] = Field(default_factory=list)
    team_classes: Dict[str, str] = Field(default_factory=dict)
    break_between_stages: int = 0

    def to_model(self) -> ScheduleSettings:
        return ScheduleSettings(
            start_time=self.start_time,
            end_time=self.end_time,
            match_duration=self.match_duration,
            break_duration=self.break_duration,
            court_count=self.court_count,
            court_names=dict(self.court_names),
            lunch_break=self.lunch_break.to_model() if self.lunch_break else None,
            break_times=[window.to_model() for window in self.break_times],
            time_slots=[slot.to_model() for slot in self.time_slots],
            team_classes=dict(self.team_classes),
            break_between_stages=self.break_between_stages
        )


class RoundRobinSettingsSchema(CamelModel):
    win_points: int = 3
    draw_points: int = 1
    lose_points: int = 0
    consider_lose_points: bool = False
    ranking_method: str = "points"

    def to_model(self) -> RoundRobinSettings:
        return RoundRobinSettings(**self.model_dump())


class LeagueSettingsSchema(CamelModel):
    block_count: int = 2
    advancing_teams: int = 2
    has_playoff: bool = True
    has_third_place_match: bool = False

    def to_model(self) -> LeagueSettings:
        return LeagueSettings(**self.model_dump())


class SportSchema(CamelModel):
    id: str
    name: str
    type: SportType
    teams: List[TeamSchema] = Field(default_factory=list)
    matches: List[MatchSchema] = Field(default_factory=list)
    league_settings: LeagueSettingsSchema = Field(default_factory=LeagueSettingsSchema)

    def to_model(self) -> Sport:
        return Sport(
            id=self.id,
            name=self.name,
            type=self.type,
            teams=[team.to_model() for team in self.teams],
            matches=[match.to_model() for match in self.matches],
            league_settings=self.league_settings.to_model()
        )


# Requests

class BlocksRequest(CamelModel):
    teams: List[TeamSchema]
    block_count: Optional[int] = None  # falls back to league_settings.block_count
    league_settings: LeagueSettingsSchema = Field(default_factory=LeagueSettingsSchema)
    seed: Optional[int] = None

    def resolved_block_count(self) -> int:
        return self.league_settings.block_count if self.block_count is None else self.block_count


class StandingsRequest(CamelModel):
    team_ids: List[str]
    matches: List[MatchSchema]
    teams: List[TeamSchema] = Field(default_factory=list)
    settings: Optional[RoundRobinSettingsSchema] = None


class PlayoffRequest(CamelModel):
    blocks: List[BlockSchema]
    teams: List[TeamSchema] = Field(default_factory=list)
    league_settings: LeagueSettingsSchema = Field(default_factory=LeagueSettingsSchema)
    # Explicit values win over league_settings
    advancing_teams: Optional[int] = None
    has_third_place_match: Optional[bool] = None

    def resolved_settings(self) -> LeagueSettings:
        settings = self.league_settings.to_model()
        if self.advancing_teams is not None:
            settings.advancing_teams = self.advancing_teams
        if self.has_third_place_match is not None:
            settings.has_third_place_match = self.has_third_place_match
        return settings


class PlayoffUpdateRequest(CamelModel):
    matches: List[MatchSchema]


class ScheduleRequest(CamelModel):
    sport: SportSchema
    settings: ScheduleSettingsSchema = Field(default_factory=ScheduleSettingsSchema)
    shuffle: bool = True
    seed: Optional[int] = None


class SwapRequest(CamelModel):
    time_slots: List[TimeSlotSchema]
    first: int
    second: int


class ValidateRequest(CamelModel):
    time_slots: List[TimeSlotSchema]
    matches: List[MatchSchema]
    teams: List[TeamSchema] = Field(default_factory=list)
    settings: ScheduleSettingsSchema = Field(default_factory=ScheduleSettingsSchema)


# Responses

class BlocksResponse(CamelModel):
    blocks: List[BlockSchema]
    teams: List[TeamSchema]


class StandingSchema(CamelModel):
    team_id: str
    team_name: str
    played: int
    won: int
    drawn: int
    lost: int
    goals_for: int
    goals_against: int
    goal_difference: int
    points: int
    rank: int

    @classmethod
    def from_model(cls, standing: TeamStanding) -> "StandingSchema":
        return cls(
            team_id=standing.team_id,
            team_name=standing.team_name,
            played=standing.played,
            won=standing.won,
            drawn=standing.drawn,
            lost=standing.lost,
            goals_for=standing.goals_for,
            goals_against=standing.goals_against,
            goal_difference=standing.goal_difference,
            points=standing.points,
            rank=standing.rank
        )


class StandingsResponse(CamelModel):
    ranking: List[str]
    standings: List[StandingSchema]


class PlayoffResponse(CamelModel):
    success: bool
    message: str
    matches: List[MatchSchema]


class ScheduleResponse(CamelModel):
    success: bool
    message: str
    total_matches: int
    time_slots: List[TimeSlotSchema]


class ViolationSchema(CamelModel):
    constraint_type: str
    severity: str
    description: str
    affected_teams: List[str] = Field(default_factory=list)
    affected_matches: List[str] = Field(default_factory=list)


class ValidationResponse(CamelModel):
    is_valid: bool
    hard_violations: List[ViolationSchema]
    total_penalty_score: float
