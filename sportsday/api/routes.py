"""
API routes for block, playoff and schedule generation.
"""

import random
from datetime import datetime

from fastapi import APIRouter, HTTPException

from sportsday.api.schemas import (
    BlockSchema, BlocksRequest, BlocksResponse, MatchSchema,
    PlayoffRequest, PlayoffResponse, PlayoffUpdateRequest,
    ScheduleRequest, ScheduleResponse, StandingSchema, StandingsRequest,
    StandingsResponse, SwapRequest, TeamSchema, TimeSlotSchema,
    ValidateRequest, ValidationResponse, ViolationSchema
)
from sportsday.core.exceptions import InvalidSettingsError, SchedulingError
from sportsday.core.logging_config import get_logger
from sportsday.models import SlotType
from sportsday.services.court_scheduler import generate_schedule
from sportsday.services.league_blocks import assign_blocks, distribute_teams_to_blocks
from sportsday.services.playoff import generate_league_playoff, update_playoff_matches
from sportsday.services.schedule_editor import swap_slots
from sportsday.services.standings import calculate_standings
from sportsday.services.validator import ScheduleValidator

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["sportsday"])


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.post("/blocks", response_model=BlocksResponse)
async def create_blocks(request: BlocksRequest):
    """Shuffle teams into league blocks, each with its own round-robin."""
    teams = [team.to_model() for team in request.teams]
    rng = random.Random(request.seed) if request.seed is not None else None
    blocks = distribute_teams_to_blocks(teams, request.resolved_block_count(), rng=rng)
    return BlocksResponse(
        blocks=[BlockSchema.from_model(block) for block in blocks],
        teams=[TeamSchema.from_model(team) for team in assign_blocks(teams, blocks)]
    )


@router.post("/standings", response_model=StandingsResponse)
async def get_standings(request: StandingsRequest):
    """Standings table for a block or a round-robin competition."""
    settings = request.settings.to_model() if request.settings else None
    team_names = {team.id: team.name for team in request.teams}
    try:
        rows = calculate_standings(
            request.team_ids,
            [match.to_model() for match in request.matches],
            settings,
            team_names
        )
    except InvalidSettingsError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return StandingsResponse(
        ranking=[row.team_id for row in rows],
        standings=[StandingSchema.from_model(row) for row in rows]
    )


@router.post("/playoff", response_model=PlayoffResponse)
async def create_playoff(request: PlayoffRequest):
    """
    Generate the playoff bracket from the league blocks.

    Failures are reported in the body (``success: false``), not as HTTP errors.
    """
    result = generate_league_playoff(
        [block.to_model() for block in request.blocks],
        [team.to_model() for team in request.teams],
        request.resolved_settings()
    )
    return PlayoffResponse(
        success=result.success,
        message=result.message,
        matches=[MatchSchema.from_model(match) for match in result.matches]
    )


@router.post("/playoff/update", response_model=PlayoffResponse)
async def update_playoff(request: PlayoffUpdateRequest):
    """Complete byes, advance winners and fill the third-place match."""
    matches = update_playoff_matches([match.to_model() for match in request.matches])
    return PlayoffResponse(
        success=True,
        message="Playoff updated",
        matches=[MatchSchema.from_model(match) for match in matches]
    )


@router.post("/schedule", response_model=ScheduleResponse)
async def create_schedule(request: ScheduleRequest):
    """
    Generate the court timetable for a sport.

    Returns:
        All time slots (matches, lunch, breaks) sorted by start time
    """
    sport = request.sport.to_model()
    settings = request.settings.to_model()
    rng = random.Random(request.seed) if request.seed is not None else None

    try:
        slots = generate_schedule(sport, settings, shuffle=request.shuffle, rng=rng)
    except SchedulingError as e:
        logger.warning(f"Scheduling '{sport.name}' failed ({e.kind}): {e.message}")
        raise HTTPException(status_code=422, detail=e.message)
    except InvalidSettingsError as e:
        raise HTTPException(status_code=422, detail=str(e))

    total_matches = sum(1 for slot in slots if slot.type == SlotType.MATCH)
    return ScheduleResponse(
        success=True,
        message=f"Scheduled {total_matches} matches",
        total_matches=total_matches,
        time_slots=[TimeSlotSchema.from_model(slot) for slot in slots]
    )


@router.post("/schedule/swap", response_model=ScheduleResponse)
async def swap_schedule_slots(request: SwapRequest):
    """Exchange the content of two slots; time windows stay where they are."""
    try:
        slots = swap_slots([slot.to_model() for slot in request.time_slots], request.first, request.second)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))

    total_matches = sum(1 for slot in slots if slot.type == SlotType.MATCH)
    return ScheduleResponse(
        success=True,
        message="Slots swapped",
        total_matches=total_matches,
        time_slots=[TimeSlotSchema.from_model(slot) for slot in slots]
    )


@router.post("/schedule/validate", response_model=ValidationResponse)
async def validate_schedule(request: ValidateRequest):
    """Check a (manually edited) timetable against the hard constraints."""
    validator = ScheduleValidator()
    try:
        result = validator.validate_schedule(
            [slot.to_model() for slot in request.time_slots],
            [match.to_model() for match in request.matches],
            request.settings.to_model(),
            [team.to_model() for team in request.teams]
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ValidationResponse(
        is_valid=result.is_valid,
        hard_violations=[
            ViolationSchema(
                constraint_type=v.constraint_type,
                severity=v.severity,
                description=v.description,
                affected_teams=v.affected_teams,
                affected_matches=v.affected_matches
            )
            for v in result.hard_constraint_violations
        ],
        total_penalty_score=result.total_penalty_score
    )
