"""
Configuration constants for the Sports Day competition engine.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Day Window Defaults
DEFAULT_START_TIME = os.getenv("SPORTSDAY_START_TIME", "09:00")
DEFAULT_END_TIME = os.getenv("SPORTSDAY_END_TIME", "17:00")
DEFAULT_MATCH_DURATION = int(os.getenv("SPORTSDAY_MATCH_DURATION", "20"))  # minutes
DEFAULT_BREAK_DURATION = int(os.getenv("SPORTSDAY_BREAK_DURATION", "5"))   # minutes

# Courts
COURT_IDS = ("court1", "court2")
MAX_COURTS = len(COURT_IDS)
DEFAULT_COURT_NAMES = {
    "court1": os.getenv("SPORTSDAY_COURT1_NAME", "Court 1"),
    "court2": os.getenv("SPORTSDAY_COURT2_NAME", "Court 2"),
}

# Scheduler Tuning
DEADLOCK_STEP_MINUTES = 5       # Clock advance when no match fits a time slot
MAX_BREAK_ADJUSTMENTS = 100     # Upper bound on lunch/break clock pushes per slot

# League Points (group stage standings are always 3/1/0)
LEAGUE_WIN_POINTS = 3
LEAGUE_DRAW_POINTS = 1
LEAGUE_LOSE_POINTS = 0

# Ranking methods understood by the standings calculator
RANKING_METHODS = ["points", "goalDifference", "goals"]

# Bracket conventions
THIRD_PLACE_MATCH_NUMBER = 0
THIRD_PLACE_MARKER = "third_place"
THIRD_PLACE_MATCH_ID = "playoff_third_place_match"
PLAYOFF_MATCH_ID_PREFIX = "playoff_match"
PLACEHOLDER_TEAM_PREFIX = "tbd_"  # Stands in for a qualifier of an unfinished block

# User-facing messages, keyed the same way the front-end translation files are
MESSAGES = {
    "tournament.success": "Playoff tournament generated",
    "tournament.needAtLeastTwoTeams": "At least two teams must qualify to build a playoff.",
    "tournament.errorGenerating": "An error occurred while generating the playoff tournament.",
    "tournament.allBlocksMustBeCompleted": "At least one block must have finished all of its matches.",
    "tournament.pendingCompletion": "pending completion",
    "tournament.playoffDisabled": "This league has no playoff.",
    "schedule.noMatches": "No matches found for scheduling",
    "schedule.breaksTooDense": "Breaks are too dense to place a match",
    "schedule.windowTooShort": "Cannot fit all matches in the time window",
}

# API
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SPORTSDAY_CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
API_HOST = os.getenv("SPORTSDAY_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("SPORTSDAY_API_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("SPORTSDAY_LOG_LEVEL", "INFO")
