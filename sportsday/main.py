"""
Main FastAPI application for the Sports Day competition engine.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sportsday import __version__
from sportsday.api import routes
from sportsday.core.config import CORS_ORIGINS, LOG_LEVEL
from sportsday.core.logging_config import setup_logging

setup_logging(LOG_LEVEL)

app = FastAPI(
    title="Sports Day Competition API",
    description="API for generating league blocks, playoff brackets and court timetables",
    version=__version__
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Sports Day Competition API",
        "version": __version__,
        "endpoints": {
            "blocks": "/api/blocks",
            "standings": "/api/standings",
            "playoff": "/api/playoff",
            "schedule": "/api/schedule",
            "health": "/api/health"
        }
    }
