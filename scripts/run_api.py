"""
Run the FastAPI backend server.
"""

import os
import sys

import uvicorn

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sportsday.core.config import API_HOST, API_PORT


if __name__ == "__main__":
    print("=" * 60)
    print("Sports Day Competition API Server")
    print("=" * 60)
    print(f"Starting server on http://{API_HOST}:{API_PORT}")
    print(f"API Documentation: http://{API_HOST}:{API_PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "sportsday.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
        log_level="info"
    )
