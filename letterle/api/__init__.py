"""
API Module - HTTP interface to the local session.

Exposes the game via a REST API for a browser or mobile front end.
The front end:
1. Loads today's window
2. Submits guesses
3. Toggles the theme
4. Reads statistics and share text once the window is complete

All state is the one local session. No user accounts.
"""

from .schemas import (
    # Requests
    GuessRequest,
    ThemeRequest,
    # Responses
    SessionResponse,
    GuessResponse,
    StatisticsResponse,
    ShareResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    TileInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "GuessRequest",
    "ThemeRequest",
    # Responses
    "SessionResponse",
    "GuessResponse",
    "StatisticsResponse",
    "ShareResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "TileInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
