"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a front end and the game.
The answer is only ever exposed once the window is complete.

Error Codes:
- WINDOW_NOT_COMPLETE: Results requested before today's answer was found
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    COMPLETE = "complete"


class ThemeName(str, Enum):
    """Presentation themes."""
    LIGHT = "light"
    DARK = "dark"


class TileFeedback(str, Enum):
    """Feedback shown on a letter tile."""
    UNGUESSED = "unguessed"
    FAR = "far"
    CLOSE = "close"
    CORRECT = "correct"


class ErrorCode(str, Enum):
    """Structured error codes."""
    WINDOW_NOT_COMPLETE = "WINDOW_NOT_COMPLETE"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TileInfo(BaseModel):
    """One letter of the board."""
    letter: str
    feedback: TileFeedback
    guessed: bool = False


# =============================================================================
# Request Models
# =============================================================================

class GuessRequest(BaseModel):
    """Guess one letter. Input is lower-cased before it reaches the game."""
    value: str = Field(min_length=1, max_length=8, description="The guessed letter")


class ThemeRequest(BaseModel):
    """Set the theme. Omit `theme` to toggle."""
    theme: Optional[ThemeName] = None


# =============================================================================
# Response Models
# =============================================================================

class SessionResponse(BaseModel):
    """Snapshot of the current window."""
    status: SessionStatus
    attempts: int
    options: list[str] = Field(default_factory=list)
    theme: ThemeName
    expires_at: str = Field(description="ISO-8601 end of the current window")
    seconds_until_next: int = Field(description="Advisory countdown to the next window")
    countdown: str = Field(description="HH:MM:SS form of seconds_until_next")
    first_run: bool = False
    answer: Optional[str] = Field(None, description="Only set once the window is complete")
    tiles: list[TileInfo] = Field(default_factory=list)


class GuessResponse(BaseModel):
    """Outcome of a guess."""
    accepted: bool = Field(description="False when the guess was ignored")
    value: str
    feedback: Optional[TileFeedback] = None
    complete: bool = False
    session: SessionResponse


class StatisticsResponse(BaseModel):
    """Results across all completed windows."""
    played: int
    today: int
    average: Optional[int] = None
    best: Optional[int] = None
    distribution: dict[int, int] = Field(default_factory=dict)


class ShareResponse(BaseModel):
    """Copyable share text."""
    text: str


class HealthResponse(BaseModel):
    """Service health."""
    status: str = "ok"
    version: str
    env: str


class ErrorResponse(BaseModel):
    """Structured error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
