"""
Engine Core - The session state machine and its derived views.

The engine:
1. Builds sessions from factories
2. Applies actions via the reducer
3. Answers day-window questions (clock)
4. Derives statistics, tile feedback and share text
"""

from .state import Session, SessionData, SessionStatus, Theme, create_session, create_idle_session, pick_answer
from .action import Action, ActionType, Init, Ready, Guess, Success, ChangeTheme
from .reducer import Reducer, transition
from .clock import Clock, SystemClock, FixedClock, end_of_day, is_same_day, time_until, format_countdown
from .stats import Feedback, Statistics, Tile, best, average, distribution, summarize, classify, board
from .share import share_text

__all__ = [
    "Session",
    "SessionData",
    "SessionStatus",
    "Theme",
    "create_session",
    "create_idle_session",
    "pick_answer",
    "Action",
    "ActionType",
    "Init",
    "Ready",
    "Guess",
    "Success",
    "ChangeTheme",
    "Reducer",
    "transition",
    "Clock",
    "SystemClock",
    "FixedClock",
    "end_of_day",
    "is_same_day",
    "time_until",
    "format_countdown",
    "Feedback",
    "Statistics",
    "Tile",
    "best",
    "average",
    "distribution",
    "summarize",
    "classify",
    "board",
    "share_text",
]
