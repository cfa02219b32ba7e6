"""
Action System - The tagged union of session actions.

Each action carries only the fields it needs. All state changes flow through
these actions; anything else handed to the reducer is a programming error.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .state import SessionData, Theme


class ActionType(Enum):
    """Discriminant of each action, for logging and the API."""
    INIT = "init"
    READY = "ready"
    GUESS = "guess"
    SUCCESS = "success"
    THEME = "theme"


@dataclass(frozen=True)
class Init:
    """Begin reconciliation. Only meaningful while idle."""
    action_type = ActionType.INIT


@dataclass(frozen=True)
class Ready:
    """Merge reconciled data and mark the session loaded."""
    data: SessionData
    action_type = ActionType.READY


@dataclass(frozen=True)
class Guess:
    """Guess one letter."""
    value: str
    action_type = ActionType.GUESS


@dataclass(frozen=True)
class Success:
    """Close the window once the latest guess is the answer."""
    action_type = ActionType.SUCCESS


@dataclass(frozen=True)
class ChangeTheme:
    """Switch the presentation theme."""
    theme: Theme
    action_type = ActionType.THEME


Action = Union[Init, Ready, Guess, Success, ChangeTheme]
