"""
Session State - The single stateful entity of the game.

Design principles:
- Immutable: every transition returns a new Session
- Built by factories, never at import time (fresh randomness per session)
- History carries across windows, everything else belongs to one window
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
import random

from ..config import LETTERS
from .clock import Clock, end_of_day


class SessionStatus(Enum):
    """Lifecycle stage of a session."""
    IDLE = "idle"  # Created, not yet reconciled
    LOADING = "loading"  # Reconciliation in progress
    LOADED = "loaded"  # Window in progress
    COMPLETE = "complete"  # Answer found for this window


class Theme(Enum):
    """Presentation preference. Persisted but inert to game logic."""
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


@dataclass(frozen=True)
class Session:
    """
    Complete game state at a point in time.

    Only the reducer produces new sessions; consumers read fields and
    dispatch actions.
    """
    status: SessionStatus
    answer: str
    expires_at: datetime
    attempts: int = 0
    options: tuple[str, ...] = ()
    history: tuple[int, ...] = ()
    theme: Theme = Theme.LIGHT

    @property
    def latest_guess(self) -> str | None:
        return self.options[-1] if self.options else None

    @property
    def is_solved(self) -> bool:
        """The answer has been guessed in this window."""
        return self.answer in self.options

    @property
    def is_ready(self) -> bool:
        return self.status in {SessionStatus.LOADED, SessionStatus.COMPLETE}

    def _copy_with(self, **kwargs) -> Session:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def to_data(self) -> SessionData:
        """Mergeable payload carrying every window field."""
        return SessionData(
            answer=self.answer,
            expires_at=self.expires_at,
            attempts=self.attempts,
            options=self.options,
            history=self.history,
            theme=self.theme,
        )


@dataclass(frozen=True)
class SessionData:
    """
    Data merged into the session by a `Ready` action.

    Fields left as None keep the session's current value.
    """
    answer: str | None = None
    expires_at: datetime | None = None
    attempts: int | None = None
    options: tuple[str, ...] | None = None
    history: tuple[int, ...] | None = None
    theme: Theme | None = None

    def merged_into(self, session: Session) -> Session:
        updates = {
            name: value
            for name, value in (
                ("answer", self.answer),
                ("expires_at", self.expires_at),
                ("attempts", self.attempts),
                ("options", self.options),
                ("history", self.history),
                ("theme", self.theme),
            )
            if value is not None
        }
        return session._copy_with(**updates)


def pick_answer(rng: random.Random) -> str:
    """Uniformly choose one letter of the alphabet."""
    return rng.choice(LETTERS)


def create_session(
    clock: Clock,
    rng: random.Random,
    theme: Theme = Theme.LIGHT,
    history: tuple[int, ...] = (),
) -> Session:
    """
    Build the data of a brand new window.

    A fresh answer and an expiry at the end of today; history is carried in
    by the caller when a window rolls over.
    """
    return Session(
        status=SessionStatus.IDLE,
        answer=pick_answer(rng),
        expires_at=end_of_day(clock.now()),
        attempts=0,
        options=(),
        history=tuple(history),
        theme=theme,
    )


def create_idle_session(clock: Clock) -> Session:
    """
    The placeholder a store holds before reconciliation.

    It has no answer yet: the answer is only drawn once reconciliation
    decides a new window is needed.
    """
    return Session(status=SessionStatus.IDLE, answer="", expires_at=end_of_day(clock.now()))
