"""
API Service - Business logic layer between the API and the session store.

The service:
1. Owns the one SessionStore of this process
2. Translates requests into dispatched actions
3. Formats snapshots, statistics and share text for the client

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import threading

from ..config import Settings, normalize_guess
from ..engine_core.action import ChangeTheme, Guess
from ..engine_core.clock import format_countdown, time_until
from ..engine_core.share import share_text
from ..engine_core.state import Session, SessionStatus, Theme
from ..engine_core.stats import board, classify, summarize
from ..errors import WindowNotComplete
from ..session import FileStorage, SessionStore
from .schemas import (
    GuessResponse,
    SessionResponse,
    ShareResponse,
    StatisticsResponse,
    ThemeName,
    TileFeedback,
    TileInfo,
)
from .schemas import SessionStatus as SessionStatusInfo


def default_store_factory() -> SessionStore:
    settings = Settings.from_env()
    return SessionStore(
        FileStorage(settings.data_dir),
        prefers_dark=settings.prefers_dark,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(store_factory=lambda: SessionStore(MemoryStorage()))

        service.get_session()
        service.guess("m")
        service.get_share()
    """
    store_factory: Callable[[], SessionStore] = field(default=default_store_factory)

    _store: SessionStore | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def store(self) -> SessionStore:
        """The live store, created and reconciled on first use."""
        if self._store is None:
            store = self.store_factory()
            store.start()
            self._store = store
        return self._store

    def get_session(self) -> SessionResponse:
        with self._lock:
            return self._session_to_response(self.store.state)

    def refresh(self) -> SessionResponse:
        """
        Reload the session as a new page load would.

        This is the only point where a day rollover is noticed.
        """
        with self._lock:
            self._store = None
            return self._session_to_response(self.store.state)

    def guess(self, raw_value: str) -> GuessResponse:
        value = normalize_guess(raw_value)
        with self._lock:
            before = self.store.state
            after = self.store.dispatch(Guess(value))
            accepted = after.attempts > before.attempts

            feedback = None
            if accepted:
                result = classify(value, after.answer, after.options)
                feedback = TileFeedback(result.value)

            return GuessResponse(
                accepted=accepted,
                value=value,
                feedback=feedback,
                complete=after.status == SessionStatus.COMPLETE,
                session=self._session_to_response(after),
            )

    def set_theme(self, theme: ThemeName | None = None) -> SessionResponse:
        """Set the theme, or toggle it when none is given."""
        with self._lock:
            current = self.store.state.theme
            target = Theme(theme.value) if theme is not None else current.toggled()
            state = self.store.dispatch(ChangeTheme(target))
            return self._session_to_response(state)

    def get_statistics(self) -> StatisticsResponse:
        with self._lock:
            stats = summarize(self.store.state)
        return StatisticsResponse(
            played=stats.played,
            today=stats.today,
            average=stats.average,
            best=stats.best,
            distribution=stats.distribution,
        )

    def get_share(self) -> ShareResponse:
        """Share text for today. Only available once the answer is found."""
        with self._lock:
            state = self.store.state
        if state.status != SessionStatus.COMPLETE:
            raise WindowNotComplete("Find today's letter before sharing")
        return ShareResponse(
            text=share_text(state.options, state.answer, state.history, state.attempts, state.theme)
        )

    def _session_to_response(self, state: Session) -> SessionResponse:
        """Convert a session to the API response."""
        remaining = time_until(state.expires_at, self.store.clock.now())
        complete = state.status == SessionStatus.COMPLETE
        return SessionResponse(
            status=SessionStatusInfo(state.status.value),
            attempts=state.attempts,
            options=list(state.options),
            theme=ThemeName(state.theme.value),
            expires_at=state.expires_at.isoformat(),
            seconds_until_next=int(remaining.total_seconds()),
            countdown=format_countdown(remaining),
            first_run=self.store.first_run,
            answer=state.answer if complete else None,
            tiles=[
                TileInfo(letter=tile.letter, feedback=TileFeedback(tile.feedback.value), guessed=tile.guessed)
                for tile in board(state)
            ],
        )
