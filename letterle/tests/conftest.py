"""
Pytest fixtures for Letterle tests.
"""

import pytest
import random
from datetime import datetime, timezone

from ..engine_core.clock import FixedClock, end_of_day
from ..engine_core.state import Session, SessionStatus, Theme
from ..session import MemoryStorage, SessionStore


NOW = datetime(2026, 10, 19, 10, 30, tzinfo=timezone.utc)


class SequenceRandom(random.Random):
    """A random source that hands out letters in a fixed order."""

    def __init__(self, letters: str):
        super().__init__(0)
        self._letters = list(letters)

    def choice(self, seq):
        return self._letters.pop(0)


@pytest.fixture
def clock() -> FixedClock:
    """A clock pinned to mid-morning."""
    return FixedClock(NOW)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def loaded_session(clock) -> Session:
    """A loaded window whose answer is 'm'."""
    return Session(
        status=SessionStatus.LOADED,
        answer="m",
        expires_at=end_of_day(clock.now()),
        attempts=0,
        options=(),
        history=(3, 5),
        theme=Theme.LIGHT,
    )


@pytest.fixture
def store(storage, clock) -> SessionStore:
    """A started store whose first answer is 'm'."""
    store = SessionStore(storage, clock=clock, rng=SequenceRandom("mqz"))
    store.start()
    return store
