"""
Statistics & Feedback - Pure functions over history, options and answer.

Nothing here owns state; everything is recomputed from the session on
demand.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence
import math

from ..config import LETTERS, RANGE_THRESHOLD
from .state import Session, SessionStatus


class Feedback(Enum):
    """How a letter relates to the answer."""
    UNGUESSED = "unguessed"
    FAR = "far"
    CLOSE = "close"
    CORRECT = "correct"


@dataclass(frozen=True)
class Statistics:
    """Results shown once a window is complete."""
    played: int
    today: int
    average: int | None
    best: int | None
    distribution: dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Tile:
    """One letter of the board, as rendered."""
    letter: str
    feedback: Feedback
    guessed: bool


def best(history: Sequence[int]) -> int | None:
    """Fewest attempts ever needed, or None before the first win."""
    if not history:
        return None
    return min(history)


def average(history: Sequence[int]) -> int | None:
    """Mean attempts, rounded half up, or None before the first win."""
    if not history:
        return None
    return math.floor(sum(history) / len(history) + 0.5)


def distribution(history: Iterable[int]) -> dict[int, int]:
    """Map each attempt count to how often it occurred."""
    return dict(Counter(history))


def summarize(session: Session) -> Statistics:
    return Statistics(
        played=len(session.history),
        today=session.attempts,
        average=average(session.history),
        best=best(session.history),
        distribution=distribution(session.history),
    )


def classify(
    value: str,
    answer: str,
    options: Sequence[str],
    range_threshold: int = RANGE_THRESHOLD,
    alphabet: Sequence[str] = LETTERS,
) -> Feedback:
    """
    Classify a letter against the answer.

    CORRECT is decided before anything else, even for an unguessed letter.
    CLOSE and FAR only apply to guessed letters; closeness is the distance
    between the two letters in alphabet order.
    """
    if value == answer:
        return Feedback.CORRECT
    if value not in options:
        return Feedback.UNGUESSED
    if value in alphabet and answer in alphabet:
        distance = abs(alphabet.index(value) - alphabet.index(answer))
        if distance <= range_threshold:
            return Feedback.CLOSE
    return Feedback.FAR


def board(session: Session, range_threshold: int = RANGE_THRESHOLD) -> list[Tile]:
    """
    Tiles in alphabet order.

    The answer tile stays hidden (UNGUESSED) until the window is complete.
    """
    revealed = session.status == SessionStatus.COMPLETE
    tiles = []
    for letter in LETTERS:
        feedback = classify(letter, session.answer, session.options, range_threshold)
        if feedback == Feedback.CORRECT and not revealed:
            feedback = Feedback.UNGUESSED
        tiles.append(Tile(letter=letter, feedback=feedback, guessed=letter in session.options))
    return tiles
