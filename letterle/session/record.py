"""
Persisted Record - Serialization of the session for storage.

The record mirrors the full session except ephemeral UI flags. Anything that
fails to parse or breaks a session invariant is malformed, and callers treat
a malformed record exactly like a missing one.
"""

from __future__ import annotations
from datetime import MAXYEAR, MINYEAR, datetime
import logging

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from ..config import LETTERS
from ..engine_core.state import Session, SessionData, SessionStatus, Theme

logger = logging.getLogger(__name__)


class SessionRecord(BaseModel):
    """Stored shape of a session."""
    status: SessionStatus = SessionStatus.LOADED
    answer: str
    expires: datetime
    attempts: int = 0
    options: list[str] = []
    history: list[int] = []
    theme: Theme = Theme.LIGHT

    @field_validator("answer")
    @classmethod
    def _answer_in_alphabet(cls, value: str) -> str:
        if value not in LETTERS:
            raise ValueError(f"answer {value!r} is not a letter of the alphabet")
        return value

    @field_validator("options")
    @classmethod
    def _options_unique_letters(cls, value: list[str]) -> list[str]:
        unknown = [v for v in value if v not in LETTERS]
        if unknown:
            raise ValueError(f"options outside the alphabet: {unknown}")
        if len(set(value)) != len(value):
            raise ValueError("options contain duplicates")
        return value

    @field_validator("expires")
    @classmethod
    def _expires_in_range(cls, value: datetime) -> datetime:
        # Shifting by a UTC offset must stay representable
        if value.year in (MINYEAR, MAXYEAR):
            raise ValueError(f"expires {value.isoformat()} is out of range")
        return value

    @field_validator("history")
    @classmethod
    def _history_positive(cls, value: list[int]) -> list[int]:
        if any(v < 1 for v in value):
            raise ValueError("history entries must be positive")
        return value

    @model_validator(mode="after")
    def _options_consistent(self) -> SessionRecord:
        if self.attempts != len(self.options):
            raise ValueError(
                f"attempts ({self.attempts}) does not match options ({len(self.options)})"
            )
        if self.answer in self.options and self.options[-1] != self.answer:
            raise ValueError("options continue past the answer")
        return self

    @classmethod
    def from_session(cls, session: Session) -> SessionRecord:
        return cls(
            status=session.status,
            answer=session.answer,
            expires=session.expires_at,
            attempts=session.attempts,
            options=list(session.options),
            history=list(session.history),
            theme=session.theme,
        )

    def to_data(self) -> SessionData:
        return SessionData(
            answer=self.answer,
            expires_at=self.expires,
            attempts=self.attempts,
            options=tuple(self.options),
            history=tuple(self.history),
            theme=self.theme,
        )


def dump_session(session: Session) -> str:
    """Serialize a session to its stored JSON form."""
    return SessionRecord.from_session(session).model_dump_json()


def load_record(raw: str | None) -> SessionRecord | None:
    """
    Parse a stored record.

    Returns None for a missing or malformed record; never raises.
    """
    if raw is None:
        return None
    try:
        return SessionRecord.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Discarding malformed session record: %s", e.errors(include_url=False))
        return None
