"""
Reconciliation - Resolves the persisted record against the current day.

Runs once per load, while the session is loading:
1. No record (or a malformed one) -> brand new session, persisted
2. Record still within today       -> resume it verbatim
3. Record from an earlier day      -> new window, history carried forward

The result is the data to feed the reducer's Ready action.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import random

from ..config import STORAGE_KEY
from ..engine_core.clock import Clock, is_same_day
from ..engine_core.state import SessionData, Theme, create_session
from .record import dump_session, load_record
from .storage import Storage

logger = logging.getLogger(__name__)


class ReconcileOutcome(Enum):
    """What reconciliation decided."""
    FRESH = "fresh"  # No usable record, first run on this device
    RESUMED = "resumed"  # Today's window restored as left
    ROLLED_OVER = "rolled_over"  # New window, history kept


@dataclass(frozen=True)
class Reconciliation:
    """Result of reconciling against storage."""
    outcome: ReconcileOutcome
    data: SessionData

    @property
    def first_run(self) -> bool:
        return self.outcome == ReconcileOutcome.FRESH


def reconcile(
    storage: Storage,
    clock: Clock,
    rng: random.Random,
    prefers_dark: bool = False,
    key: str = STORAGE_KEY,
) -> Reconciliation:
    """
    Decide whether to resume, initialize or roll over the session.

    Args:
        storage: Persistence adapter holding the record
        clock: Source of "now"
        rng: Random source for a new answer
        prefers_dark: System theme preference, used only on first run
        key: Storage key of the record

    Returns:
        Reconciliation with the data to load. Fresh and rolled-over data
        has already been written to storage.
    """
    now = clock.now()
    record = load_record(storage.get(key))

    if record is None:
        theme = Theme.DARK if prefers_dark else Theme.LIGHT
        fresh = create_session(clock, rng, theme=theme)
        storage.set(key, dump_session(fresh))
        logger.info("No session record, starting a new one (expires %s)", fresh.expires_at.isoformat())
        return Reconciliation(outcome=ReconcileOutcome.FRESH, data=fresh.to_data())

    if is_same_day(record.expires, now):
        logger.info("Resuming today's session after %d attempt(s)", record.attempts)
        return Reconciliation(outcome=ReconcileOutcome.RESUMED, data=record.to_data())

    rolled = create_session(clock, rng, theme=record.theme, history=tuple(record.history))
    storage.set(key, dump_session(rolled))
    logger.info(
        "Session from %s expired, starting a new window with %d completed",
        record.expires.date().isoformat(),
        len(rolled.history),
    )
    return Reconciliation(outcome=ReconcileOutcome.ROLLED_OVER, data=rolled.to_data())
