"""
Session Store - Owns the live session for the lifetime of the process.

LIFECYCLE:
1. Store is created holding an idle placeholder session
2. start() dispatches Init once (only while idle)
3. The loading observer runs reconciliation and dispatches Ready
4. Consumers dispatch Guess / ChangeTheme
5. The completion observer dispatches Success once the answer is guessed

ORDERING:
- Actions are processed strictly in dispatch order, one at a time
- A dispatch issued by an observer is queued behind the current action
- Observers run once per state change, never on reads

PERSISTENCE:
- Write-through after every dispatch once the session is loaded
- A state is committed only after it is written; a failed write leaves the
  previous state in place and propagates the storage error
- Nothing is written while idle or loading, so reconciliation always reads
  the record as the previous process left it
"""

from __future__ import annotations
from collections import deque
from typing import Callable
import logging
import random

from ..config import STORAGE_KEY
from ..engine_core.action import Action, Init, Ready, Success
from ..engine_core.clock import Clock, SystemClock
from ..engine_core.reducer import Reducer
from ..engine_core.state import Session, SessionStatus, create_idle_session
from .reconcile import Reconciliation, reconcile
from .record import dump_session
from .storage import Storage

logger = logging.getLogger(__name__)

Listener = Callable[[Session, Session], None]


class SessionStore:
    """
    The single owner of the session.

    Usage:
        store = SessionStore(FileStorage())
        store.start()
        store.dispatch(Guess("m"))
        store.state.attempts
    """

    def __init__(
        self,
        storage: Storage,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        prefers_dark: bool = False,
        key: str = STORAGE_KEY,
        reducer: Reducer | None = None,
    ):
        self.storage = storage
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.prefers_dark = prefers_dark
        self.key = key
        self.reducer = reducer or Reducer()

        self._state = create_idle_session(self.clock)
        self._listeners: list[Listener] = []
        self._queue: deque[Action] = deque()
        self._dispatching = False

        # Ephemeral UI flags, never persisted
        self.first_run = False
        self.last_reconciliation: Reconciliation | None = None

        self.subscribe(self._reconcile_on_loading)
        self.subscribe(self._complete_on_win)

    @property
    def state(self) -> Session:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(previous, current)` after every state change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> Session:
        """Begin loading. A no-op once the session has left idle."""
        if self._state.status == SessionStatus.IDLE:
            self.dispatch(Init())
        return self._state

    def dispatch(self, action: Action) -> Session:
        """
        Apply an action and everything it triggers.

        Returns the state after the queue has drained. When called from an
        observer, the action is queued and the current state is returned.
        """
        self._queue.append(action)
        if self._dispatching:
            return self._state

        self._dispatching = True
        try:
            while self._queue:
                self._process(self._queue.popleft())
        finally:
            self._dispatching = False
            self._queue.clear()
        return self._state

    def _process(self, action: Action) -> None:
        previous = self._state
        current = self.reducer.apply(previous, action)
        if current.is_ready:
            self.storage.set(self.key, dump_session(current))
        self._state = current
        logger.debug("Processed %s -> %s", action.action_type.value, current.status.value)

        if current is not previous:
            for listener in list(self._listeners):
                listener(previous, current)

    def _reconcile_on_loading(self, previous: Session, current: Session) -> None:
        if current.status != SessionStatus.LOADING or previous.status == SessionStatus.LOADING:
            return
        result = reconcile(
            self.storage,
            self.clock,
            self.rng,
            prefers_dark=self.prefers_dark,
            key=self.key,
        )
        self.last_reconciliation = result
        self.first_run = result.first_run
        self.dispatch(Ready(result.data))

    def _complete_on_win(self, previous: Session, current: Session) -> None:
        if current.status == SessionStatus.LOADED and current.latest_guess == current.answer:
            logger.info("Answer found in %d attempt(s)", current.attempts)
            self.dispatch(Success())
