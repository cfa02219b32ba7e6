"""
Reducer - Applies actions to the session.

The reducer is the single point of state transition.
All state changes must go through transition().

Design principles:
- Pure function: (state, action) -> new_state
- A violated precondition is a no-op: the same state object comes back
- An unknown action is fatal (InvalidAction)
- History is appended on the winning guess, never on success
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..config import LETTERS
from ..errors import InvalidAction
from .action import Action, ChangeTheme, Guess, Init, Ready, Success
from .state import Session, SessionStatus

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to a session.

    Stateless - all state is in Session.
    The alphabet is the set of valid guesses.
    """
    alphabet: tuple[str, ...] = LETTERS

    def apply(self, state: Session, action: Action) -> Session:
        """
        Apply an action to the session.

        Returns the new session, or `state` itself when the action does not
        apply in the current state.
        """
        handler = self._get_handler(action)
        if handler is None:
            raise InvalidAction(action)
        return handler(state, action)

    def _get_handler(self, action: Action):
        """Get the handler function for an action."""
        handlers = {
            Init: self._handle_init,
            Ready: self._handle_ready,
            Guess: self._handle_guess,
            Success: self._handle_success,
            ChangeTheme: self._handle_theme,
        }
        return handlers.get(type(action))

    def _handle_init(self, state: Session, action: Init) -> Session:
        if state.status != SessionStatus.IDLE:
            return state
        return state._copy_with(status=SessionStatus.LOADING)

    def _handle_ready(self, state: Session, action: Ready) -> Session:
        if state.status != SessionStatus.LOADING:
            return state
        merged = action.data.merged_into(state)
        return merged._copy_with(status=SessionStatus.LOADED)

    def _handle_guess(self, state: Session, action: Guess) -> Session:
        """
        Handle a guess.

        Ignored unless the window is loaded and unsolved, the value is a
        letter of the alphabet, and it has not been guessed before.
        """
        value = action.value
        if state.status != SessionStatus.LOADED or state.is_solved:
            logger.debug("Ignoring guess %r: session is %s", value, state.status.value)
            return state
        if value not in self.alphabet:
            logger.debug("Ignoring guess %r: not in alphabet", value)
            return state
        if value in state.options:
            logger.debug("Ignoring guess %r: already guessed", value)
            return state

        attempts = state.attempts + 1
        history = state.history
        if value == state.answer:
            history = history + (attempts,)

        return state._copy_with(
            attempts=attempts,
            options=state.options + (value,),
            history=history,
        )

    def _handle_success(self, state: Session, action: Success) -> Session:
        if state.status != SessionStatus.LOADED or state.latest_guess != state.answer:
            return state
        return state._copy_with(status=SessionStatus.COMPLETE)

    def _handle_theme(self, state: Session, action: ChangeTheme) -> Session:
        if state.theme == action.theme:
            return state
        return state._copy_with(theme=action.theme)


_DEFAULT_REDUCER = Reducer()


def transition(state: Session, action: Action) -> Session:
    """
    Convenience function to apply an action with the default alphabet.
    """
    return _DEFAULT_REDUCER.apply(state, action)
