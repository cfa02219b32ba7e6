"""Shared error types."""

from __future__ import annotations


class LetterleError(Exception):
    """Base class for letterle errors."""


class InvalidAction(LetterleError):
    """
    Raised when the reducer receives something that is not a known action.

    This is a programming defect, not a game condition: invalid guesses are
    ignored by the reducer instead.
    """

    def __init__(self, action: object):
        self.action = action
        super().__init__(f"Action type {type(action).__name__} not recognised")


class WindowNotComplete(LetterleError):
    """Raised when results are requested before today's answer is found."""


__all__ = ["LetterleError", "InvalidAction", "WindowNotComplete"]
