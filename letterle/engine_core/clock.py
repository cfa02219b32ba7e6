"""
Clock - Day-window arithmetic.

A window ends at the last instant of the local calendar day it started in.
Staleness is judged at day granularity, never by exact timestamp.
"""

from __future__ import annotations
from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in the local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """A clock pinned to one instant. Used by tests and replays."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        """Move the pinned instant forward (timedelta keyword arguments)."""
        self.moment = self.moment + timedelta(**kwargs)


def end_of_day(now: datetime) -> datetime:
    """Last instant of the calendar day containing `now`."""
    return now.replace(hour=23, minute=59, second=59, microsecond=999999)


def _align(timestamp: datetime, now: datetime) -> datetime:
    """Express `timestamp` in the same timezone frame as `now`."""
    if timestamp.tzinfo is None and now.tzinfo is not None:
        return timestamp.replace(tzinfo=now.tzinfo)
    if timestamp.tzinfo is not None and now.tzinfo is None:
        return timestamp.astimezone().replace(tzinfo=None)
    if timestamp.tzinfo is not None:
        return timestamp.astimezone(now.tzinfo)
    return timestamp


def is_same_day(timestamp: datetime, now: datetime) -> bool:
    """True if `timestamp` falls on the same calendar day as `now`."""
    return _align(timestamp, now).date() == now.date()


def time_until(expires_at: datetime, now: datetime) -> timedelta:
    """Time left in the window, clamped at zero."""
    remaining = _align(expires_at, now) - now
    return max(remaining, timedelta(0))


def format_countdown(remaining: timedelta) -> str:
    """Render a countdown as zero-padded HH:MM:SS."""
    total = int(remaining.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
