"""Kernel time – Clock protocol + implementations.

Log timestamps are naive server-local values, so every clock here hands
out naive datetimes.  See :mod:`logscope.kernel.time.naive`.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Protocol

from logscope.kernel.time.naive import to_naive


class Clock(Protocol):
    """Port: abstract clock for deterministic testing."""

    def now(self) -> datetime: ...
    def today(self) -> date: ...


class LocalClock:
    """Production clock returning the server's naive local time."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return datetime.now().date()


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = to_naive(fixed)

    def now(self) -> datetime:
        return self._fixed

    def today(self) -> date:
        return self._fixed.date()

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


__all__ = ["Clock", "FrozenClock", "LocalClock"]
