"""
prevhub.clock
=============

Injectable time sources.  Core functions take ``now`` as an argument; only
the outer layers (CLI, API) ask a clock for it.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Protocol

from .dates import to_calendar_date


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Wall clock, optionally pinned to a timezone."""

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock:
    """
    Clock frozen on a single day.

    >>> FixedClock("2025-01-01").today()
    datetime.date(2025, 1, 1)
    """

    def __init__(self, day) -> None:
        self._day = to_calendar_date(day)

    def today(self) -> date:
        return self._day

    def __repr__(self) -> str:
        return f"FixedClock({self._day.isoformat()!r})"
