"""
prevhub.dates
=============

Calendar-date normalisation shared by the classifier and the adapters.

Every comparison in prevhub happens on whole calendar days: datetimes are
truncated to their own calendar date before any differencing, so intraday
drift never moves an obligation across a day boundary.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from .errors import InvalidDateError

DAYS_PER_YEAR = 365


def to_calendar_date(value: Any) -> date:
    """
    Return *value* as a :class:`datetime.date`.

    Accepted inputs
    ---------------
    * ``datetime.date`` – returned as is
    * ``datetime.datetime`` – truncated to its own calendar date (no tz shift)
    * ``str`` – ISO‑8601 date or timestamp, a trailing ``Z`` is accepted

    Anything else raises :class:`InvalidDateError`.
    """
    # datetime is a subclass of date, test it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not s:
            raise InvalidDateError(value, "empty string")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            if len(s) == 10:
                return date.fromisoformat(s)
            return datetime.fromisoformat(s).date()
        except ValueError as exc:
            raise InvalidDateError(value, str(exc)) from exc
    raise InvalidDateError(value, f"unsupported type {type(value).__name__}")


def to_optional_date(value: Any) -> Optional[date]:
    """Like :func:`to_calendar_date` but maps ``None`` and ``""`` to ``None``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_calendar_date(value)


def calendar_day_difference(due: Any, now: Any) -> int:
    """Signed number of calendar days from *now* to *due* (negative when past)."""
    return (to_calendar_date(due) - to_calendar_date(now)).days
