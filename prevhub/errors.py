"""
prevhub.errors
==============

The single error kind the compliance core can raise.
"""

from __future__ import annotations

from typing import Any


class InvalidDateError(ValueError):
    """
    Raised when a due date or reference date cannot be read as a calendar date.

    The offending input is kept on :pyattr:`value` so callers can point at the
    record that carried it.
    """

    def __init__(self, value: Any, reason: str | None = None) -> None:
        self.value = value
        self.reason = reason
        msg = f"invalid date: {value!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
