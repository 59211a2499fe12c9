"""
prevhub.classifier
==================

Deadline classifier: maps ``now``, a due date and an obligation kind to an
:class:`~prevhub.models.UrgencyClassification`.

Each :class:`~prevhub.models.ObligationKind` has its own threshold table.
Verifications get a wide "échéance proche" window, prescriptions a much
tighter one, and commissions a preparation window after which the event is
simply upcoming (``FUTURE``) rather than compliant.

Example
-------
>>> from datetime import date
>>> c = classify(date(2025, 1, 1), date(2025, 2, 20), ObligationKind.VERIFICATION)
>>> c.tier, c.days_delta
(<Tier.DUE_SOON: 'due_soon'>, 50)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .dates import DAYS_PER_YEAR, calendar_day_difference, to_calendar_date
from .models import DatedObligation, ObligationKind, Tier, UrgencyClassification
from .presentation import format_delta
from .settings import Settings, settings

NOT_SET_LABEL = "Non renseigné"


@dataclass(frozen=True)
class ThresholdTable:
    """
    Due-soon window of one obligation kind.

    ``days`` is the window length; with ``inclusive`` the last day of the
    window (``days_delta == days``) still counts as due soon.  Beyond the
    window an obligation is ``beyond`` (COMPLIANT or FUTURE).
    """
    days: int
    inclusive: bool = False
    beyond: Tier = Tier.COMPLIANT

    def __post_init__(self):
        if self.days < 0:
            raise ValueError("threshold days must be >= 0")
        if self.beyond not in (Tier.COMPLIANT, Tier.FUTURE):
            raise ValueError("beyond must be COMPLIANT or FUTURE")

    def is_due_soon(self, days_delta: int) -> bool:
        if days_delta < 0:
            return False
        return days_delta <= self.days if self.inclusive else days_delta < self.days


Thresholds = Mapping[ObligationKind, ThresholdTable]


def thresholds_from_settings(s: Settings) -> Dict[ObligationKind, ThresholdTable]:
    """Build the per-kind tables from a :class:`~prevhub.settings.Settings`."""
    return {
        ObligationKind.VERIFICATION: ThresholdTable(s.verification_due_soon_days),
        ObligationKind.PRESCRIPTION: ThresholdTable(
            s.prescription_due_soon_days, inclusive=True
        ),
        ObligationKind.COMMISSION: ThresholdTable(
            s.commission_due_soon_days, inclusive=True, beyond=Tier.FUTURE
        ),
    }


DEFAULT_THRESHOLDS: Mapping[ObligationKind, ThresholdTable] = thresholds_from_settings(settings)


def years_late(days_delta: int) -> int:
    """Whole years elapsed for an overdue delta (0 under a year)."""
    return abs(days_delta) // DAYS_PER_YEAR


def classify(
    now: Any,
    due_date: Any,
    kind: ObligationKind,
    thresholds: Optional[Thresholds] = None,
) -> UrgencyClassification:
    """
    Classify a single deadline.

    Parameters
    ----------
    now : date | datetime | str
        Reference day; time of day is ignored.
    due_date : date | datetime | str | None
        Due date of the obligation; ``None`` yields ``NOT_APPLICABLE``.
    kind : ObligationKind
        Selects the threshold table.
    thresholds : mapping, optional
        Per-kind tables overriding :data:`DEFAULT_THRESHOLDS`.

    Raises
    ------
    InvalidDateError
        If ``now`` or ``due_date`` is not a valid calendar date.
    """
    today = to_calendar_date(now)
    if due_date is None:
        return UrgencyClassification(Tier.NOT_APPLICABLE, None, NOT_SET_LABEL)

    table = (DEFAULT_THRESHOLDS if thresholds is None else thresholds)[ObligationKind(kind)]
    delta = calendar_day_difference(due_date, today)

    if delta < 0:
        years = years_late(delta)
        return UrgencyClassification(Tier.OVERDUE, delta, format_delta(delta), years)
    if table.is_due_soon(delta):
        return UrgencyClassification(Tier.DUE_SOON, delta, format_delta(delta))
    return UrgencyClassification(table.beyond, delta, format_delta(delta))


def classify_obligation(now: Any, obligation: DatedObligation, thresholds: Optional[Thresholds] = None) -> UrgencyClassification:
    """Shortcut for :func:`classify` on a :class:`~prevhub.models.DatedObligation`."""
    return classify(now, obligation.due_date, obligation.kind, thresholds)
