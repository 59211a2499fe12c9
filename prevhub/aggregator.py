"""
prevhub.aggregator
==================

Roll classified obligations up into a :class:`~prevhub.models.ComplianceSummary`
for one owning entity (établissement or groupement).

The caller partitions obligations by owner before calling :func:`summarize`;
:func:`summarize_by_owner` does that partitioning for collections that carry
``owner_id``.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .classifier import Thresholds, classify_obligation
from .dates import to_calendar_date
from .models import ComplianceSummary, DatedObligation, Priority, Tier


def _overdue_key(delta: int, ob: DatedObligation) -> Tuple[int, Any, str]:
    return (delta, to_calendar_date(ob.due_date), str(ob.id))


def summarize(
    now: Any,
    obligations: Iterable[DatedObligation],
    thresholds: Optional[Thresholds] = None,
) -> ComplianceSummary:
    """
    Count obligations per tier and pick the longest-overdue one.

    ``earliest_overdue`` is the obligation with the most negative
    ``days_delta``; ties go to the earlier due date, then the smaller id.
    Time of day is ignored, so same-day due dates tie on the id.
    :class:`~prevhub.errors.InvalidDateError` propagates unchanged.
    """
    today = to_calendar_date(now)
    counts: Counter = Counter()
    worst: Optional[Tuple[Tuple[int, Any, str], DatedObligation]] = None
    total = 0

    for ob in obligations:
        c = classify_obligation(today, ob, thresholds)
        counts[c.tier] += 1
        total += 1
        if c.tier is Tier.OVERDUE:
            key = _overdue_key(c.days_delta, ob)
            if worst is None or key < worst[0]:
                worst = (key, ob)

    return ComplianceSummary(
        total_obligations=total,
        overdue_count=counts[Tier.OVERDUE],
        due_soon_count=counts[Tier.DUE_SOON],
        compliant_count=counts[Tier.COMPLIANT],
        future_count=counts[Tier.FUTURE],
        not_applicable_count=counts[Tier.NOT_APPLICABLE],
        earliest_overdue=worst[1] if worst else None,
    )


def summarize_by_owner(
    now: Any,
    obligations: Iterable[DatedObligation],
    thresholds: Optional[Thresholds] = None,
) -> Dict[Optional[str], ComplianceSummary]:
    """One summary per ``owner_id``; obligations without owner land under ``None``."""
    today = to_calendar_date(now)
    groups: Dict[Optional[str], List[DatedObligation]] = {}
    for ob in obligations:
        groups.setdefault(ob.owner_id, []).append(ob)
    return {owner: summarize(today, obs, thresholds) for owner, obs in groups.items()}


def rank_obligations(
    now: Any,
    obligations: Iterable[DatedObligation],
    thresholds: Optional[Thresholds] = None,
) -> List[DatedObligation]:
    """
    Most urgent first: by ``days_delta`` ascending (undated last), then by
    priority (urgent → basse, none last), then by id.
    """
    today = to_calendar_date(now)

    def key(ob: DatedObligation):
        delta = classify_obligation(today, ob, thresholds).days_delta
        prio = ob.priority.rank if ob.priority is not None else len(Priority)
        return (delta is None, delta if delta is not None else 0, prio, str(ob.id))

    return sorted(obligations, key=key)
