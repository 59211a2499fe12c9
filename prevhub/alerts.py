"""
prevhub.alerts
==============

Alert levels and messages produced by the daily alert run.

Alert cut-offs are independent from the classification windows: they drive
notifications (critique / urgent / attention) rather than the status badge.
All cut-offs are inclusive on ``days_remaining``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .dates import calendar_day_difference, to_calendar_date
from .models import DatedObligation, ObligationKind
from .presentation import plural
from .settings import Settings, settings


class AlertLevel(Enum):
    CRITIQUE = "critique"
    URGENT = "urgent"
    ATTENTION = "attention"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class AlertThresholds:
    """``critique`` is ``None`` for kinds that never become critical (commissions)."""
    critique: Optional[int]
    urgent: int
    attention: int

    def level(self, days_remaining: int) -> Optional[AlertLevel]:
        if self.critique is None:
            if days_remaining < 0:
                return None
        elif days_remaining <= self.critique:
            return AlertLevel.CRITIQUE
        if days_remaining <= self.urgent:
            return AlertLevel.URGENT
        if days_remaining <= self.attention:
            return AlertLevel.ATTENTION
        return None


def alert_thresholds_from_settings(s: Settings) -> Dict[ObligationKind, AlertThresholds]:
    return {
        ObligationKind.PRESCRIPTION: AlertThresholds(
            s.prescription_alert_critique,
            s.prescription_alert_urgent,
            s.prescription_alert_attention,
        ),
        ObligationKind.COMMISSION: AlertThresholds(
            None, s.commission_alert_urgent, s.commission_alert_attention
        ),
        ObligationKind.VERIFICATION: AlertThresholds(
            s.verification_alert_critique,
            s.verification_alert_urgent,
            s.verification_alert_attention,
        ),
    }


DEFAULT_ALERT_THRESHOLDS: Mapping[ObligationKind, AlertThresholds] = (
    alert_thresholds_from_settings(settings)
)


@dataclass(frozen=True)
class Alert:
    obligation_id: str
    kind: ObligationKind
    level: AlertLevel
    days_remaining: int
    message: str
    owner_id: Optional[str] = None


def alert_level(
    now: Any,
    obligation: DatedObligation,
    thresholds: Optional[Mapping[ObligationKind, AlertThresholds]] = None,
) -> Optional[AlertLevel]:
    """Alert level of one obligation, ``None`` when it needs no alert or has no due date."""
    if obligation.due_date is None:
        return None
    days = calendar_day_difference(obligation.due_date, now)
    table = DEFAULT_ALERT_THRESHOLDS if thresholds is None else thresholds
    return table[obligation.kind].level(days)


def _days(n: int) -> str:
    return f"{n} {plural(n, 'jour')}"


def alert_message(obligation: DatedObligation, days_remaining: int) -> str:
    """French notification text for one alert."""
    title = obligation.title or obligation.id
    if obligation.kind is ObligationKind.COMMISSION:
        if days_remaining == 0:
            return f"Commission {obligation.title or 'sécurité'} aujourd'hui"
        return f"Commission {obligation.title or 'sécurité'} dans {_days(days_remaining)}"

    noun = "Prescription" if obligation.kind is ObligationKind.PRESCRIPTION else "Vérification"
    if days_remaining < 0:
        return f"{noun} {title} en retard de {_days(abs(days_remaining))}"
    if days_remaining == 0:
        return f"{noun} {title} échue aujourd'hui"
    if obligation.kind is ObligationKind.PRESCRIPTION:
        return f"{noun} {title} échue dans {_days(days_remaining)}"
    return f"{noun} {title} à prévoir dans {_days(days_remaining)}"


def build_alerts(
    now: Any,
    obligations: Iterable[DatedObligation],
    thresholds: Optional[Mapping[ObligationKind, AlertThresholds]] = None,
) -> List[Alert]:
    """
    Alerts for every obligation crossing an alert cut-off, soonest first.

    Obligations without due date or beyond the attention cut-off are skipped.
    """
    today = to_calendar_date(now)
    table = DEFAULT_ALERT_THRESHOLDS if thresholds is None else thresholds
    alerts: List[Alert] = []
    for ob in obligations:
        if ob.due_date is None:
            continue
        days = calendar_day_difference(ob.due_date, today)
        level = table[ob.kind].level(days)
        if level is None:
            continue
        alerts.append(
            Alert(
                obligation_id=ob.id,
                kind=ob.kind,
                level=level,
                days_remaining=days,
                message=alert_message(ob, days),
                owner_id=ob.owner_id,
            )
        )
    alerts.sort(key=lambda a: (a.days_remaining, str(a.obligation_id)))
    return alerts


def alert_stats(alerts: Iterable[Alert]) -> Dict[str, Any]:
    """Totals per level and per kind, zeroes included."""
    stats: Dict[str, Any] = {
        "total": 0,
        **{lvl.value: 0 for lvl in AlertLevel},
        "par_type": {k.value: 0 for k in ObligationKind},
    }
    for a in alerts:
        stats["total"] += 1
        stats[a.level.value] += 1
        stats["par_type"][a.kind.value] += 1
    return stats
