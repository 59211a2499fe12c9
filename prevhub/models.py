"""
prevhub.models
==============

Dataclasses and enums for dated regulatory obligations and the values
computed from them.  Like every core module they carry **no** external
dependencies, so ``import prevhub`` stays cheap.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class ObligationKind(Enum):
    """What produced the deadline."""
    VERIFICATION = "verification"
    PRESCRIPTION = "prescription"
    COMMISSION = "commission"

    def __str__(self) -> str:
        return self.name


class Priority(Enum):
    """Priority of a prescription, most pressing first."""
    URGENT = "urgent"
    HAUTE = "haute"
    NORMALE = "normale"
    BASSE = "basse"

    @property
    def rank(self) -> int:
        return _PRIORITY_ORDER.index(self)

    def __str__(self) -> str:
        return self.name


_PRIORITY_ORDER = list(Priority)


class Criticality(Enum):
    """Criticality assigned by the commission to a prescription or observation."""
    CRITIQUE = "critique"
    MAJEURE = "majeure"
    MINEURE = "mineure"
    OBSERVATION = "observation"

    def __str__(self) -> str:
        return self.name


class Tier(Enum):
    """Urgency classification of one obligation."""
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    COMPLIANT = "compliant"
    FUTURE = "future"
    NOT_APPLICABLE = "not_applicable"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DatedObligation:
    """
    Any time-bound regulatory obligation tracked by the dashboard.

    Parameters
    ----------
    id : str
        Identifier of the underlying record (verification, prescription, …).
    due_date : datetime.date | None
        Next due date; ``None`` when the record carries none.
    kind : ObligationKind
        Selects the threshold table used to classify it.
    reference_date : datetime.date | None
        Last verification / commission date the deadline derives from.
    priority : Priority | None
        Prescription priority hint.
    criticality : Criticality | None
        Prescription criticality.
    owner_id : str | None
        Établissement or groupement the obligation belongs to.
    title : str | None
        Short human-readable name used in alert messages.
    """
    id: str
    due_date: Optional[date]
    kind: ObligationKind
    reference_date: Optional[date] = None
    priority: Optional[Priority] = None
    criticality: Optional[Criticality] = None
    owner_id: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class UrgencyClassification:
    """Computed on every read, never persisted."""
    tier: Tier
    days_delta: Optional[int]
    label: str
    years_late: Optional[int] = None


@dataclass(frozen=True)
class ComplianceSummary:
    """Per-entity roll-up of classified obligations."""
    total_obligations: int = 0
    overdue_count: int = 0
    due_soon_count: int = 0
    compliant_count: int = 0
    future_count: int = 0
    not_applicable_count: int = 0
    earliest_overdue: Optional[DatedObligation] = None

    @property
    def is_compliant(self) -> bool:
        """True when nothing is overdue."""
        return self.overdue_count == 0
