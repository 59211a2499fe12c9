"""
api.schemas
===========

Request / response models for the HTTP layer.  Dates travel as ISO strings
and are parsed by :mod:`prevhub.dates` so a malformed value surfaces as
``InvalidDateError`` rather than a generic validation error.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from prevhub.alerts import Alert
from prevhub.dates import to_optional_date
from prevhub.models import (
    ComplianceSummary,
    Criticality,
    DatedObligation,
    ObligationKind,
    Priority,
    UrgencyClassification,
)
from prevhub.presentation import label_for


class ObligationIn(BaseModel):
    id: str = Field(..., min_length=1)
    kind: ObligationKind
    due_date: Optional[str] = Field(None, description="ISO date, null when not set")
    reference_date: Optional[str] = None
    priority: Optional[Priority] = None
    criticality: Optional[Criticality] = None
    owner_id: Optional[str] = None
    title: Optional[str] = None

    def to_obligation(self) -> DatedObligation:
        return DatedObligation(
            id=self.id,
            due_date=to_optional_date(self.due_date),
            kind=self.kind,
            reference_date=to_optional_date(self.reference_date),
            priority=self.priority,
            criticality=self.criticality,
            owner_id=self.owner_id,
            title=self.title,
        )


class ObligationOut(BaseModel):
    id: str
    kind: ObligationKind
    due_date: Optional[date] = None
    reference_date: Optional[date] = None
    priority: Optional[Priority] = None
    criticality: Optional[Criticality] = None
    owner_id: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_obligation(cls, ob: DatedObligation) -> "ObligationOut":
        return cls(
            id=ob.id,
            kind=ob.kind,
            due_date=ob.due_date,
            reference_date=ob.reference_date,
            priority=ob.priority,
            criticality=ob.criticality,
            owner_id=ob.owner_id,
            title=ob.title,
        )


class ClassificationOut(BaseModel):
    tier: str
    days_delta: Optional[int] = None
    label: str
    years_late: Optional[int] = None
    severity: str
    status_text: str

    @classmethod
    def from_classification(cls, c: UrgencyClassification) -> "ClassificationOut":
        pres = label_for(c.tier)
        return cls(
            tier=c.tier.value,
            days_delta=c.days_delta,
            label=c.label,
            years_late=c.years_late,
            severity=pres.severity.value,
            status_text=pres.text,
        )


class SummaryOut(BaseModel):
    owner_id: Optional[str] = None
    total_obligations: int
    overdue_count: int
    due_soon_count: int
    compliant_count: int
    future_count: int
    not_applicable_count: int
    earliest_overdue: Optional[ObligationOut] = None

    @classmethod
    def from_summary(cls, s: ComplianceSummary, owner_id: Optional[str] = None) -> "SummaryOut":
        worst = s.earliest_overdue
        return cls(
            owner_id=owner_id,
            total_obligations=s.total_obligations,
            overdue_count=s.overdue_count,
            due_soon_count=s.due_soon_count,
            compliant_count=s.compliant_count,
            future_count=s.future_count,
            not_applicable_count=s.not_applicable_count,
            earliest_overdue=ObligationOut.from_obligation(worst) if worst else None,
        )


class AlertOut(BaseModel):
    obligation_id: str
    kind: ObligationKind
    level: str
    days_remaining: int
    message: str
    owner_id: Optional[str] = None

    @classmethod
    def from_alert(cls, a: Alert) -> "AlertOut":
        return cls(
            obligation_id=a.obligation_id,
            kind=a.kind,
            level=a.level.value,
            days_remaining=a.days_remaining,
            message=a.message,
            owner_id=a.owner_id,
        )
