"""
prevhub.presentation
====================

Deterministic mapping from computed values to display text and a severity
tier.  Colours, icons and emoji stay in the UI layer; this module only says
*how bad* something is and what to call it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .dates import DAYS_PER_YEAR
from .models import Criticality, Priority, Tier


class Severity(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PresentationLabel:
    severity: Severity
    text: str


TIER_LABELS: Dict[Tier, PresentationLabel] = {
    Tier.OVERDUE: PresentationLabel(Severity.HIGH, "En retard"),
    Tier.DUE_SOON: PresentationLabel(Severity.MEDIUM, "Échéance proche"),
    Tier.COMPLIANT: PresentationLabel(Severity.LOW, "Conforme"),
    Tier.FUTURE: PresentationLabel(Severity.LOW, "À venir"),
    Tier.NOT_APPLICABLE: PresentationLabel(Severity.NONE, "Non renseigné"),
}

PRIORITY_LABELS: Dict[Priority, PresentationLabel] = {
    Priority.URGENT: PresentationLabel(Severity.HIGH, "Urgent"),
    Priority.HAUTE: PresentationLabel(Severity.MEDIUM, "Haute"),
    Priority.NORMALE: PresentationLabel(Severity.LOW, "Normale"),
    Priority.BASSE: PresentationLabel(Severity.NONE, "Basse"),
}

CRITICALITY_LABELS: Dict[Criticality, PresentationLabel] = {
    Criticality.CRITIQUE: PresentationLabel(Severity.HIGH, "Critique"),
    Criticality.MAJEURE: PresentationLabel(Severity.MEDIUM, "Majeure"),
    Criticality.MINEURE: PresentationLabel(Severity.LOW, "Mineure"),
    Criticality.OBSERVATION: PresentationLabel(Severity.NONE, "Observation"),
}


def label_for(tier: Tier) -> PresentationLabel:
    """Severity and French label of a classification tier."""
    return TIER_LABELS[Tier(tier)]


def priority_label(priority: Optional[Priority]) -> PresentationLabel:
    if priority is None:
        return TIER_LABELS[Tier.NOT_APPLICABLE]
    return PRIORITY_LABELS[Priority(priority)]


def criticality_label(criticality: Optional[Criticality]) -> PresentationLabel:
    if criticality is None:
        return TIER_LABELS[Tier.NOT_APPLICABLE]
    return CRITICALITY_LABELS[Criticality(criticality)]


def plural(n: int, word: str) -> str:
    return word if n <= 1 else word + "s"


def format_delta(days_delta: Optional[int]) -> str:
    """
    French wording of a signed day count.

    >>> format_delta(-3)
    'En retard de 3 jours'
    >>> format_delta(-400)
    'En retard de 400 jours (+1 an)'
    >>> format_delta(1)
    '1 jour restant'
    """
    if days_delta is None:
        return TIER_LABELS[Tier.NOT_APPLICABLE].text
    if days_delta < 0:
        late = abs(days_delta)
        text = f"En retard de {late} {plural(late, 'jour')}"
        years = late // DAYS_PER_YEAR
        if years >= 1:
            text += f" (+{years} {plural(years, 'an')})"
        return text
    if days_delta == 0:
        return "Échéance aujourd'hui"
    return f"{days_delta} {plural(days_delta, 'jour')} {plural(days_delta, 'restant')}"
