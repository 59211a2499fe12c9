"""
prevhub
=======

Regulatory deadline and compliance-status computation for fire-safety and
accessibility inspection tracking (établissements, groupements,
vérifications périodiques, prescriptions, commissions de sécurité).

Import structure
----------------
`import prevhub` is intentionally cheap: the core sub‑modules are pure
functions over immutable snapshots and only pull in *pydantic-settings* for
their default thresholds.  SQLModel and NetworkX are only imported
when you explicitly access :pymod:`prevhub.db`, :pymod:`prevhub.registry_db`
or :pymod:`prevhub.hierarchy`.

Sub‑modules
~~~~~~~~~~~
- :pymod:`prevhub.models`        – ``DatedObligation`` + classification / summary types
- :pymod:`prevhub.classifier`    – ``classify`` (per-kind threshold tables)
- :pymod:`prevhub.aggregator`    – ``summarize`` / ``summarize_by_owner`` / ``rank_obligations``
- :pymod:`prevhub.presentation`  – ``label_for`` and French wording
- :pymod:`prevhub.alerts`        – daily alert levels and messages
- :pymod:`prevhub.adapters`      – backend rows → ``DatedObligation``
- :pymod:`prevhub.registry`      – ``ObligationRegistry`` in‑memory store
- :pymod:`prevhub.hierarchy`     – groupement → établissement roll‑up (NetworkX)

Quick start
-----------
>>> from datetime import date
>>> from prevhub.classifier import classify
>>> from prevhub.models import ObligationKind
>>> classify(date(2025, 1, 1), date(2025, 1, 5), ObligationKind.PRESCRIPTION).tier
<Tier.DUE_SOON: 'due_soon'>
"""

from .aggregator import rank_obligations, summarize, summarize_by_owner
from .classifier import classify
from .errors import InvalidDateError
from .models import (
    ComplianceSummary,
    Criticality,
    DatedObligation,
    ObligationKind,
    Priority,
    Tier,
    UrgencyClassification,
)
from .presentation import label_for

__all__ = [
    "classify",
    "summarize",
    "summarize_by_owner",
    "rank_obligations",
    "label_for",
    "InvalidDateError",
    "ComplianceSummary",
    "Criticality",
    "DatedObligation",
    "ObligationKind",
    "Priority",
    "Tier",
    "UrgencyClassification",
]

__version__ = "0.1.0"
