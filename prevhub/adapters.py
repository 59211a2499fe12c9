"""
prevhub.adapters
================

Read-model adapters: turn rows returned by the hosted database
(``verifications_periodiques``, ``prescriptions``, ``commissions``) into
:class:`~prevhub.models.DatedObligation` snapshots.

Only the fields needed for classification are read.  Malformed dates raise
:class:`~prevhub.errors.InvalidDateError`; they are never dropped silently.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .dates import to_optional_date
from .models import Criticality, DatedObligation, ObligationKind, Priority

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

# Prescription statuses that close the obligation
CLOSED_PRESCRIPTION_STATUSES = {"leve", "valide", "annule"}


def _owner(row: Row) -> Optional[str]:
    """Établissement wins over groupement; nested installation rows are looked into."""
    for key in ("etablissement_id", "groupement_id"):
        if row.get(key):
            return str(row[key])
    installation = row.get("installation")
    if isinstance(installation, Mapping):
        return _owner(installation)
    return None


def _enum(enum_cls, value):
    if value in (None, ""):
        return None
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown {enum_cls.__name__} value {value!r}, ignored")
        return None


def from_verification_row(row: Row) -> DatedObligation:
    """Map a ``verifications_periodiques`` row."""
    installation = row.get("installation") if isinstance(row.get("installation"), Mapping) else {}
    return DatedObligation(
        id=str(row["id"]),
        due_date=to_optional_date(row.get("date_prochaine_verification")),
        kind=ObligationKind.VERIFICATION,
        reference_date=to_optional_date(row.get("date_verification")),
        owner_id=_owner(row),
        title=installation.get("type_installation") or installation.get("nom") or row.get("titre"),
    )


def from_prescription_row(row: Row) -> DatedObligation:
    """Map a ``prescriptions`` row (``date_limite_conformite``, else ``date_echeance``)."""
    due = row.get("date_limite_conformite") or row.get("date_echeance")
    return DatedObligation(
        id=str(row["id"]),
        due_date=to_optional_date(due),
        kind=ObligationKind.PRESCRIPTION,
        reference_date=to_optional_date(row.get("created_at")),
        priority=_enum(Priority, row.get("priorite")),
        criticality=_enum(Criticality, row.get("criticite")),
        owner_id=_owner(row),
        title=row.get("numero_prescription"),
    )


def from_commission_row(row: Row) -> DatedObligation:
    """Map a ``commissions`` row; the commission date is the deadline."""
    return DatedObligation(
        id=str(row["id"]),
        due_date=to_optional_date(row.get("date")),
        kind=ObligationKind.COMMISSION,
        owner_id=_owner(row),
        title=row.get("type"),
    )


def is_open(kind: ObligationKind, row: Row) -> bool:
    """False for records that no longer carry a live deadline."""
    if kind is ObligationKind.PRESCRIPTION:
        return str(row.get("statut") or "").lower() not in CLOSED_PRESCRIPTION_STATUSES
    if kind is ObligationKind.COMMISSION:
        return not row.get("avis")
    return True


ADAPTERS: Dict[ObligationKind, Callable[[Row], DatedObligation]] = {
    ObligationKind.VERIFICATION: from_verification_row,
    ObligationKind.PRESCRIPTION: from_prescription_row,
    ObligationKind.COMMISSION: from_commission_row,
}


def obligations_from_rows(kind: ObligationKind, rows: Iterable[Row]) -> List[DatedObligation]:
    """Adapt every open row of one table."""
    kind = ObligationKind(kind)
    adapt = ADAPTERS[kind]
    out: List[DatedObligation] = []
    skipped = 0
    for row in rows:
        if not is_open(kind, row):
            skipped += 1
            continue
        out.append(adapt(row))
    if skipped:
        logger.debug(f"Skipped {skipped} closed {kind.value} rows")
    return out


def obligations_from_payload(payload: Mapping[str, Iterable[Row]]) -> List[DatedObligation]:
    """
    Adapt a document shaped like ``{"verifications": [...], "prescriptions": [...],
    "commissions": [...]}``; missing sections are treated as empty.
    """
    out: List[DatedObligation] = []
    for kind in ObligationKind:
        rows = payload.get(kind.value + "s") or []
        out.extend(obligations_from_rows(kind, rows))
    logger.info(f"Loaded {len(out)} obligations")
    return out
