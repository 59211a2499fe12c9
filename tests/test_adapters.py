"""
tests/test_adapters.py
======================

Unit tests for prevhub.adapters: backend rows → DatedObligation.
"""

from datetime import date

import pytest

from prevhub.adapters import (
    from_commission_row,
    from_prescription_row,
    from_verification_row,
    obligations_from_payload,
    obligations_from_rows,
)
from prevhub.errors import InvalidDateError
from prevhub.models import Criticality, ObligationKind, Priority

VERIFICATION_ROW = {
    "id": "ver-1",
    "date_verification": "2024-03-11",
    "date_prochaine_verification": "2025-03-11",
    "statut": "conforme",
    "installation": {
        "id": "inst-1",
        "nom": "SSI cat. A",
        "type_installation": "SSI",
        "etablissement_id": "etab-1",
    },
}

PRESCRIPTION_ROW = {
    "id": "pr-1",
    "numero_prescription": "PR-2024-007",
    "date_limite_conformite": "2025-01-05",
    "priorite": "urgent",
    "criticite": "critique",
    "statut": "en_cours",
    "etablissement_id": None,
    "groupement_id": "grp-1",
}

COMMISSION_ROW = {"id": 12, "date": "2025-02-01", "type": "securite", "etablissement_id": "etab-2"}


def test_verification_row():
    ob = from_verification_row(VERIFICATION_ROW)
    assert ob.kind is ObligationKind.VERIFICATION
    assert ob.due_date == date(2025, 3, 11)
    assert ob.reference_date == date(2024, 3, 11)
    assert ob.owner_id == "etab-1"
    assert ob.title == "SSI"


def test_prescription_row():
    ob = from_prescription_row(PRESCRIPTION_ROW)
    assert ob.kind is ObligationKind.PRESCRIPTION
    assert ob.due_date == date(2025, 1, 5)
    assert ob.priority is Priority.URGENT
    assert ob.criticality is Criticality.CRITIQUE
    assert ob.owner_id == "grp-1"
    assert ob.title == "PR-2024-007"


def test_prescription_falls_back_to_date_echeance():
    ob = from_prescription_row({"id": "p", "date_echeance": "2025-06-30"})
    assert ob.due_date == date(2025, 6, 30)
    assert ob.priority is None


def test_unknown_priority_is_ignored():
    ob = from_prescription_row({"id": "p", "priorite": "asap"})
    assert ob.priority is None


def test_commission_row_id_is_stringified():
    ob = from_commission_row(COMMISSION_ROW)
    assert ob.id == "12"
    assert ob.kind is ObligationKind.COMMISSION
    assert ob.due_date == date(2025, 2, 1)


def test_missing_due_date_is_kept():
    ob = from_verification_row({"id": "v", "date_prochaine_verification": None})
    assert ob.due_date is None


def test_malformed_date_raises():
    with pytest.raises(InvalidDateError):
        from_prescription_row({"id": "p", "date_limite_conformite": "05/01/2025"})


def test_closed_rows_are_skipped():
    rows = [
        PRESCRIPTION_ROW,
        {**PRESCRIPTION_ROW, "id": "pr-2", "statut": "leve"},
        {**PRESCRIPTION_ROW, "id": "pr-3", "statut": "valide"},
        {**PRESCRIPTION_ROW, "id": "pr-4", "statut": "annule"},
    ]
    obs = obligations_from_rows(ObligationKind.PRESCRIPTION, rows)
    assert [o.id for o in obs] == ["pr-1"]


def test_held_commissions_are_skipped():
    rows = [COMMISSION_ROW, {**COMMISSION_ROW, "id": 13, "avis": "favorable"}]
    assert [o.id for o in obligations_from_rows("commission", rows)] == ["12"]


def test_payload():
    payload = {
        "verifications": [VERIFICATION_ROW],
        "prescriptions": [PRESCRIPTION_ROW],
    }
    obs = obligations_from_payload(payload)
    assert [o.kind for o in obs] == [ObligationKind.VERIFICATION, ObligationKind.PRESCRIPTION]
