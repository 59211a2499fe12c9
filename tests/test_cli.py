"""
tests/test_cli.py
=================

Tests for the prevhub command-line entry point.
"""

import json

import pytest

from prevhub.cli import main

EXPORT = {
    "verifications": [
        {"id": "v1", "date_prochaine_verification": "2021-03-11", "etablissement_id": "etab-1"},
        {"id": "v2", "date_prochaine_verification": "2025-06-01", "etablissement_id": "etab-1"},
    ],
    "prescriptions": [
        {
            "id": "p1",
            "numero_prescription": "PR-1",
            "date_limite_conformite": "2025-01-05",
            "statut": "en_cours",
            "etablissement_id": "etab-2",
        },
        {"id": "p2", "date_limite_conformite": "2024-01-05", "statut": "leve"},
    ],
    "commissions": [],
}


@pytest.fixture
def export_file(tmp_path):
    p = tmp_path / "export.json"
    p.write_text(json.dumps(EXPORT), encoding="utf-8")
    return str(p)


def test_classify(capsys):
    assert main(["classify", "2025-02-20", "--today", "2025-01-01"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["tier"] == "due_soon"
    assert out["days_delta"] == 50
    assert out["presentation"] == {"severity": "medium", "text": "Échéance proche"}


def test_summary(capsys, export_file):
    assert main(["summary", export_file, "--today", "2025-01-01"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["total_obligations"] == 3
    assert out["overdue_count"] == 1
    assert out["earliest_overdue"]["id"] == "v1"
    assert out["earliest_overdue"]["due_date"] == "2021-03-11"


def test_summary_by_owner(capsys, export_file):
    assert main(["summary", export_file, "--today", "2025-01-01", "--by-owner"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert set(out) == {"etab-1", "etab-2"}
    assert out["etab-2"]["due_soon_count"] == 1


def test_alerts(capsys, export_file):
    assert main(["alerts", export_file, "--today", "2025-01-01"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [a["obligation_id"] for a in out["alerts"]] == ["v1", "p1"]
    assert out["stats"]["critique"] == 1


def test_invalid_date_exit_code(capsys):
    assert main(["classify", "20/02/2025", "--today", "2025-01-01"]) == 2
    assert "données de date invalides" in capsys.readouterr().err
