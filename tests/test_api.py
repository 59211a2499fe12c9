"""
Tests for the compliance HTTP endpoints.

These tests use FastAPI TestClient with the SQLite registry swapped for an
in‑memory ObligationRegistry and the wall clock frozen on 2025-01-01.
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_clock, get_hierarchy, get_registry, get_settings
from api.main import app
from prevhub.clock import FixedClock
from prevhub.hierarchy import GroupementGraph
from prevhub.registry import ObligationRegistry
from prevhub.settings import Settings

OBLIGATIONS = [
    {"id": "v1", "kind": "verification", "due_date": "2021-03-11", "owner_id": "etab-1", "title": "SSI"},
    {"id": "v2", "kind": "verification", "due_date": "2025-02-20", "owner_id": "etab-1"},
    {
        "id": "p1",
        "kind": "prescription",
        "due_date": "2025-01-05",
        "priority": "urgent",
        "owner_id": "etab-2",
        "title": "PR-7",
    },
    {"id": "c1", "kind": "commission", "due_date": "2025-03-30", "owner_id": "centre-a"},
]


@pytest.fixture
def client():
    registry = ObligationRegistry()
    graph = GroupementGraph()
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_hierarchy] = lambda: graph
    app.dependency_overrides[get_clock] = lambda: FixedClock("2025-01-01")
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def loaded(client):
    r = client.post("/obligations", json=OBLIGATIONS)
    assert r.status_code == 201
    assert r.json()["stored"] == 4
    return client


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_classify_endpoint(client):
    r = client.get("/classify", params={"due_date": "2025-01-05", "kind": "prescription"})
    assert r.status_code == 200
    body = r.json()
    assert body["tier"] == "due_soon"
    assert body["days_delta"] == 4
    assert body["severity"] == "medium"


def test_classify_without_due_date(client):
    body = client.get("/classify").json()
    assert body["tier"] == "not_applicable"
    assert body["label"] == "Non renseigné"


def test_classify_invalid_date_is_422(client):
    r = client.get("/classify", params={"due_date": "2025-02-30"})
    assert r.status_code == 422
    assert r.json()["detail"] == "données de date invalides"


def test_post_rejects_bad_batch(client):
    bad = OBLIGATIONS[:1] + [{"id": "x", "kind": "verification", "due_date": "soon"}]
    r = client.post("/obligations", json=bad)
    assert r.status_code == 422
    assert client.get("/obligations/v1").status_code == 404


def test_get_and_delete_obligation(loaded):
    r = loaded.get("/obligations/p1")
    assert r.status_code == 200
    assert r.json()["priority"] == "urgent"
    assert loaded.delete("/obligations/p1").status_code == 204
    assert loaded.get("/obligations/p1").status_code == 404
    assert loaded.delete("/obligations/p1").status_code == 404


def test_owner_summary(loaded):
    body = loaded.get("/owners/etab-1/summary").json()
    assert body["total_obligations"] == 2
    assert body["overdue_count"] == 1
    assert body["due_soon_count"] == 1
    assert body["earliest_overdue"]["id"] == "v1"


def test_all_summaries(loaded):
    owners = [s["owner_id"] for s in loaded.get("/summaries").json()]
    assert owners == ["centre-a", "etab-1", "etab-2"]


def test_groupement_rollup(loaded):
    r = loaded.post("/groupements/centre-a/etablissements/etab-1")
    assert r.status_code == 201
    assert r.json()["etablissements"] == ["etab-1"]
    body = loaded.get("/groupements/centre-a/summary").json()
    assert body["total_obligations"] == 3
    assert body["future_count"] == 1
    assert body["overdue_count"] == 1


def test_alerts(loaded):
    body = loaded.get("/alerts").json()
    assert [a["obligation_id"] for a in body["alerts"]] == ["v1", "p1", "v2"]
    assert body["stats"]["total"] == 3
    etab2 = loaded.get("/alerts", params={"owner_id": "etab-2"}).json()
    assert [a["message"] for a in etab2["alerts"]] == ["Prescription PR-7 échue dans 4 jours"]


def test_thresholds_follow_settings(loaded):
    """A tighter prescription window moves p1 out of due soon and out of alerts."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        prescription_due_soon_days=3, prescription_alert_urgent=3, prescription_alert_attention=3
    )
    body = loaded.get("/classify", params={"due_date": "2025-01-05", "kind": "prescription"}).json()
    assert body["tier"] == "compliant"
    assert loaded.get("/owners/etab-2/summary").json()["compliant_count"] == 1
    assert loaded.get("/alerts", params={"owner_id": "etab-2"}).json()["alerts"] == []
