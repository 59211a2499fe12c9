"""
tests/test_registry.py
======================

Unit tests for prevhub.registry.ObligationRegistry
"""

from datetime import date

import pytest

from prevhub.models import DatedObligation, ObligationKind
from prevhub.registry import ObligationRegistry


def _demo_registry():
    reg = ObligationRegistry()
    reg.add(DatedObligation("v1", date(2025, 3, 1), ObligationKind.VERIFICATION, owner_id="etab-1"))
    reg.add(DatedObligation("p1", date(2025, 1, 5), ObligationKind.PRESCRIPTION, owner_id="etab-1"))
    reg.add(DatedObligation("c1", date(2025, 4, 1), ObligationKind.COMMISSION, owner_id="grp-1"))
    return reg


def test_add_and_get():
    reg = ObligationRegistry()
    ob = DatedObligation("v9", None, ObligationKind.VERIFICATION)
    reg.add(ob)
    assert reg.get("v9") is ob


def test_get_missing_raises():
    with pytest.raises(KeyError):
        ObligationRegistry().get("nope")


def test_reschedule_replaces():
    """Adding the same id again replaces the snapshot."""
    reg = _demo_registry()
    reg.add(DatedObligation("v1", date(2026, 3, 1), ObligationKind.VERIFICATION, owner_id="etab-1"))
    assert len(reg) == 3
    assert reg.get("v1").due_date == date(2026, 3, 1)


def test_remove():
    reg = _demo_registry()
    reg.remove("p1")
    assert len(reg) == 2
    with pytest.raises(KeyError):
        reg.remove("p1")


def test_for_owner_and_kind():
    reg = _demo_registry()
    assert {o.id for o in reg.for_owner("etab-1")} == {"v1", "p1"}
    assert [o.id for o in reg.find_by_kind(ObligationKind.COMMISSION)] == ["c1"]
    assert reg.owners() == {"etab-1", "grp-1"}


def test_len_and_iter():
    reg = _demo_registry()
    assert len(reg) == 3
    assert {o.id for o in reg} == {"v1", "p1", "c1"}
