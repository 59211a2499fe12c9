"""
api.compliance
==============

Read endpoints: single-date classification, per-owner and per-groupement
summaries, alerts.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from prevhub.aggregator import summarize, summarize_by_owner
from prevhub.alerts import alert_stats, alert_thresholds_from_settings, build_alerts
from prevhub.classifier import classify, thresholds_from_settings
from prevhub.clock import Clock
from prevhub.hierarchy import GroupementGraph
from prevhub.models import ObligationKind
from prevhub.registry import ObligationRegistry
from prevhub.settings import Settings
from api.deps import get_clock, get_hierarchy, get_registry, get_settings
from api.schemas import AlertOut, ClassificationOut, SummaryOut

router = APIRouter()


@router.get("/classify", response_model=ClassificationOut)
def classify_date(
    due_date: Optional[str] = Query(None, description="ISO due date; omit when not set"),
    kind: ObligationKind = Query(ObligationKind.VERIFICATION),
    today: Optional[str] = Query(None, description="Reference day, defaults to today"),
    clock: Clock = Depends(get_clock),
    cfg: Settings = Depends(get_settings),
):
    now = today or clock.today()
    c = classify(now, due_date or None, kind, thresholds_from_settings(cfg))
    return ClassificationOut.from_classification(c)


@router.get("/owners/{owner_id}/summary", response_model=SummaryOut)
def owner_summary(
    owner_id: str,
    reg: ObligationRegistry = Depends(get_registry),
    clock: Clock = Depends(get_clock),
    cfg: Settings = Depends(get_settings),
):
    """Summary of one établissement or groupement (its own obligations only)."""
    s = summarize(clock.today(), reg.for_owner(owner_id), thresholds_from_settings(cfg))
    return SummaryOut.from_summary(s, owner_id)


@router.get("/summaries", response_model=List[SummaryOut])
def all_summaries(
    reg: ObligationRegistry = Depends(get_registry),
    clock: Clock = Depends(get_clock),
    cfg: Settings = Depends(get_settings),
):
    by_owner = summarize_by_owner(clock.today(), list(reg), thresholds_from_settings(cfg))
    return [
        SummaryOut.from_summary(s, owner)
        for owner, s in sorted(by_owner.items(), key=lambda kv: (kv[0] is None, kv[0] or ""))
    ]


@router.get("/groupements/{groupement_id}/summary", response_model=SummaryOut)
def groupement_summary(
    groupement_id: str,
    reg: ObligationRegistry = Depends(get_registry),
    gg: GroupementGraph = Depends(get_hierarchy),
    clock: Clock = Depends(get_clock),
    cfg: Settings = Depends(get_settings),
):
    """Roll-up over the groupement and every établissement it contains."""
    s = gg.rollup(clock.today(), reg, groupement_id, thresholds_from_settings(cfg))
    return SummaryOut.from_summary(s, groupement_id)


@router.get("/alerts")
def list_alerts(
    owner_id: Optional[str] = Query(None),
    reg: ObligationRegistry = Depends(get_registry),
    clock: Clock = Depends(get_clock),
    cfg: Settings = Depends(get_settings),
):
    obligations = reg.for_owner(owner_id) if owner_id else list(reg)
    alerts = build_alerts(clock.today(), obligations, alert_thresholds_from_settings(cfg))
    return {
        "alerts": [AlertOut.from_alert(a) for a in alerts],
        "stats": alert_stats(alerts),
    }
