"""
api.obligations
===============

Endpoints that load obligation snapshots and groupement memberships.

The hosted database remains the system of record; these endpoints only keep
the local snapshot that summaries and alerts are computed from.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from prevhub.hierarchy import GroupementGraph
from prevhub.registry import ObligationRegistry
from api.deps import get_hierarchy, get_registry
from api.schemas import ObligationIn, ObligationOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/obligations", status_code=201)
def add_obligations(
    items: List[ObligationIn],
    reg: ObligationRegistry = Depends(get_registry),
):
    """Insert or replace obligation snapshots (rescheduling replaces by id)."""
    # convert everything first so a bad date rejects the whole batch
    obligations = [item.to_obligation() for item in items]
    for ob in obligations:
        reg.add(ob)
    logger.info(f"Stored {len(obligations)} obligations")
    return {"stored": len(obligations), "ids": [ob.id for ob in obligations]}


@router.get("/obligations/{obligation_id}", response_model=ObligationOut)
def get_obligation(obligation_id: str, reg: ObligationRegistry = Depends(get_registry)):
    try:
        return ObligationOut.from_obligation(reg.get(obligation_id))
    except KeyError:
        raise HTTPException(status_code=404, detail="Obligation not found")


@router.delete("/obligations/{obligation_id}", status_code=204)
def delete_obligation(obligation_id: str, reg: ObligationRegistry = Depends(get_registry)):
    try:
        reg.remove(obligation_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Obligation not found")


@router.post("/groupements/{groupement_id}/etablissements/{etablissement_id}", status_code=201)
def link_etablissement(
    groupement_id: str,
    etablissement_id: str,
    gg: GroupementGraph = Depends(get_hierarchy),
):
    """Attach an établissement to a groupement."""
    try:
        gg.link(groupement_id, etablissement_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"groupement_id": groupement_id, "etablissements": gg.etablissements(groupement_id)}
