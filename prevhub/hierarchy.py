"""
prevhub.hierarchy
=================

Groupement → établissement graph built on NetworkX, used to roll
compliance up from sites to the shopping centre (or network) they belong to.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

import networkx as nx

from .aggregator import summarize
from .classifier import Thresholds
from .models import ComplianceSummary, DatedObligation

logger = logging.getLogger(__name__)


class _Registry(Protocol):
    def for_owner(self, owner_id: Optional[str]) -> List[DatedObligation]: ...


class GroupementGraph:
    """
    Lightweight wrapper around a DiGraph with an edge per membership.

    Example
    -------
    >>> gg = GroupementGraph()
    >>> gg.link("centre-a", "etab-1")
    >>> gg.link("centre-a", "etab-2")
    >>> gg.etablissements("centre-a")
    ['etab-1', 'etab-2']
    """

    def __init__(self) -> None:
        self.g = nx.DiGraph()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def link(self, groupement_id: str, etablissement_id: str) -> None:
        """
        Attach an établissement to a groupement.

        An établissement belongs to at most one groupement; linking it again
        moves it.
        """
        if groupement_id == etablissement_id:
            raise ValueError("a groupement cannot contain itself")
        previous = self.groupement_of(etablissement_id)
        if previous is not None and previous != groupement_id:
            logger.info(f"Moving {etablissement_id} from {previous} to {groupement_id}")
            self.g.remove_edge(previous, etablissement_id)
        self.g.add_edge(groupement_id, etablissement_id)

    def unlink(self, groupement_id: str, etablissement_id: str) -> None:
        """Remove a membership (raise KeyError if missing)."""
        if not self.g.has_edge(groupement_id, etablissement_id):
            raise KeyError((groupement_id, etablissement_id))
        self.g.remove_edge(groupement_id, etablissement_id)

    def etablissements(self, groupement_id: str) -> List[str]:
        """Direct members of *groupement_id*, empty if unknown."""
        if groupement_id not in self.g:
            return []
        return sorted(self.g.successors(groupement_id))

    def groupement_of(self, etablissement_id: str) -> Optional[str]:
        """The groupement holding *etablissement_id*, or ``None``."""
        if etablissement_id not in self.g:
            return None
        parents = list(self.g.predecessors(etablissement_id))
        return parents[0] if parents else None

    def groupements(self) -> List[str]:
        return sorted(n for n in self.g.nodes if self.g.out_degree(n) > 0)

    def members_and_self(self, groupement_id: str) -> List[str]:
        return [groupement_id, *self.etablissements(groupement_id)]

    def rollup(
        self,
        now: Any,
        registry: _Registry,
        groupement_id: str,
        thresholds: Optional[Thresholds] = None,
    ) -> ComplianceSummary:
        """
        Summary over the groupement's own obligations plus those of every
        établissement it contains.
        """
        obligations: List[DatedObligation] = []
        for owner in self.members_and_self(groupement_id):
            obligations.extend(registry.for_owner(owner))
        return summarize(now, obligations, thresholds)
