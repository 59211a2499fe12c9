"""
prevhub.registry
================

An in‑memory registry that stores :class:`prevhub.models.DatedObligation`
snapshots keyed by their record id.

This module is intentionally simple (only the standard library) so that
it can be unit‑tested without external dependencies or a database.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Set

from .models import DatedObligation, ObligationKind


class ObligationRegistry:
    """
    Dictionary‑backed registry of obligations.

    Example
    -------
    >>> from datetime import date
    >>> from prevhub.models import DatedObligation, ObligationKind
    >>> reg = ObligationRegistry()
    >>> reg.add(DatedObligation("v1", date(2025, 3, 1), ObligationKind.VERIFICATION, owner_id="etab-1"))
    >>> [o.id for o in reg.for_owner("etab-1")]
    ['v1']
    """

    def __init__(self) -> None:
        self._obligations: Dict[str, DatedObligation] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(self, ob: DatedObligation) -> None:
        """Insert or overwrite an obligation (rescheduling replaces the snapshot)."""
        self._obligations[str(ob.id)] = ob

    def remove(self, obligation_id: str) -> None:
        """Drop an obligation whose record was deleted (raise KeyError if absent)."""
        del self._obligations[str(obligation_id)]

    def get(self, obligation_id: str) -> DatedObligation:
        """Retrieve by id (raise KeyError if not present)."""
        return self._obligations[str(obligation_id)]

    def for_owner(self, owner_id: Optional[str]) -> List[DatedObligation]:
        """All obligations belonging to one établissement or groupement."""
        return [o for o in self._obligations.values() if o.owner_id == owner_id]

    def find_by_kind(self, kind: ObligationKind) -> List[DatedObligation]:
        return [o for o in self._obligations.values() if o.kind is kind]

    def owners(self) -> Set[Optional[str]]:
        return {o.owner_id for o in self._obligations.values()}

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[DatedObligation]:
        return iter(self._obligations.values())

    def __len__(self) -> int:
        return len(self._obligations)
