"""
prevhub.registry_db
===================

SQLite‑backed implementation of the ObligationRegistry public surface.

This adapter wraps the CRUD helpers in :pymod:`prevhub.db` so that any
code expecting the in‑memory ObligationRegistry can switch to a persistent
snapshot store without changing its API calls.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Set

from sqlmodel import Session

from prevhub.db import (
    SessionLocal,
    all_obligations,
    delete_obligation,
    get_obligation,
    upsert_obligation,
)
from prevhub.models import DatedObligation, ObligationKind


class DBObligationRegistry:
    """
    Drop‑in replacement backed by SQLite.

    Methods mirror the in‑memory ObligationRegistry:
    * add(ob) / remove(id)
    * get(id)
    * for_owner(owner_id) / find_by_kind(kind) / owners()
    * iteration / len()
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session = session or SessionLocal()

    # ------------------------------------------------------------------ CRUD
    def add(self, ob: DatedObligation) -> None:
        upsert_obligation(self._session, ob)

    def remove(self, obligation_id: str) -> None:
        if not delete_obligation(self._session, obligation_id):
            raise KeyError(obligation_id)

    def get(self, obligation_id: str) -> DatedObligation:
        ob = get_obligation(self._session, obligation_id)
        if ob is None:
            raise KeyError(obligation_id)
        return ob

    def for_owner(self, owner_id: Optional[str]) -> List[DatedObligation]:
        if owner_id is None:
            return [o for o in all_obligations(self._session) if o.owner_id is None]
        return all_obligations(self._session, owner_id)

    def find_by_kind(self, kind: ObligationKind) -> List[DatedObligation]:
        return [o for o in all_obligations(self._session) if o.kind is kind]

    def owners(self) -> Set[Optional[str]]:
        return {o.owner_id for o in all_obligations(self._session)}

    # ------------------------------------------------------ dunder helpers
    def __iter__(self) -> Iterator[DatedObligation]:
        yield from all_obligations(self._session)

    def __len__(self) -> int:
        return len(all_obligations(self._session))

    # ----------------------------------------------------- context manager
    def __enter__(self) -> "DBObligationRegistry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._session.close()
