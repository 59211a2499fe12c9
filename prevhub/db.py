"""
prevhub.db
==========

SQLite snapshot store for obligations.

This module exposes:

* ``engine`` – a global SQLModel engine pointing at *prevhub.db*
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables at first run

Only the columns the classifier needs are stored; the hosted database stays
the system of record.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel, create_engine, select

from prevhub.models import Criticality, DatedObligation, ObligationKind, Priority
from prevhub.settings import DB_ECHO, DB_URL

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
engine = create_engine(DB_URL, echo=DB_ECHO)


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802 (factory camel‑case for consistency with FastAPI docs)
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM model that mirrors prevhub.models.DatedObligation
# ---------------------------------------------------------------------------
class ObligationRow(SQLModel, table=True):
    """
    SQLite‑backed representation of a :class:`prevhub.models.DatedObligation`.

    Enums are stored by value so rows stay readable next to the backend's
    own vocabulary (``verification``, ``urgent``, ``critique`` …).
    """

    __tablename__ = "obligations"

    id: str = Field(primary_key=True, index=True)
    kind: str = Field(index=True)
    due_date: Optional[date] = Field(default=None, index=True)
    reference_date: Optional[date] = None
    priority: Optional[str] = None
    criticality: Optional[str] = None
    owner_id: Optional[str] = Field(default=None, index=True)
    title: Optional[str] = None

    # ---------------------------------------------------------------------
    # Converters
    # ---------------------------------------------------------------------
    @classmethod
    def from_obligation(cls, ob: DatedObligation) -> "ObligationRow":
        """Create a DB row from an in‑memory obligation."""
        return cls(
            id=str(ob.id),
            kind=ob.kind.value,
            due_date=ob.due_date,
            reference_date=ob.reference_date,
            priority=ob.priority.value if ob.priority else None,
            criticality=ob.criticality.value if ob.criticality else None,
            owner_id=ob.owner_id,
            title=ob.title,
        )

    def to_obligation(self) -> DatedObligation:
        """Convert the DB row back into a plain DatedObligation."""
        return DatedObligation(
            id=self.id,
            due_date=self.due_date,
            kind=ObligationKind(self.kind),
            reference_date=self.reference_date,
            priority=Priority(self.priority) if self.priority else None,
            criticality=Criticality(self.criticality) if self.criticality else None,
            owner_id=self.owner_id,
            title=self.title,
        )


# ---------------------------------------------------------------------------
# Convenience CRUD helpers
# ---------------------------------------------------------------------------
def upsert_obligation(s: Session, ob: DatedObligation) -> None:
    """Insert or update an obligation row."""
    s.merge(ObligationRow.from_obligation(ob))
    s.commit()


def delete_obligation(s: Session, obligation_id: str) -> bool:
    """Delete a row; return False if it was not there."""
    row = s.get(ObligationRow, str(obligation_id))
    if row is None:
        return False
    s.delete(row)
    s.commit()
    return True


def get_obligation(s: Session, obligation_id: str) -> DatedObligation | None:
    """Return an obligation by id or *None* if missing."""
    row = s.get(ObligationRow, str(obligation_id))
    return row.to_obligation() if row else None


def all_obligations(s: Session, owner_id: Optional[str] = None) -> List[DatedObligation]:
    """Return every obligation, optionally restricted to one owner."""
    stmt = select(ObligationRow)
    if owner_id is not None:
        stmt = stmt.where(ObligationRow.owner_id == owner_id)
    rows = s.exec(stmt.order_by(ObligationRow.id)).all()
    return [row.to_obligation() for row in rows]


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create all tables for imported SQLModel subclasses, including ObligationRow."""
    SQLModel.metadata.create_all(bind or engine)
    logger.debug("obligation tables created")


if __name__ == "__main__":
    """
    First‑run bootstrap.

    $ python -m prevhub.db --create
    """
    import argparse

    parser = argparse.ArgumentParser(prog="python -m prevhub.db")
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    if args.create:
        create_all()
        print("✅ prevhub.db schema initialised")
