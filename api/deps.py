"""
api.deps
========

FastAPI dependency providers.

`get_registry` returns the SQLite‑backed **DBObligationRegistry** so every
request reads the persisted obligation snapshots; tests override it with the
in‑memory ObligationRegistry and a FixedClock.
"""

from functools import lru_cache

from prevhub.clock import Clock, SystemClock
from prevhub.db import create_all
from prevhub.hierarchy import GroupementGraph
from prevhub.registry_db import DBObligationRegistry
from prevhub.settings import Settings, settings


@lru_cache
def get_registry() -> DBObligationRegistry:
    """Singleton DB‑backed registry (persists across requests)."""
    create_all()
    return DBObligationRegistry()


@lru_cache
def get_hierarchy() -> GroupementGraph:
    """Singleton groupement graph (persists across requests)."""
    return GroupementGraph()


@lru_cache
def get_clock() -> Clock:
    """Wall clock; replaced by a FixedClock in tests."""
    return SystemClock()


@lru_cache
def get_settings() -> Settings:
    """Application settings; thresholds for classification and alerts come from here."""
    return settings
