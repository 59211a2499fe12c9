"""
prevhub.settings
================

Configuration settings for prevhub.

Deadline thresholds are policy inferred from the dashboard pages and the
daily alert job; they live here so they can be tuned per deployment
through environment variables (prefix ``PREVHUB_``) or a ``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("PREVHUB_DB_FILE", BASE_DIR / "prevhub.db")
DB_URL = f"sqlite:///{DB_FILE}"
DB_ECHO = os.environ.get("PREVHUB_DB_ECHO", "False").lower() == "true"

# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("PREVHUB_LOG_LEVEL", "INFO").upper()


# ---------------------------------------------------------------------------
# Pydantic settings model for deadline policy
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Threshold policy, loaded from environment variables."""

    # Classification windows (days before the due date counted as "échéance proche")
    verification_due_soon_days: int = Field(
        60, ge=0, description="Verification due within fewer than N days is due soon"
    )
    prescription_due_soon_days: int = Field(
        7, ge=0, description="Prescription due within N days (inclusive) is due soon"
    )
    commission_due_soon_days: int = Field(
        45, ge=0, description="Commission within N days (inclusive) must be prepared"
    )

    # Alert cut-offs (inclusive, days remaining)
    prescription_alert_critique: int = Field(0, description="Prescription critical alert")
    prescription_alert_urgent: int = Field(7, description="Prescription urgent alert")
    prescription_alert_attention: int = Field(30, description="Prescription attention alert")
    commission_alert_urgent: int = Field(15, description="Commission urgent alert")
    commission_alert_attention: int = Field(45, description="Commission attention alert")
    verification_alert_critique: int = Field(0, description="Verification critical alert")
    verification_alert_urgent: int = Field(30, description="Verification urgent alert")
    verification_alert_attention: int = Field(90, description="Verification attention alert")

    class Config:
        """Configuration for the settings model."""
        env_prefix = "PREVHUB_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Initialize settings
settings = Settings()
