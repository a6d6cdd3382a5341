"""Consolidation configuration and run report."""

from pydantic import BaseModel


class ConsolidationConfig(BaseModel):
    """Configuration for the sleep-time consolidation job."""

    interval_seconds: int = 3600
    min_age_hours: float = 24
    importance_threshold: float = 0.7
    activity_decay: float = 0.2


class ConsolidationReport(BaseModel):
    """Outcome of one consolidation run."""

    ran: bool                               # False when the cycle was awake
    examined: int = 0
    consolidated: int = 0
    discarded: int = 0
