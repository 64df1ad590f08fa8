# --- File: app/schemas/performance/overview.py ---
from __future__ import annotations

from typing import Dict, Optional

from app.schemas.common.base import BaseSchema

__all__ = ["PerformanceOverview"]


class PerformanceOverview(BaseSchema):
    """Review count, mean overall rating and goal counts per status."""

    total_reviews: int
    average_rating: Optional[float] = None
    goals_by_status: Dict[str, int]
    total_goals: int
