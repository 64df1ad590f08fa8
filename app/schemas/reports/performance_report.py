"""
Performance report over a date range.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from app.models.base.enums import ReviewStatus
from app.schemas.common.base import BaseSchema

__all__ = ["PerformanceReportRow", "PerformanceReport"]


class PerformanceReportRow(BaseSchema):
    review_id: str
    user_id: str
    employee_name: Optional[str] = None
    department: Optional[str] = None
    reviewer_name: Optional[str] = None
    review_period_start: Date
    review_period_end: Date
    overall_rating: Optional[int] = None
    status: ReviewStatus


class PerformanceReport(BaseSchema):
    """Reviews whose period starts inside the window."""

    start_date: Date
    end_date: Date
    total_reviews: int
    completed_reviews: int
    average_rating: Optional[float] = None
    rows: List[PerformanceReportRow]
