# --- File: app/schemas/reports/dashboard.py ---
"""
Dashboard card statistics.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = ["DashboardStats", "DailyAttendance", "DashboardCharts"]


class DashboardStats(BaseSchema):
    as_of: Date
    total_employees: int = Field(..., ge=0)
    active_employees: int = Field(..., ge=0)
    present_today: int = Field(..., ge=0)
    pending_leave_requests: int = Field(..., ge=0)
    average_attendance_rate: float = Field(
        ...,
        ge=0,
        le=100,
        description="Present share of this month's attendance records",
    )


class DailyAttendance(BaseSchema):
    date: Date
    present: int = Field(..., ge=0)


class DashboardCharts(BaseSchema):
    """Attendance per day for the seven days ending `as_of`, oldest first."""

    as_of: Date
    weekly_attendance: List[DailyAttendance]
