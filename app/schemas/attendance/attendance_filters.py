# --- File: app/schemas/attendance/attendance_filters.py ---
"""
Attendance listing filter.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.models.base.enums import AttendanceStatus
from app.schemas.common.filters import DateRangeFilter

__all__ = ["AttendanceFilter"]


class AttendanceFilter(DateRangeFilter):
    """Optional user, status and inclusive date range."""

    user_id: Optional[str] = Field(default=None, description="Restrict to one user")
    status: Optional[AttendanceStatus] = None
