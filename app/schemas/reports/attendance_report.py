# --- File: app/schemas/reports/attendance_report.py ---
"""
Attendance report over a date range.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import Field, model_validator

from app.schemas.common.base import BaseFilterSchema, BaseSchema

__all__ = [
    "ReportPeriod",
    "AttendanceReportRow",
    "AttendanceReport",
]


class ReportPeriod(BaseFilterSchema):
    """Inclusive reporting window with an optional department restriction."""

    start_date: Date
    end_date: Date
    department_id: Optional[str] = None

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be after or equal to start_date")
        return self


class AttendanceReportRow(BaseSchema):
    user_id: str
    employee_id: str
    employee_name: str
    department: Optional[str] = None
    total_days: int
    present_days: int
    late_days: int
    total_hours: float
    attendance_rate: float


class AttendanceReport(BaseSchema):
    start_date: Date
    end_date: Date
    total_records: int = Field(..., ge=0)
    present_records: int = Field(..., ge=0)
    late_records: int = Field(..., ge=0)
    total_hours: float
    rows: List[AttendanceReportRow]
