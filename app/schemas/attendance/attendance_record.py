# --- File: app/schemas/attendance/attendance_record.py ---
"""
Attendance record schemas: clock-in payload, record views, day status
and the monthly summary.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from app.models.base.enums import AttendanceStatus
from app.models.base.mixins import ensure_utc
from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "DayState",
    "ClockInRequest",
    "AttendanceResponse",
    "AttendanceDayStatus",
    "AttendanceSummary",
]


class DayState(str, Enum):
    """Per-user, per-day clock state."""

    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
    CLOCKED_IN = "CLOCKED_IN"
    CLOCKED_OUT = "CLOCKED_OUT"


class ClockInRequest(BaseCreateSchema):
    location: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=1000)


class AttendanceResponse(BaseSchema):
    id: str
    user_id: str
    work_date: Date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_started_at: Optional[datetime] = None
    break_duration: int = Field(default=0, description="Break minutes")
    total_hours: Optional[float] = None
    status: AttendanceStatus
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("clock_in", "clock_out", "break_started_at")
    @classmethod
    def attach_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)


class AttendanceDayStatus(BaseSchema):
    """Clock state of the caller for the current day."""

    work_date: Date
    state: DayState
    on_break: bool = False
    record: Optional[AttendanceResponse] = None


class AttendanceSummary(BaseSchema):
    """
    Monthly attendance aggregate.

    absent_days = total_days - present_days; attendance_rate is a
    percentage rounded to 2 places and 0 when there are no records.
    """

    user_id: str
    year: int
    month: int = Field(..., ge=1, le=12)
    total_days: int
    present_days: int
    absent_days: int
    total_hours: float
    attendance_rate: float
