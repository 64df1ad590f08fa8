"""
Attendance schemas package.
"""

from app.schemas.attendance.attendance_filters import AttendanceFilter
from app.schemas.attendance.attendance_record import (
    AttendanceDayStatus,
    AttendanceResponse,
    AttendanceSummary,
    ClockInRequest,
    DayState,
)
from app.schemas.attendance.time_tracking import (
    TimeEntryCreate,
    TimeEntryResponse,
    TimeEntryUpdate,
)

__all__ = [
    "AttendanceFilter",
    "AttendanceDayStatus",
    "AttendanceResponse",
    "AttendanceSummary",
    "ClockInRequest",
    "DayState",
    "TimeEntryCreate",
    "TimeEntryResponse",
    "TimeEntryUpdate",
]
