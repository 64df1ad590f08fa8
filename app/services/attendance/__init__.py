"""
Attendance service layer.
"""

from app.services.attendance.attendance_service import (
    AttendanceService,
    attendance_rate,
    calculate_hours,
)
from app.services.attendance.time_tracking_service import TimeTrackingService

__all__ = [
    "AttendanceService",
    "TimeTrackingService",
    "attendance_rate",
    "calculate_hours",
]
