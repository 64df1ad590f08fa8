"""
Attendance repositories.
"""
from app.repositories.attendance.attendance_record_repository import AttendanceRepository
from app.repositories.attendance.time_tracking_repository import TimeTrackingRepository

__all__ = [
    "AttendanceRepository",
    "TimeTrackingRepository",
]
