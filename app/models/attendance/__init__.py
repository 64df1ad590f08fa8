"""
Attendance models package.
"""

from app.models.attendance.attendance_record import Attendance, TimeTracking

__all__ = [
    "Attendance",
    "TimeTracking",
]
