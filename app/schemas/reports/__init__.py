"""
Reporting schemas package.
"""

from app.schemas.reports.attendance_report import (
    AttendanceReport,
    AttendanceReportRow,
    ReportPeriod,
)
from app.schemas.reports.dashboard import DailyAttendance, DashboardCharts, DashboardStats
from app.schemas.reports.headcount_report import HeadcountReport
from app.schemas.reports.leave_report import LeaveReport
from app.schemas.reports.performance_report import PerformanceReport, PerformanceReportRow

__all__ = [
    "AttendanceReport",
    "AttendanceReportRow",
    "ReportPeriod",
    "DailyAttendance",
    "DashboardCharts",
    "DashboardStats",
    "HeadcountReport",
    "LeaveReport",
    "PerformanceReport",
    "PerformanceReportRow",
]
