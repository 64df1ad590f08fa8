"""
Read-only reporting over attendance, leave, performance and headcount.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.models.base.enums import LeaveStatus, ReviewStatus, UserStatus
from app.repositories.attendance import AttendanceRepository
from app.repositories.leave import LeaveRequestRepository
from app.repositories.performance import PerformanceReviewRepository
from app.repositories.user import UserRepository
from app.schemas.reports.attendance_report import (
    AttendanceReport,
    AttendanceReportRow,
    ReportPeriod,
)
from app.schemas.reports.dashboard import DailyAttendance, DashboardCharts, DashboardStats
from app.schemas.reports.headcount_report import HeadcountReport
from app.schemas.reports.leave_report import LeaveReport
from app.schemas.reports.performance_report import PerformanceReport, PerformanceReportRow
from app.services.attendance.attendance_service import attendance_rate
from app.services.common.unit_of_work import UnitOfWork

CHART_DAYS = 7


class ReportService:
    """Aggregations only; nothing here writes."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._session_factory = session_factory
        self._tz = tz

    def attendance_report(self, period: ReportPeriod) -> AttendanceReport:
        with UnitOfWork(self._session_factory) as uow:
            raw_rows = uow.get_repo(AttendanceRepository).report_rows(
                period.start_date,
                period.end_date,
                period.department_id,
            )

        rows = []
        for user_id, employee_id, first, last, department, days, present, late, hours in raw_rows:
            name = f"{first} {last}".strip() if first or last else employee_id
            rows.append(
                AttendanceReportRow(
                    user_id=user_id,
                    employee_id=employee_id,
                    employee_name=name,
                    department=department,
                    total_days=int(days),
                    present_days=int(present),
                    late_days=int(late),
                    total_hours=round(float(hours), 2),
                    attendance_rate=attendance_rate(int(present), int(days)),
                )
            )

        return AttendanceReport(
            start_date=period.start_date,
            end_date=period.end_date,
            total_records=sum(r.total_days for r in rows),
            present_records=sum(r.present_days for r in rows),
            late_records=sum(r.late_days for r in rows),
            total_hours=round(sum(r.total_hours for r in rows), 2),
            rows=rows,
        )

    def leave_report(self, period: ReportPeriod) -> LeaveReport:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(LeaveRequestRepository)
            by_status = repo.count_by_status(
                start_date=period.start_date,
                end_date=period.end_date,
            )
            by_type = repo.count_by_type(period.start_date, period.end_date)
            approved_days = repo.approved_days(period.start_date, period.end_date)

        return LeaveReport(
            start_date=period.start_date,
            end_date=period.end_date,
            total_requests=sum(by_status.values()),
            by_status=by_status,
            by_type=by_type,
            total_approved_days=approved_days,
        )

    def headcount(self) -> HeadcountReport:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(UserRepository)
            by_status = repo.count_by_status()
            by_department = repo.count_by_department()

        return HeadcountReport(
            total_employees=sum(by_status.values()),
            by_department=by_department,
            by_status=by_status,
        )

    def dashboard_stats(self, *, now: Optional[datetime] = None) -> DashboardStats:
        today = (now or datetime.now(timezone.utc)).astimezone(self._tz).date()
        month_start = date(today.year, today.month, 1)
        month_end = date(today.year, today.month, calendar.monthrange(today.year, today.month)[1])

        with UnitOfWork(self._session_factory) as uow:
            by_status = uow.get_repo(UserRepository).count_by_status()
            attendance = uow.get_repo(AttendanceRepository)
            present_today = attendance.count_present_on(today)
            month_total, month_present = attendance.aggregate_range(month_start, month_end)
            pending = uow.get_repo(LeaveRequestRepository).count_by_status()[
                LeaveStatus.PENDING.value
            ]

        return DashboardStats(
            as_of=today,
            total_employees=sum(by_status.values()),
            active_employees=by_status.get(UserStatus.ACTIVE.value, 0),
            present_today=present_today,
            pending_leave_requests=pending,
            average_attendance_rate=attendance_rate(month_present, month_total),
        )

    def performance_report(self, period: ReportPeriod) -> PerformanceReport:
        with UnitOfWork(self._session_factory) as uow:
            reviews = uow.get_repo(PerformanceReviewRepository).in_period(
                period.start_date,
                period.end_date,
                period.department_id,
            )
            rows = [
                PerformanceReportRow(
                    review_id=review.id,
                    user_id=review.user_id,
                    employee_name=review.employee.full_name if review.employee else None,
                    department=(
                        review.employee.department.name
                        if review.employee and review.employee.department
                        else None
                    ),
                    reviewer_name=review.reviewer.full_name if review.reviewer else None,
                    review_period_start=review.review_period_start,
                    review_period_end=review.review_period_end,
                    overall_rating=review.overall_rating,
                    status=review.status,
                )
                for review in reviews
            ]

        ratings = [r.overall_rating for r in rows if r.overall_rating is not None]
        return PerformanceReport(
            start_date=period.start_date,
            end_date=period.end_date,
            total_reviews=len(rows),
            completed_reviews=sum(1 for r in rows if r.status == ReviewStatus.COMPLETED),
            average_rating=round(sum(ratings) / len(ratings), 2) if ratings else None,
            rows=rows,
        )

    def dashboard_charts(self, *, now: Optional[datetime] = None) -> DashboardCharts:
        today = (now or datetime.now(timezone.utc)).astimezone(self._tz).date()
        days = [today - timedelta(days=offset) for offset in range(CHART_DAYS - 1, -1, -1)]

        with UnitOfWork(self._session_factory) as uow:
            counts = uow.get_repo(AttendanceRepository).count_present_by_day(days[0], today)

        return DashboardCharts(
            as_of=today,
            weekly_attendance=[
                DailyAttendance(date=day, present=counts.get(day, 0)) for day in days
            ],
        )
