"""
Attendance Record Repository

Daily attendance rows keyed by (user, work date), listings and the
aggregates behind summaries and reports.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.models.attendance import Attendance
from app.models.base.enums import AttendanceStatus
from app.models.user import Department, Profile, User
from app.repositories.base.base_repository import BaseRepository
from app.schemas.attendance.attendance_filters import AttendanceFilter


class AttendanceRepository(BaseRepository[Attendance]):
    """
    Attendance repository.

    The unique constraint on (user_id, work_date) is the arbiter for
    concurrent clock-ins; `add` lets the IntegrityError through.
    """

    def __init__(self, session: Session):
        super().__init__(Attendance, session)

    # ==================== Lookups ====================

    def find_for_day(self, user_id: str, work_date: date) -> Optional[Attendance]:
        stmt = select(Attendance).where(
            Attendance.user_id == user_id,
            Attendance.work_date == work_date,
        )
        return self.session.scalars(stmt).unique().first()

    def filtered_stmt(self, filters: AttendanceFilter) -> Select:
        """Listing query, newest work date first."""
        stmt = select(Attendance)
        if filters.user_id:
            stmt = stmt.where(Attendance.user_id == filters.user_id)
        if filters.status:
            stmt = stmt.where(Attendance.status == filters.status)
        if filters.start_date:
            stmt = stmt.where(Attendance.work_date >= filters.start_date)
        if filters.end_date:
            stmt = stmt.where(Attendance.work_date <= filters.end_date)
        return stmt.order_by(Attendance.work_date.desc(), Attendance.clock_in.desc())

    def find_by_day(self, work_date: date) -> List[Attendance]:
        stmt = (
            select(Attendance)
            .where(Attendance.work_date == work_date)
            .order_by(Attendance.clock_in)
        )
        return list(self.session.scalars(stmt).unique().all())

    def find_for_user_range(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Attendance]:
        return list(
            self.session.scalars(
                self.filtered_stmt(
                    AttendanceFilter(user_id=user_id, start_date=start_date, end_date=end_date)
                )
            ).unique().all()
        )

    # ==================== Aggregates ====================

    def aggregate_for_user(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> Tuple[int, int, float]:
        """
        Return (record count, PRESENT count, summed hours) in the range.
        """
        stmt = select(
            func.count(Attendance.id),
            func.coalesce(
                func.sum(case((Attendance.status == AttendanceStatus.PRESENT, 1), else_=0)),
                0,
            ),
            func.coalesce(func.sum(Attendance.total_hours), 0.0),
        ).where(
            Attendance.user_id == user_id,
            Attendance.work_date >= start_date,
            Attendance.work_date <= end_date,
        )
        total, present, hours = self.session.execute(stmt).one()
        return int(total or 0), int(present or 0), float(hours or 0.0)

    def aggregate_range(self, start_date: date, end_date: date) -> Tuple[int, int]:
        """(record count, PRESENT count) across all users in the range."""
        stmt = select(
            func.count(Attendance.id),
            func.coalesce(
                func.sum(case((Attendance.status == AttendanceStatus.PRESENT, 1), else_=0)),
                0,
            ),
        ).where(
            Attendance.work_date >= start_date,
            Attendance.work_date <= end_date,
        )
        total, present = self.session.execute(stmt).one()
        return int(total or 0), int(present or 0)

    def count_present_on(self, work_date: date) -> int:
        return self.count(
            Attendance.work_date == work_date,
            Attendance.clock_in.is_not(None),
        )

    def count_present_by_day(self, start_date: date, end_date: date) -> Dict[date, int]:
        """Clocked-in records per work date; days without any are absent."""
        stmt = (
            select(Attendance.work_date, func.count(Attendance.id))
            .where(
                Attendance.work_date >= start_date,
                Attendance.work_date <= end_date,
                Attendance.clock_in.is_not(None),
            )
            .group_by(Attendance.work_date)
        )
        return {work_date: int(count) for work_date, count in self.session.execute(stmt)}

    def report_rows(
        self,
        start_date: date,
        end_date: date,
        department_id: Optional[str] = None,
    ) -> List[tuple]:
        """
        Per-user rows for the attendance report:
        (user_id, employee_id, first_name, last_name, department, days,
        present, late, hours).
        """
        present = func.sum(case((Attendance.status == AttendanceStatus.PRESENT, 1), else_=0))
        late = func.sum(case((Attendance.status == AttendanceStatus.LATE, 1), else_=0))
        stmt = (
            select(
                User.id,
                User.employee_id,
                Profile.first_name,
                Profile.last_name,
                Department.name,
                func.count(Attendance.id),
                func.coalesce(present, 0),
                func.coalesce(late, 0),
                func.coalesce(func.sum(Attendance.total_hours), 0.0),
            )
            .select_from(Attendance)
            .join(User, Attendance.user_id == User.id)
            .outerjoin(Profile, Profile.user_id == User.id)
            .outerjoin(Department, User.department_id == Department.id)
            .where(
                Attendance.work_date >= start_date,
                Attendance.work_date <= end_date,
            )
            .group_by(
                User.id,
                User.employee_id,
                Profile.first_name,
                Profile.last_name,
                Department.name,
            )
            .order_by(User.employee_id)
        )
        if department_id:
            stmt = stmt.where(User.department_id == department_id)
        return [tuple(row) for row in self.session.execute(stmt)]
