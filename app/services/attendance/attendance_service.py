"""
Attendance service: the per-day clock state machine, breaks, listings
and monthly summaries.

Per user and calendar day the state moves NOT_CLOCKED_IN -> CLOCKED_IN
-> CLOCKED_OUT and never skips or reverses. The calendar day is the date
of the event in the configured timezone; timestamps are stored in UTC.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.attendance import Attendance
from app.models.base.enums import AttendanceStatus
from app.models.base.mixins import ensure_utc
from app.repositories.attendance import AttendanceRepository
from app.schemas.attendance.attendance_filters import AttendanceFilter
from app.schemas.attendance.attendance_record import (
    AttendanceDayStatus,
    AttendanceResponse,
    AttendanceSummary,
    ClockInRequest,
    DayState,
)
from app.schemas.common.pagination import PaginatedResponse, PaginationParams
from app.services.common import errors
from app.services.common.pagination import paginate
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


def calculate_hours(clock_in: datetime, clock_out: datetime, break_minutes: int) -> float:
    """
    Worked hours: elapsed time minus breaks, clamped at 0, rounded to 2 places.

    Example:
        09:00 -> 17:30 with a 30 minute break gives 8.0
    """
    raw_hours = (ensure_utc(clock_out) - ensure_utc(clock_in)).total_seconds() / 3600
    return round(max(0.0, raw_hours - break_minutes / 60), 2)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, never negative."""
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return max(0, int(seconds // 60))


def attendance_rate(present_days: int, total_days: int) -> float:
    if total_days == 0:
        return 0.0
    return round(present_days / total_days * 100, 2)


class AttendanceService:
    """
    Clock-in/out and break tracking.

    Every mutating call accepts an optional `now` so callers and tests
    can pin the clock; it defaults to the current UTC time.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._session_factory = session_factory
        self._tz = tz

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_repo(self, uow: UnitOfWork) -> AttendanceRepository:
        return uow.get_repo(AttendanceRepository)

    def _now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(timezone.utc)
        return ensure_utc(now).astimezone(timezone.utc)

    def work_date(self, now: datetime) -> date:
        """Calendar day of an instant in the configured timezone."""
        return ensure_utc(now).astimezone(self._tz).date()

    def _open_record(self, repo: AttendanceRepository, user_id: str, day: date) -> Attendance:
        """Today's record in the CLOCKED_IN state, or the matching conflict."""
        record = repo.find_for_day(user_id, day)
        if record is None or record.clock_in is None:
            raise errors.NoClockInRecord()
        if record.clock_out is not None:
            raise errors.AlreadyClockedOut()
        return record

    # ------------------------------------------------------------------ #
    # Clock state machine
    # ------------------------------------------------------------------ #
    def clock_in(
        self,
        user_id: str,
        data: Optional[ClockInRequest] = None,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceResponse:
        """
        Start the day.

        A concurrent insert for the same day trips the unique constraint
        and surfaces as AlreadyClockedIn, like the sequential case.
        """
        stamp = self._now(now)
        day = self.work_date(stamp)
        data = data or ClockInRequest()

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            record = repo.find_for_day(user_id, day)

            if record is not None and record.clock_in is not None:
                raise errors.AlreadyClockedIn()

            if record is None:
                record = Attendance(
                    user_id=user_id,
                    work_date=day,
                    clock_in=stamp,
                    status=AttendanceStatus.PRESENT,
                    break_duration=0,
                    location=data.location,
                    notes=data.notes,
                )
                try:
                    repo.add(record)
                except IntegrityError as exc:
                    logger.warning(
                        "Concurrent clock-in rejected",
                        extra={"user_id": user_id, "work_date": day.isoformat()},
                    )
                    raise errors.AlreadyClockedIn() from exc
            else:
                repo.update(
                    record,
                    {
                        "clock_in": stamp,
                        "status": AttendanceStatus.PRESENT,
                        "location": data.location,
                        "notes": data.notes,
                    },
                )

            response = AttendanceResponse.model_validate(record)

        logger.info("Clocked in", extra={"user_id": user_id, "work_date": day.isoformat()})
        return response

    def clock_out(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceResponse:
        """
        Finish the day and compute worked hours.

        An open break is closed at `now` first.
        """
        stamp = self._now(now)
        day = self.work_date(stamp)

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            record = self._open_record(repo, user_id, day)

            break_minutes = record.break_duration or 0
            if record.on_break:
                break_minutes += elapsed_minutes(record.break_started_utc, stamp)

            repo.update(
                record,
                {
                    "clock_out": stamp,
                    "break_started_at": None,
                    "break_duration": break_minutes,
                    "total_hours": calculate_hours(record.clock_in_utc, stamp, break_minutes),
                },
            )
            response = AttendanceResponse.model_validate(record)

        logger.info(
            "Clocked out",
            extra={"user_id": user_id, "total_hours": response.total_hours},
        )
        return response

    def start_break(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceResponse:
        stamp = self._now(now)

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            record = self._open_record(repo, user_id, self.work_date(stamp))
            if record.on_break:
                raise errors.BreakStateError("Break already started")

            repo.update(record, {"break_started_at": stamp})
            return AttendanceResponse.model_validate(record)

    def end_break(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceResponse:
        """Close the open break, adding its whole minutes to the day's total."""
        stamp = self._now(now)

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            record = self._open_record(repo, user_id, self.work_date(stamp))
            if not record.on_break:
                raise errors.BreakStateError("No active break found")

            repo.update(
                record,
                {
                    "break_duration": (record.break_duration or 0)
                    + elapsed_minutes(record.break_started_utc, stamp),
                    "break_started_at": None,
                },
            )
            return AttendanceResponse.model_validate(record)

    def status(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceDayStatus:
        day = self.work_date(self._now(now))

        with UnitOfWork(self._session_factory) as uow:
            record = self._get_repo(uow).find_for_day(user_id, day)

            if record is None or record.clock_in is None:
                state = DayState.NOT_CLOCKED_IN
            elif record.clock_out is None:
                state = DayState.CLOCKED_IN
            else:
                state = DayState.CLOCKED_OUT

            return AttendanceDayStatus(
                work_date=day,
                state=state,
                on_break=bool(record and record.on_break),
                record=AttendanceResponse.model_validate(record) if record else None,
            )

    # ------------------------------------------------------------------ #
    # Listings
    # ------------------------------------------------------------------ #
    def list_records(
        self,
        filters: AttendanceFilter,
        params: PaginationParams,
    ) -> PaginatedResponse[AttendanceResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            items, total = repo.paginate(repo.filtered_stmt(filters), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=AttendanceResponse.model_validate,
            )

    def records_for_day(
        self,
        *,
        user_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[AttendanceResponse]:
        """Today's records, optionally for one user only."""
        day = self.work_date(self._now(now))

        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            if user_id:
                record = repo.find_for_day(user_id, day)
                records = [record] if record else []
            else:
                records = repo.find_by_day(day)
            return [AttendanceResponse.model_validate(r) for r in records]

    def user_records(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AttendanceResponse]:
        with UnitOfWork(self._session_factory) as uow:
            records = self._get_repo(uow).find_for_user_range(user_id, start_date, end_date)
            return [AttendanceResponse.model_validate(r) for r in records]

    # ------------------------------------------------------------------ #
    # Aggregation
    # ------------------------------------------------------------------ #
    def monthly_summary(
        self,
        user_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceSummary:
        """
        Summary for one month, defaulting to the current one.

        Raises:
            ValidationError: If the month is outside 1..12
        """
        today = self.work_date(self._now(now))
        year = year or today.year
        month = month or today.month
        if not 1 <= month <= 12:
            raise errors.ValidationError("Month must be between 1 and 12", field="month")

        start = date(year, month, 1)
        end = date(year, month, calendar.monthrange(year, month)[1])

        with UnitOfWork(self._session_factory) as uow:
            total, present, hours = self._get_repo(uow).aggregate_for_user(user_id, start, end)

        return AttendanceSummary(
            user_id=user_id,
            year=year,
            month=month,
            total_days=total,
            present_days=present,
            absent_days=total - present,
            total_hours=round(hours, 2),
            attendance_rate=attendance_rate(present, total),
        )
