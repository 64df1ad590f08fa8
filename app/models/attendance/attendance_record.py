# --- File: app/models/attendance/attendance_record.py ---
"""
Attendance models: one record per user per calendar day, plus free-form
time tracking entries.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import AttendanceStatus
from app.models.base.mixins import ensure_utc

__all__ = [
    "Attendance",
    "TimeTracking",
]


class Attendance(BaseModel):
    """
    Daily attendance record.

    The (user_id, work_date) pair is unique; a row is created on the first
    clock-in of the day and completed on clock-out.
    """

    __tablename__ = "attendance_records"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    work_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )

    clock_in: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    clock_out: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    break_started_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Start of the currently open break, if any",
    )
    break_duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Accumulated break minutes",
    )
    total_hours: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
    )
    status: Mapped[AttendanceStatus] = mapped_column(
        Enum(AttendanceStatus, name="attendance_status_enum"),
        nullable=False,
        default=AttendanceStatus.PRESENT,
        index=True,
    )

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "work_date",
            name="uq_attendance_user_work_date",
        ),
        CheckConstraint(
            "break_duration >= 0",
            name="ck_attendance_break_duration",
        ),
        Index(
            "idx_attendance_status_date",
            "status",
            "work_date",
        ),
    )

    @property
    def clock_in_utc(self) -> Optional[datetime]:
        return ensure_utc(self.clock_in)

    @property
    def clock_out_utc(self) -> Optional[datetime]:
        return ensure_utc(self.clock_out)

    @property
    def break_started_utc(self) -> Optional[datetime]:
        return ensure_utc(self.break_started_at)

    @property
    def on_break(self) -> bool:
        return self.break_started_at is not None

    def __repr__(self) -> str:
        return (
            f"<Attendance(id={self.id}, user_id={self.user_id}, "
            f"date={self.work_date}, status={self.status.value})>"
        )


class TimeTracking(BaseModel):
    """Free-form time entry owned by a user."""

    __tablename__ = "time_tracking_entries"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    task_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    end_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    billable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def hours(self) -> Optional[float]:
        if self.end_time is None:
            return None
        delta = ensure_utc(self.end_time) - ensure_utc(self.start_time)
        return round(delta.total_seconds() / 3600, 2)
