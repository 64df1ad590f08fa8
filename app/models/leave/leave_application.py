# --- File: app/models/leave/leave_application.py ---
"""
Leave request state machine entity.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import LeaveStatus

__all__ = ["LeaveRequest"]


class LeaveRequest(BaseModel):
    """
    Leave request.

    PENDING moves to APPROVED, REJECTED or CANCELLED; those are terminal.
    days_requested counts both end dates.
    """

    __tablename__ = "leave_requests"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_leave_request_date_order"),
        CheckConstraint("days_requested > 0", name="ck_leave_request_days"),
        Index("idx_leave_request_user_status", "user_id", "status"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    leave_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("leave_types.id"),
        nullable=False,
        index=True,
    )

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_requested: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[LeaveStatus] = mapped_column(
        Enum(LeaveStatus, name="leave_status_enum"),
        nullable=False,
        default=LeaveStatus.PENDING,
        index=True,
    )

    approved_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id], lazy="joined")
    approver: Mapped[Optional["User"]] = relationship(
        "User",
        foreign_keys=[approved_by],
        lazy="select",
    )
    leave_type: Mapped["LeaveType"] = relationship("LeaveType", lazy="joined")

    @property
    def balance_year(self) -> int:
        return self.start_date.year

    def __repr__(self) -> str:
        return (
            f"<LeaveRequest(id={self.id}, user_id={self.user_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status.value})>"
        )
