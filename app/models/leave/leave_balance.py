# --- File: app/models/leave/leave_balance.py ---
"""
Leave balance ledger, one row per (user, leave type, year).
"""

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel

__all__ = ["LeaveBalance"]


class LeaveBalance(BaseModel):
    """
    Allocated, used and remaining days for a user and leave type in a year.

    remaining_days never goes negative; approvals decrement it with a
    conditional update.
    """

    __tablename__ = "leave_balances"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "leave_type_id",
            "year",
            name="uq_leave_balance_user_type_year",
        ),
        CheckConstraint("remaining_days >= 0", name="ck_leave_balance_remaining"),
        CheckConstraint("used_days >= 0", name="ck_leave_balance_used"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    leave_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("leave_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    allocated_days: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    used_days: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    remaining_days: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    leave_type: Mapped["LeaveType"] = relationship("LeaveType", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<LeaveBalance(user_id={self.user_id}, leave_type_id={self.leave_type_id}, "
            f"year={self.year}, remaining={self.remaining_days})>"
        )
