# --- File: app/models/leave/leave_type.py ---
"""
Leave type catalog.
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel

__all__ = ["LeaveType"]


class LeaveType(BaseModel):
    """
    Catalog entry for a kind of leave.

    `max_days_per_year` is the default yearly allocation when a balance
    row is first created for a user.
    """

    __tablename__ = "leave_types"
    __table_args__ = (
        CheckConstraint("max_days_per_year >= 0", name="ck_leave_type_max_days"),
    )

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    max_days_per_year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    carry_forward: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<LeaveType(name={self.name}, max_days={self.max_days_per_year})>"
