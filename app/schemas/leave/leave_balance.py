# --- File: app/schemas/leave/leave_balance.py ---
"""
Leave balance schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "LeaveBalanceResponse",
    "LeaveBalanceAllocate",
]


class LeaveBalanceResponse(BaseSchema):
    id: str
    user_id: str
    leave_type_id: str
    leave_type_name: Optional[str] = None
    year: int
    allocated_days: float
    used_days: float
    remaining_days: float

    @classmethod
    def from_balance(cls, balance) -> "LeaveBalanceResponse":
        response = cls.model_validate(balance)
        response.leave_type_name = balance.leave_type.name if balance.leave_type else None
        return response


class LeaveBalanceAllocate(BaseCreateSchema):
    """
    Allocate or adjust a balance.

    Remaining days are recomputed as allocated minus already used.
    """

    user_id: str
    leave_type_id: str
    year: int = Field(..., ge=2000, le=2100)
    allocated_days: float = Field(..., ge=0, le=366)
