# --- File: app/schemas/leave/__init__.py ---
"""
Leave management schemas package.
"""

from app.schemas.leave.leave_application import (
    LeaveApproveRequest,
    LeaveRejectRequest,
    LeaveRequestCreate,
    LeaveRequestFilter,
    LeaveRequestResponse,
    LeaveRequestUpdate,
    inclusive_days,
)
from app.schemas.leave.leave_balance import LeaveBalanceAllocate, LeaveBalanceResponse
from app.schemas.leave.leave_type import LeaveTypeCreate, LeaveTypeResponse, LeaveTypeUpdate

__all__ = [
    "LeaveApproveRequest",
    "LeaveRejectRequest",
    "LeaveRequestCreate",
    "LeaveRequestFilter",
    "LeaveRequestResponse",
    "LeaveRequestUpdate",
    "inclusive_days",
    "LeaveBalanceAllocate",
    "LeaveBalanceResponse",
    "LeaveTypeCreate",
    "LeaveTypeResponse",
    "LeaveTypeUpdate",
]
