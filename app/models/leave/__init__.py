"""
Leave models package.
"""

from app.models.leave.leave_application import LeaveRequest
from app.models.leave.leave_balance import LeaveBalance
from app.models.leave.leave_type import LeaveType

__all__ = [
    "LeaveBalance",
    "LeaveRequest",
    "LeaveType",
]
