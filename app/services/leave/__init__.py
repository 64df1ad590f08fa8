"""
Leave Service Layer

- LeaveRequestService: submission, edits, approve/reject/cancel
- LeaveBalanceService: balances per user, leave type and year
- LeaveTypeService: leave type configuration
"""

from app.services.leave.leave_balance_service import LeaveBalanceService, get_or_allocate_balance
from app.services.leave.leave_request_service import LeaveRequestService
from app.services.leave.leave_type_service import LeaveTypeService

__all__ = [
    "LeaveBalanceService",
    "LeaveRequestService",
    "LeaveTypeService",
    "get_or_allocate_balance",
]
