"""
Leave repositories.
"""
from app.repositories.leave.leave_application_repository import LeaveRequestRepository
from app.repositories.leave.leave_balance_repository import LeaveBalanceRepository
from app.repositories.leave.leave_type_repository import LeaveTypeRepository

__all__ = [
    "LeaveBalanceRepository",
    "LeaveRequestRepository",
    "LeaveTypeRepository",
]
