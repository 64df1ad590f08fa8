# models/__init__.py
"""
ORM models. Importing this package registers every table on `Base.metadata`.
"""
from .base import Base, BaseModel
from .user import Department, Profile, Role, User
from .attendance import Attendance, TimeTracking
from .leave import LeaveBalance, LeaveRequest, LeaveType
from .performance import Goal, PerformanceReview
from .recruitment import Application, Candidate, JobPosting

__all__ = [
    "Base",
    "BaseModel",
    "Department",
    "Profile",
    "Role",
    "User",
    "Attendance",
    "TimeTracking",
    "LeaveBalance",
    "LeaveRequest",
    "LeaveType",
    "Goal",
    "PerformanceReview",
    "Application",
    "Candidate",
    "JobPosting",
]
