"""
User and employee schemas package.
"""

from app.schemas.user.user_base import (
    EMPLOYEE_SORT_FIELDS,
    EmployeeCreate,
    EmployeeFilter,
    EmployeeUpdate,
)
from app.schemas.user.user_profile import ProfileResponse, ProfileUpdate
from app.schemas.user.user_response import (
    EmployeeCreated,
    EmployeeResponse,
    EmployeeStats,
    UserSummary,
)

__all__ = [
    "EMPLOYEE_SORT_FIELDS",
    "EmployeeCreate",
    "EmployeeFilter",
    "EmployeeUpdate",
    "ProfileResponse",
    "ProfileUpdate",
    "EmployeeCreated",
    "EmployeeResponse",
    "EmployeeStats",
    "UserSummary",
]
