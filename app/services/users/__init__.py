# app/services/users/__init__.py
"""
User-facing services.

- EmployeeService:
    Employee listing, administrative create/update/deactivate, stats.

- UserProfileService:
    Profile read and partial update.
"""

from .employee_service import EmployeeService
from .user_profile_service import UserProfileService

__all__ = [
    "EmployeeService",
    "UserProfileService",
]
