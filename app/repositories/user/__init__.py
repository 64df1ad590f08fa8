"""
User repositories.
"""
from app.repositories.user.user_profile_repository import ProfileRepository
from app.repositories.user.user_repository import (
    DepartmentRepository,
    RoleRepository,
    UserRepository,
)

__all__ = [
    "DepartmentRepository",
    "ProfileRepository",
    "RoleRepository",
    "UserRepository",
]
