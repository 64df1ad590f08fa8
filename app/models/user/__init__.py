"""
User models package.
"""

from app.models.user.user import Department, Role, User
from app.models.user.user_profile import Profile

__all__ = [
    "Department",
    "Profile",
    "Role",
    "User",
]
