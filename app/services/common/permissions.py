# app/services/common/permissions.py
"""
Permission and authorization utilities.

Roles carry a typed `PermissionSet`: either the distinguished *all*
variant or a frozen set of `Permission` tokens. Checks are pure
predicates over a `Principal` resolved fresh for every request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Mapping, Optional

from app.core.logging import get_logger

from .errors import AuthorizationError

logger = get_logger(__name__)

WILDCARD = "*"


class Permission(str, Enum):
    """Granular capability tokens stored on roles."""

    USERS_CREATE = "users.create"
    USERS_READ = "users.read"
    USERS_UPDATE = "users.update"
    USERS_DELETE = "users.delete"

    EMPLOYEES_CREATE = "employees.create"
    EMPLOYEES_READ = "employees.read"
    EMPLOYEES_UPDATE = "employees.update"
    EMPLOYEES_DELETE = "employees.delete"

    ATTENDANCE_READ = "attendance.read"
    ATTENDANCE_MANAGE = "attendance.manage"
    ATTENDANCE_CLOCK = "attendance.clock"

    LEAVE_READ = "leave.read"
    LEAVE_APPROVE = "leave.approve"
    LEAVE_REQUEST = "leave.request"

    PERFORMANCE_READ = "performance.read"
    PERFORMANCE_MANAGE = "performance.manage"

    RECRUITMENT_READ = "recruitment.read"
    RECRUITMENT_MANAGE = "recruitment.manage"

    REPORTS_READ = "reports.read"
    REPORTS_GENERATE = "reports.generate"

    PROFILE_READ = "profile.read"
    PROFILE_UPDATE = "profile.update"


@dataclass(frozen=True)
class PermissionSet:
    """
    Immutable permission bundle of a role.

    `all_permissions=True` is the wildcard variant and grants every token;
    otherwise only the tokens in `permissions` are granted.
    """
    permissions: FrozenSet[Permission] = frozenset()
    all_permissions: bool = False

    @classmethod
    def all(cls) -> "PermissionSet":
        return cls(all_permissions=True)

    @classmethod
    def of(cls, *permissions: Permission) -> "PermissionSet":
        return cls(permissions=frozenset(permissions))

    @classmethod
    def from_strings(cls, values: Optional[Iterable[str]]) -> "PermissionSet":
        """Build from stored strings; `*` yields the all variant."""
        tokens = set()
        for value in values or ():
            if value == WILDCARD:
                return cls.all()
            try:
                tokens.add(Permission(value))
            except ValueError:
                logger.warning("Ignoring unknown permission string", extra={"permission": value})
        return cls(permissions=frozenset(tokens))

    def to_strings(self) -> list[str]:
        if self.all_permissions:
            return [WILDCARD]
        return sorted(p.value for p in self.permissions)

    def __contains__(self, permission: object) -> bool:
        if self.all_permissions:
            return True
        return permission in self.permissions


class RoleName(str, Enum):
    """Roles provisioned at startup."""

    ADMINISTRATOR = "Administrator"
    HR_MANAGER = "HR Manager"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


DEFAULT_ROLE_PERMISSIONS: Mapping[RoleName, PermissionSet] = {
    RoleName.ADMINISTRATOR: PermissionSet.all(),
    RoleName.HR_MANAGER: PermissionSet.of(
        Permission.EMPLOYEES_CREATE,
        Permission.EMPLOYEES_READ,
        Permission.EMPLOYEES_UPDATE,
        Permission.ATTENDANCE_READ,
        Permission.LEAVE_READ,
        Permission.LEAVE_APPROVE,
        Permission.PERFORMANCE_READ,
        Permission.PERFORMANCE_MANAGE,
        Permission.RECRUITMENT_READ,
        Permission.RECRUITMENT_MANAGE,
        Permission.REPORTS_READ,
        Permission.REPORTS_GENERATE,
    ),
    RoleName.MANAGER: PermissionSet.of(
        Permission.EMPLOYEES_READ,
        Permission.ATTENDANCE_READ,
        Permission.LEAVE_READ,
        Permission.LEAVE_APPROVE,
        Permission.PERFORMANCE_READ,
        Permission.PERFORMANCE_MANAGE,
        Permission.REPORTS_READ,
    ),
    RoleName.EMPLOYEE: PermissionSet.of(
        Permission.PROFILE_READ,
        Permission.PROFILE_UPDATE,
        Permission.ATTENDANCE_READ,
        Permission.ATTENDANCE_CLOCK,
        Permission.LEAVE_READ,
        Permission.LEAVE_REQUEST,
        Permission.PERFORMANCE_READ,
    ),
}

ROLE_DESCRIPTIONS: Mapping[RoleName, str] = {
    RoleName.ADMINISTRATOR: "Full system access",
    RoleName.HR_MANAGER: "HR management access",
    RoleName.MANAGER: "Team management access",
    RoleName.EMPLOYEE: "Basic employee access",
}


class PermissionDenied(AuthorizationError):
    """Raised when a user lacks the required role or permission."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        user_id: Optional[str] = None,
        role: Optional[str] = None,
        required_permission: Optional[str] = None,
    ) -> None:
        super().__init__(message, required_permission=required_permission)
        self.user_id = user_id
        self.role = role


@dataclass(frozen=True)
class Principal:
    """
    Authenticated identity in the service layer.

    Attributes:
        user_id: Primary key of the user
        employee_id: Business identifier of the employee
        email: Login email
        role: Role name as stored
        permissions: Permission bundle of the role
    """
    user_id: str
    employee_id: str
    email: str
    role: str
    permissions: PermissionSet = field(default_factory=PermissionSet)

    def has_role(self, role: RoleName | str) -> bool:
        return self.role == _role_value(role)

    def is_owner(self, user_id: str) -> bool:
        return self.user_id == user_id


def _role_value(role: RoleName | str) -> str:
    return role.value if isinstance(role, RoleName) else role


def role_in(principal: Principal, allowed_roles: Iterable[RoleName | str]) -> bool:
    return principal.role in {_role_value(r) for r in allowed_roles}


def require_role(principal: Principal, allowed_roles: Iterable[RoleName | str]) -> None:
    """
    Assert that principal has one of the allowed roles.

    Raises:
        PermissionDenied: If principal's role is not allowed
    """
    allowed = list(allowed_roles)
    if not role_in(principal, allowed):
        logger.warning(
            "Role check failed",
            extra={
                "user_id": principal.user_id,
                "role": principal.role,
                "allowed_roles": [_role_value(r) for r in allowed],
            },
        )
        raise PermissionDenied(user_id=principal.user_id, role=principal.role)


def has_permission(principal: Principal, permission: Permission) -> bool:
    """True iff the role grants everything or holds `permission`."""
    return permission in principal.permissions


def require_permission(principal: Principal, permission: Permission) -> None:
    """
    Assert that principal holds a permission.

    Raises:
        PermissionDenied: If principal lacks the permission

    Example:
        >>> require_permission(principal, Permission.LEAVE_APPROVE)
    """
    if not has_permission(principal, permission):
        logger.warning(
            "Permission check failed",
            extra={"user_id": principal.user_id, "permission": permission.value},
        )
        raise PermissionDenied(
            user_id=principal.user_id,
            role=principal.role,
            required_permission=permission.value,
        )


def require_owner_or_permission(
    principal: Principal,
    owner_id: str,
    *permissions: Permission,
) -> None:
    """
    Allow access to one's own records, or to anyone's with one of `permissions`.

    Raises:
        PermissionDenied: If principal is neither owner nor privileged
    """
    if principal.is_owner(owner_id):
        return
    if any(has_permission(principal, p) for p in permissions):
        return
    raise PermissionDenied(
        user_id=principal.user_id,
        role=principal.role,
        required_permission=permissions[0].value if permissions else None,
    )


def visible_user_id(
    principal: Principal,
    requested_user_id: Optional[str],
    *permissions: Permission,
) -> Optional[str]:
    """
    Resolve which user's records a listing may show.

    Holders of one of `permissions` get what they asked for (None means
    everyone). Anyone else is limited to their own records and is denied
    when asking for someone else's.
    """
    if any(has_permission(principal, p) for p in permissions):
        return requested_user_id
    if requested_user_id and not principal.is_owner(requested_user_id):
        raise PermissionDenied(
            user_id=principal.user_id,
            role=principal.role,
            required_permission=permissions[0].value if permissions else None,
        )
    return principal.user_id
