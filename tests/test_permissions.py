import logging

import pytest

from app.services.common.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    Permission,
    PermissionDenied,
    PermissionSet,
    Principal,
    RoleName,
    has_permission,
    require_owner_or_permission,
    require_permission,
    require_role,
    visible_user_id,
)


def principal(role: RoleName, user_id: str = "u-1") -> Principal:
    return Principal(
        user_id=user_id,
        employee_id="EMP001",
        email="someone@company.com",
        role=role.value,
        permissions=DEFAULT_ROLE_PERMISSIONS[role],
    )


def test_wildcard_grants_every_permission():
    admin = principal(RoleName.ADMINISTRATOR)
    assert all(has_permission(admin, p) for p in Permission)


def test_exact_permission_match():
    employee = principal(RoleName.EMPLOYEE)
    assert has_permission(employee, Permission.LEAVE_REQUEST)
    assert not has_permission(employee, Permission.LEAVE_APPROVE)


def test_from_strings_handles_wildcard_and_unknown_tokens():
    assert PermissionSet.from_strings(["leave.read", "*"]).all_permissions
    parsed = PermissionSet.from_strings(["leave.read", "bogus.token"])
    assert parsed.permissions == frozenset({Permission.LEAVE_READ})
    assert parsed.to_strings() == ["leave.read"]


def test_require_permission_raises_for_missing_token():
    with pytest.raises(PermissionDenied) as exc_info:
        require_permission(principal(RoleName.EMPLOYEE), Permission.LEAVE_APPROVE)
    assert exc_info.value.required_permission == "leave.approve"


def test_require_role():
    require_role(principal(RoleName.MANAGER), [RoleName.MANAGER, RoleName.HR_MANAGER])
    with pytest.raises(PermissionDenied):
        require_role(principal(RoleName.EMPLOYEE), [RoleName.ADMINISTRATOR])


def test_owner_passes_owner_or_permission_check():
    require_owner_or_permission(principal(RoleName.EMPLOYEE, "u-1"), "u-1", Permission.EMPLOYEES_READ)
    with pytest.raises(PermissionDenied):
        require_owner_or_permission(principal(RoleName.EMPLOYEE, "u-1"), "u-2", Permission.EMPLOYEES_READ)


def test_visible_user_id_scopes_unprivileged_callers():
    employee = principal(RoleName.EMPLOYEE, "u-1")
    assert visible_user_id(employee, None, Permission.LEAVE_APPROVE) == "u-1"
    assert visible_user_id(employee, "u-1", Permission.LEAVE_APPROVE) == "u-1"
    with pytest.raises(PermissionDenied):
        visible_user_id(employee, "u-2", Permission.LEAVE_APPROVE)

    manager = principal(RoleName.MANAGER, "m-1")
    assert visible_user_id(manager, None, Permission.LEAVE_APPROVE) is None
    assert visible_user_id(manager, "u-2", Permission.LEAVE_APPROVE) == "u-2"


def test_denied_permission_is_logged_with_context(caplog):
    with caplog.at_level(logging.WARNING, logger="app.services.common.permissions"):
        with pytest.raises(PermissionDenied):
            require_permission(principal(RoleName.EMPLOYEE, "u-9"), Permission.RECRUITMENT_READ)

    record = next(r for r in caplog.records if r.getMessage() == "Permission check failed")
    assert record.name == "app.services.common.permissions"
    assert record.user_id == "u-9"
    assert record.permission == "recruitment.read"


def test_recruitment_is_limited_to_hr():
    assert has_permission(principal(RoleName.HR_MANAGER), Permission.RECRUITMENT_MANAGE)
    assert not has_permission(principal(RoleName.MANAGER), Permission.RECRUITMENT_READ)
    assert not has_permission(principal(RoleName.EMPLOYEE), Permission.RECRUITMENT_READ)
