from datetime import date

import pytest

from app.models.base.enums import LeaveStatus
from app.repositories.leave import LeaveBalanceRepository, LeaveRequestRepository
from app.schemas.leave import LeaveBalanceAllocate, LeaveRequestCreate, inclusive_days
from app.services.common import errors
from app.services.common.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    Principal,
    PermissionSet,
    RoleName,
)
from app.services.common.unit_of_work import UnitOfWork
from app.services.leave import LeaveBalanceService, LeaveRequestService

REASON = "Family matters to attend to"


def submit(client, user, leave_type_id, start="2024-06-03", end="2024-06-03"):
    response = client.post(
        "/api/v1/leave/requests",
        headers=user.headers,
        json={
            "leave_type_id": leave_type_id,
            "start_date": start,
            "end_date": end,
            "reason": REASON,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def balances_for(session_factory, user_id):
    with UnitOfWork(session_factory) as uow:
        return [
            (b.used_days, b.remaining_days)
            for b in uow.get_repo(LeaveBalanceRepository).list_for_year(2024, user_id)
        ]


def test_inclusive_days():
    assert inclusive_days(date(2024, 6, 3), date(2024, 6, 3)) == 1
    assert inclusive_days(date(2024, 6, 3), date(2024, 6, 9)) == 7


def test_create_rejects_short_reason_and_reversed_dates():
    with pytest.raises(ValueError):
        LeaveRequestCreate(leave_type_id="x", start_date=date(2024, 6, 3), end_date=date(2024, 6, 3), reason="short")
    with pytest.raises(ValueError):
        LeaveRequestCreate(leave_type_id="x", start_date=date(2024, 6, 5), end_date=date(2024, 6, 3), reason=REASON)


def test_submit_counts_days(client, employee, leave_types):
    single = submit(client, employee, leave_types["Annual Leave"])
    assert single["days_requested"] == 1
    assert single["status"] == "PENDING"
    assert single["leave_type_name"] == "Annual Leave"

    week = submit(client, employee, leave_types["Annual Leave"], "2024-07-01", "2024-07-07")
    assert week["days_requested"] == 7


def test_submit_with_unknown_type(client, employee):
    response = client.post(
        "/api/v1/leave/requests",
        headers=employee.headers,
        json={"leave_type_id": "missing", "start_date": "2024-06-03", "end_date": "2024-06-03", "reason": REASON},
    )
    assert response.status_code == 404


def test_employee_cannot_approve(client, employee, leave_types):
    request = submit(client, employee, leave_types["Annual Leave"])
    response = client.put(f"/api/v1/leave/requests/{request['id']}/approve", headers=employee.headers)
    assert response.status_code == 403


def test_manager_approves_and_balance_is_drawn(client, session_factory, employee, manager, leave_types):
    request = submit(client, employee, leave_types["Annual Leave"], "2024-06-03", "2024-06-05")

    response = client.put(
        f"/api/v1/leave/requests/{request['id']}/approve",
        headers=manager.headers,
        json={"comments": "Enjoy"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Leave request approved successfully"
    assert body["data"]["status"] == "APPROVED"
    assert body["data"]["approved_by"] == manager.id
    assert body["data"]["approved_at"] is not None
    assert body["data"]["comments"] == "Enjoy"

    assert balances_for(session_factory, employee.id) == [(3.0, 22.0)]


def test_insufficient_balance_leaves_request_pending(client, session_factory, employee, manager, leave_types):
    request = submit(client, employee, leave_types["Personal Leave"], "2024-06-03", "2024-06-09")

    response = client.put(f"/api/v1/leave/requests/{request['id']}/approve", headers=manager.headers)
    assert response.status_code == 400
    assert response.json()["error_code"] == "InsufficientBalance"

    fetched = client.get(f"/api/v1/leave/requests/{request['id']}", headers=employee.headers).json()["data"]
    assert fetched["status"] == "PENDING"
    assert fetched["approved_by"] is None
    assert all(used == 0 for used, _ in balances_for(session_factory, employee.id))


def test_approval_without_enforcement_keeps_balances(session_factory, employee, manager, leave_types):
    service = LeaveRequestService(session_factory, enforce_balance=False)
    request = service.create(
        employee.id,
        LeaveRequestCreate(
            leave_type_id=leave_types["Personal Leave"],
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 9),
            reason=REASON,
        ),
    )
    approved = service.approve(request.id, manager.id)
    assert approved.status == LeaveStatus.APPROVED
    assert balances_for(session_factory, employee.id) == []


def test_terminal_states_are_final(client, employee, manager, leave_types):
    request = submit(client, employee, leave_types["Annual Leave"])
    url = f"/api/v1/leave/requests/{request['id']}"

    rejected = client.put(f"{url}/reject", headers=manager.headers, json={"comments": "Busy week"})
    assert rejected.status_code == 200
    assert rejected.json()["data"]["status"] == "REJECTED"

    for action, user in (("approve", manager), ("reject", manager), ("cancel", employee)):
        response = client.put(f"{url}/{action}", headers=user.headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "InvalidLeaveTransition"

    edit = client.put(url, headers=employee.headers, json={"reason": "Changed my mind entirely"})
    assert edit.status_code == 400


def test_cancel_is_owner_only(client, employee, manager, make_user, leave_types):
    request = submit(client, employee, leave_types["Sick Leave"])
    url = f"/api/v1/leave/requests/{request['id']}/cancel"

    assert client.put(url, headers=manager.headers).status_code == 403
    assert client.put(url, headers=make_user().headers).status_code == 403

    cancelled = client.put(url, headers=employee.headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["status"] == "CANCELLED"


def test_update_pending_request_recomputes_days(client, employee, make_user, leave_types):
    request = submit(client, employee, leave_types["Annual Leave"])
    url = f"/api/v1/leave/requests/{request['id']}"

    updated = client.put(url, headers=employee.headers, json={"end_date": "2024-06-04"})
    assert updated.status_code == 200
    assert updated.json()["data"]["days_requested"] == 2

    reversed_ = client.put(url, headers=employee.headers, json={"end_date": "2024-06-01"})
    assert reversed_.status_code == 400

    assert client.put(url, headers=make_user().headers, json={"end_date": "2024-06-05"}).status_code == 403


def test_listing_is_scoped_for_employees(client, employee, manager, make_user, leave_types):
    colleague = make_user()
    submit(client, employee, leave_types["Annual Leave"])
    submit(client, colleague, leave_types["Annual Leave"])

    own = client.get("/api/v1/leave/requests", headers=employee.headers).json()["data"]
    assert [r["user_id"] for r in own["items"]] == [employee.id]

    other = client.get("/api/v1/leave/requests", params={"user_id": colleague.id}, headers=employee.headers)
    assert other.status_code == 403

    everyone = client.get("/api/v1/leave/requests", headers=manager.headers).json()["data"]
    assert everyone["meta"]["total_items"] == 2

    pending = client.get("/api/v1/leave/requests", params={"status": "PENDING"}, headers=manager.headers)
    assert pending.json()["data"]["meta"]["total_items"] == 2


def test_delete_requires_hr_or_admin(client, employee, manager, hr_manager, leave_types):
    request = submit(client, employee, leave_types["Annual Leave"])
    url = f"/api/v1/leave/requests/{request['id']}"

    assert client.delete(url, headers=manager.headers).status_code == 403
    assert client.delete(url, headers=hr_manager.headers).status_code == 200
    assert client.get(url, headers=employee.headers).status_code == 404


def test_balance_allocation(client, employee, hr_manager, leave_types):
    payload = {
        "user_id": employee.id,
        "leave_type_id": leave_types["Sick Leave"],
        "year": 2024,
        "allocated_days": 12,
    }
    saved = client.post("/api/v1/leave/balances", headers=hr_manager.headers, json=payload)
    assert saved.status_code == 200
    assert saved.json()["data"]["remaining_days"] == 12.0

    own = client.get(
        f"/api/v1/leave/balances/user/{employee.id}",
        params={"year": 2024},
        headers=employee.headers,
    ).json()["data"]
    assert [b["leave_type_name"] for b in own] == ["Sick Leave"]

    assert client.post("/api/v1/leave/balances", headers=employee.headers, json=payload).status_code == 403


def test_leave_types_catalog(client, employee, admin):
    names = {t["name"] for t in client.get("/api/v1/leave/types", headers=employee.headers).json()["data"]}
    assert {"Annual Leave", "Sick Leave", "Personal Leave", "Maternity Leave"} <= names

    payload = {"name": "Study Leave", "max_days_per_year": 3}
    assert client.post("/api/v1/leave/types", headers=employee.headers, json=payload).status_code == 403
    created = client.post("/api/v1/leave/types", headers=admin.headers, json=payload)
    assert created.status_code == 201
    assert created.json()["data"]["name"] == "Study Leave"


def test_service_cancel_checks_owner(session_factory, employee, manager, leave_types):
    service = LeaveRequestService(session_factory)
    request = service.create(
        employee.id,
        LeaveRequestCreate(
            leave_type_id=leave_types["Annual Leave"],
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 3),
            reason=REASON,
        ),
    )
    outsider = Principal(
        user_id=manager.id,
        employee_id=manager.employee_id,
        email=manager.email,
        role=RoleName.MANAGER.value,
        permissions=PermissionSet.of(),
    )
    with pytest.raises(errors.AuthorizationError):
        service.cancel(outsider, request.id)


def principal_for(user, role):
    return Principal(
        user_id=user.id,
        employee_id=user.employee_id,
        email=user.email,
        role=role.value,
        permissions=DEFAULT_ROLE_PERMISSIONS[role],
    )


def request_for(service, user_id, leave_type_id, day):
    return service.create(
        user_id,
        LeaveRequestCreate(leave_type_id=leave_type_id, start_date=day, end_date=day, reason=REASON),
    )


def test_last_remaining_day_is_drawn_once(session_factory, employee, manager, leave_types):
    LeaveBalanceService(session_factory).allocate(
        LeaveBalanceAllocate(
            user_id=employee.id,
            leave_type_id=leave_types["Personal Leave"],
            year=2024,
            allocated_days=1,
        )
    )
    service = LeaveRequestService(session_factory)
    first = request_for(service, employee.id, leave_types["Personal Leave"], date(2024, 6, 3))
    second = request_for(service, employee.id, leave_types["Personal Leave"], date(2024, 6, 4))

    service.approve(first.id, manager.id)
    with pytest.raises(errors.InsufficientBalance):
        service.approve(second.id, manager.id)

    assert balances_for(session_factory, employee.id) == [(1.0, 0.0)]
    assert service.get(principal_for(employee, RoleName.EMPLOYEE), second.id).status == LeaveStatus.PENDING


def test_first_approval_reuses_balance_allocated_concurrently(
    monkeypatch, session_factory, employee, manager, leave_types
):
    service = LeaveRequestService(session_factory)
    first = request_for(service, employee.id, leave_types["Annual Leave"], date(2024, 6, 3))
    second = request_for(service, employee.id, leave_types["Annual Leave"], date(2024, 6, 4))
    service.approve(first.id, manager.id)

    # The second approver read "no balance yet" before the first committed.
    real_get = LeaveBalanceRepository.get
    calls = {"n": 0}

    def stale_get(self, user_id, leave_type_id, year):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_get(self, user_id, leave_type_id, year)

    monkeypatch.setattr(LeaveBalanceRepository, "get", stale_get)

    approved = service.approve(second.id, manager.id)
    assert approved.status == LeaveStatus.APPROVED
    assert calls["n"] == 2
    assert balances_for(session_factory, employee.id) == [(2.0, 23.0)]


def test_losing_approval_race_reports_winning_state(
    monkeypatch, session_factory, employee, manager, leave_types
):
    service = LeaveRequestService(session_factory)
    request = request_for(service, employee.id, leave_types["Annual Leave"], date(2024, 6, 3))
    service.approve(request.id, manager.id)

    # A second approver loaded the request while it was still pending.
    real_find = LeaveRequestRepository.find_by_id

    def stale_find(self, id):
        found = real_find(self, id)
        if found is not None:
            found.status = LeaveStatus.PENDING
        return found

    monkeypatch.setattr(LeaveRequestRepository, "find_by_id", stale_find)
    with pytest.raises(errors.InvalidLeaveTransition) as exc_info:
        service.approve(request.id, manager.id)
    assert exc_info.value.current == LeaveStatus.APPROVED.value

    assert balances_for(session_factory, employee.id) == [(1.0, 24.0)]
