from datetime import date, datetime, timedelta, timezone

import pytest

from app.models.base.mixins import ensure_utc
from app.repositories.attendance import AttendanceRepository
from app.schemas.attendance import AttendanceFilter, DayState
from app.schemas.common.pagination import PaginationParams
from app.services.attendance import AttendanceService, attendance_rate, calculate_hours
from app.services.common import errors
from app.services.common.unit_of_work import UnitOfWork


def at(hour, minute=0, day=4):
    return datetime(2024, 3, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def service(session_factory):
    return AttendanceService(session_factory)


def test_calculate_hours_subtracts_breaks():
    assert calculate_hours(at(9), at(17, 30), 30) == 8.0


def test_calculate_hours_clamps_at_zero():
    assert calculate_hours(at(9), at(9, 20), 45) == 0.0


def test_attendance_rate_is_zero_without_records():
    assert attendance_rate(0, 0) == 0.0
    assert attendance_rate(2, 3) == 66.67


def test_full_day_with_break(service, employee):
    service.clock_in(employee.id, now=at(9))
    service.start_break(employee.id, now=at(12))
    service.end_break(employee.id, now=at(12, 30))
    record = service.clock_out(employee.id, now=at(17, 30))

    assert record.break_duration == 30
    assert record.total_hours == 8.0
    assert record.clock_in == at(9)
    assert record.clock_out.tzinfo is not None


def test_open_break_is_closed_on_clock_out(service, employee):
    service.clock_in(employee.id, now=at(9))
    service.start_break(employee.id, now=at(13))
    record = service.clock_out(employee.id, now=at(13, 45))

    assert record.break_duration == 45
    assert record.break_started_at is None
    assert record.total_hours == 4.0


def test_state_machine_never_reverses(service, employee):
    assert service.status(employee.id, now=at(8)).state == DayState.NOT_CLOCKED_IN

    with pytest.raises(errors.NoClockInRecord):
        service.clock_out(employee.id, now=at(8))

    service.clock_in(employee.id, now=at(9))
    assert service.status(employee.id, now=at(10)).state == DayState.CLOCKED_IN

    with pytest.raises(errors.AlreadyClockedIn):
        service.clock_in(employee.id, now=at(10))

    service.clock_out(employee.id, now=at(17))
    assert service.status(employee.id, now=at(18)).state == DayState.CLOCKED_OUT

    with pytest.raises(errors.AlreadyClockedOut):
        service.clock_out(employee.id, now=at(18))
    with pytest.raises(errors.AlreadyClockedIn):
        service.clock_in(employee.id, now=at(18))


def test_break_preconditions(service, employee):
    service.clock_in(employee.id, now=at(9))

    with pytest.raises(errors.BreakStateError, match="No active break found"):
        service.end_break(employee.id, now=at(10))

    service.start_break(employee.id, now=at(11))
    assert service.status(employee.id, now=at(11, 5)).on_break is True

    with pytest.raises(errors.BreakStateError, match="Break already started"):
        service.start_break(employee.id, now=at(11, 10))


def test_next_day_starts_fresh(service, employee):
    service.clock_in(employee.id, now=at(9, day=4))
    service.clock_out(employee.id, now=at(17, day=4))

    record = service.clock_in(employee.id, now=at(9, day=5))
    assert record.work_date == date(2024, 3, 5)


def test_work_date_uses_configured_timezone(session_factory, employee):
    service = AttendanceService(session_factory, tz=timezone(timedelta(hours=-5)))
    # 02:00 UTC on the 5th is still the evening of the 4th at UTC-5.
    record = service.clock_in(employee.id, now=at(2, day=5))
    assert record.work_date == date(2024, 3, 4)


def test_monthly_summary(service, employee):
    for day in (4, 5, 6):
        service.clock_in(employee.id, now=at(9, day=day))
        service.clock_out(employee.id, now=at(17, day=day))

    summary = service.monthly_summary(employee.id, 2024, 3)
    assert summary.total_days == 3
    assert summary.present_days == 3
    assert summary.absent_days == 0
    assert summary.total_hours == 24.0
    assert summary.attendance_rate == 100.0

    empty = service.monthly_summary(employee.id, 2024, 4)
    assert empty.total_days == 0
    assert empty.attendance_rate == 0.0


def test_list_records_filters_by_range(service, employee, manager):
    service.clock_in(employee.id, now=at(9, day=4))
    service.clock_in(employee.id, now=at(9, day=5))
    service.clock_in(manager.id, now=at(9, day=5))

    page = service.list_records(
        AttendanceFilter(user_id=employee.id, start_date=date(2024, 3, 5), end_date=date(2024, 3, 5)),
        PaginationParams(page=1, page_size=10),
    )
    assert page.meta.total_items == 1
    assert page.items[0].work_date == date(2024, 3, 5)


# ==================== HTTP ====================

def test_clock_in_twice_over_http(client, employee):
    first = client.post("/api/v1/attendance/clock-in", headers=employee.headers, json={"location": "HQ"})
    assert first.status_code == 200
    assert first.json()["message"] == "Clocked in successfully"
    assert first.json()["data"]["location"] == "HQ"

    second = client.post("/api/v1/attendance/clock-in", headers=employee.headers)
    assert second.status_code == 400
    assert second.json()["error_code"] == "AlreadyClockedIn"


def test_clock_out_without_clock_in_over_http(client, employee):
    response = client.post("/api/v1/attendance/clock-out", headers=employee.headers)
    assert response.status_code == 400
    assert response.json()["message"] == "No clock-in record found for today"


def test_status_and_today(client, employee, manager):
    client.post("/api/v1/attendance/clock-in", headers=employee.headers)

    status = client.get("/api/v1/attendance/status", headers=employee.headers).json()["data"]
    assert status["state"] == "CLOCKED_IN"

    own = client.get("/api/v1/attendance/today", headers=employee.headers).json()["data"]
    assert [r["user_id"] for r in own] == [employee.id]

    client.post("/api/v1/attendance/clock-in", headers=manager.headers)
    everyone = client.get("/api/v1/attendance/today", headers=manager.headers).json()["data"]
    assert {r["user_id"] for r in everyone} == {employee.id, manager.id}


def test_other_users_attendance_requires_permission(client, employee, make_user, manager):
    colleague = make_user()

    denied = client.get(f"/api/v1/attendance/user/{colleague.id}/summary", headers=employee.headers)
    assert denied.status_code == 403

    own = client.get(f"/api/v1/attendance/user/{employee.id}/summary", headers=employee.headers)
    assert own.status_code == 200

    allowed = client.get(f"/api/v1/attendance/user/{colleague.id}/summary", headers=manager.headers)
    assert allowed.status_code == 200

    listing = client.get("/api/v1/attendance", params={"user_id": colleague.id}, headers=employee.headers)
    assert listing.status_code == 403


def test_time_tracking_crud(client, employee, make_user):
    payload = {
        "project_name": "Payroll",
        "task_description": "Reconcile March run",
        "start_time": "2024-03-04T09:00:00Z",
        "end_time": "2024-03-04T11:30:00Z",
        "billable": True,
    }
    created = client.post("/api/v1/attendance/time-tracking", headers=employee.headers, json=payload)
    assert created.status_code == 201
    entry = created.json()["data"]
    assert entry["hours"] == 2.5

    listed = client.get("/api/v1/attendance/time-tracking", headers=employee.headers).json()["data"]
    assert [e["id"] for e in listed] == [entry["id"]]

    stranger = make_user()
    forbidden = client.put(
        f"/api/v1/attendance/time-tracking/{entry['id']}",
        headers=stranger.headers,
        json={"billable": False},
    )
    assert forbidden.status_code == 403

    backwards = client.put(
        f"/api/v1/attendance/time-tracking/{entry['id']}",
        headers=employee.headers,
        json={"end_time": "2024-03-04T08:00:00Z"},
    )
    assert backwards.status_code == 400

    deleted = client.delete(f"/api/v1/attendance/time-tracking/{entry['id']}", headers=employee.headers)
    assert deleted.status_code == 200
    assert client.get("/api/v1/attendance/time-tracking", headers=employee.headers).json()["data"] == []


def test_concurrent_clock_in_keeps_one_record(monkeypatch, service, session_factory, employee):
    service.clock_in(employee.id, now=at(9))

    # Both requests saw no record for the day; the unique key decides.
    monkeypatch.setattr(AttendanceRepository, "find_for_day", lambda self, user_id, work_date: None)
    with pytest.raises(errors.AlreadyClockedIn):
        service.clock_in(employee.id, now=at(9, 5))

    with UnitOfWork(session_factory) as uow:
        records = uow.get_repo(AttendanceRepository).find_for_user_range(employee.id)
        assert [ensure_utc(r.clock_in) for r in records] == [at(9)]
