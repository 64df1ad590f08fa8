from datetime import date, datetime, timedelta, timezone

import pytest

from app.repositories.user import DepartmentRepository
from app.services.attendance import AttendanceService
from app.services.reports import ReportService
from app.services.common.unit_of_work import UnitOfWork

REVIEW = {
    "review_period_start": "2024-01-01",
    "review_period_end": "2024-06-30",
    "overall_rating": 4,
    "goals_achievement": 3,
    "competency_rating": 5,
    "feedback": "Consistent delivery",
}


def create_review(client, reviewer, user_id, **overrides):
    payload = dict(REVIEW, user_id=user_id, **overrides)
    response = client.post("/api/v1/performance/reviews", headers=reviewer.headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ==================== Reviews ====================

def test_manager_creates_review(client, employee, manager):
    review = create_review(client, manager, employee.id)
    assert review["reviewer_id"] == manager.id
    assert review["status"] == "DRAFT"
    assert review["employee_name"].startswith("Employee Tester")


def test_employee_cannot_create_review(client, employee, make_user):
    other = make_user()
    response = client.post(
        "/api/v1/performance/reviews",
        headers=employee.headers,
        json=dict(REVIEW, user_id=other.id),
    )
    assert response.status_code == 403


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_outside_scale_is_rejected(client, employee, manager, rating):
    response = client.post(
        "/api/v1/performance/reviews",
        headers=manager.headers,
        json=dict(REVIEW, user_id=employee.id, overall_rating=rating),
    )
    assert response.status_code == 400


def test_review_period_must_be_ordered(client, employee, manager):
    response = client.post(
        "/api/v1/performance/reviews",
        headers=manager.headers,
        json=dict(REVIEW, user_id=employee.id, review_period_end="2023-12-31"),
    )
    assert response.status_code == 400

    review = create_review(client, manager, employee.id)
    update = client.put(
        f"/api/v1/performance/reviews/{review['id']}",
        headers=manager.headers,
        json={"review_period_start": "2024-07-01"},
    )
    assert update.status_code == 400
    assert update.json()["errors"][0]["field"] == "review_period_end"


def test_review_for_unknown_employee(client, manager):
    response = client.post(
        "/api/v1/performance/reviews",
        headers=manager.headers,
        json=dict(REVIEW, user_id="missing"),
    )
    assert response.status_code == 404


def test_review_visibility(client, employee, manager, make_user):
    colleague = make_user()
    own = create_review(client, manager, employee.id)
    theirs = create_review(client, manager, colleague.id)

    listed = client.get("/api/v1/performance/reviews", headers=employee.headers).json()["data"]
    assert [r["id"] for r in listed["items"]] == [own["id"]]

    assert client.get(f"/api/v1/performance/reviews/{own['id']}", headers=employee.headers).status_code == 200
    assert client.get(f"/api/v1/performance/reviews/{theirs['id']}", headers=employee.headers).status_code == 403

    everyone = client.get("/api/v1/performance/reviews", headers=manager.headers).json()["data"]
    assert everyone["meta"]["total_items"] == 2


def test_update_and_delete_review(client, employee, manager):
    review = create_review(client, manager, employee.id)
    url = f"/api/v1/performance/reviews/{review['id']}"

    updated = client.put(url, headers=manager.headers, json={"status": "COMPLETED", "overall_rating": 5})
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "COMPLETED"
    assert updated.json()["data"]["overall_rating"] == 5

    assert client.put(url, headers=employee.headers, json={"overall_rating": 1}).status_code == 403
    assert client.delete(url, headers=manager.headers).status_code == 200
    assert client.get(url, headers=manager.headers).status_code == 404


# ==================== Goals ====================

def test_goal_lifecycle(client, employee, manager):
    created = client.post(
        "/api/v1/performance/goals",
        headers=manager.headers,
        json={"user_id": employee.id, "title": "Automate payroll export", "target_date": "2024-12-31"},
    )
    assert created.status_code == 201
    goal = created.json()["data"]
    assert goal["status"] == "NOT_STARTED"
    assert goal["progress"] == 0

    url = f"/api/v1/performance/goals/{goal['id']}"
    progressed = client.put(url, headers=manager.headers, json={"progress": 60, "status": "IN_PROGRESS"})
    assert progressed.json()["data"]["progress"] == 60

    too_far = client.put(url, headers=manager.headers, json={"progress": 101})
    assert too_far.status_code == 400

    mine = client.get(f"/api/v1/performance/goals/user/{employee.id}", headers=employee.headers).json()["data"]
    assert [g["id"] for g in mine] == [goal["id"]]

    assert client.post(
        "/api/v1/performance/goals",
        headers=employee.headers,
        json={"user_id": employee.id, "title": "Promote myself"},
    ).status_code == 403

    assert client.delete(url, headers=manager.headers).status_code == 200
    assert client.get("/api/v1/performance/goals", headers=employee.headers).json()["data"] == []


def test_goals_of_others_are_hidden(client, employee, make_user):
    other = make_user()
    assert client.get(f"/api/v1/performance/goals/user/{other.id}", headers=employee.headers).status_code == 403
    assert client.get(
        "/api/v1/performance/goals", params={"user_id": other.id}, headers=employee.headers
    ).status_code == 403


def test_overview(client, employee, manager):
    create_review(client, manager, employee.id, overall_rating=4)
    create_review(client, manager, employee.id, overall_rating=5)
    create_review(client, manager, employee.id, overall_rating=None)
    client.post(
        "/api/v1/performance/goals",
        headers=manager.headers,
        json={"user_id": employee.id, "title": "Ship the new portal", "status": "COMPLETED", "progress": 100},
    )

    overview = client.get("/api/v1/performance/analytics/overview", headers=employee.headers).json()["data"]
    assert overview["total_reviews"] == 3
    assert overview["average_rating"] == 4.5
    assert overview["goals_by_status"]["COMPLETED"] == 1
    assert overview["total_goals"] == 1


def test_overview_without_reviews(client, manager):
    overview = client.get("/api/v1/performance/analytics/overview", headers=manager.headers).json()["data"]
    assert overview["total_reviews"] == 0
    assert overview["average_rating"] is None


# ==================== Reports ====================

def clock_day(session_factory, user_id, day, start=9, end=17):
    service = AttendanceService(session_factory)
    service.clock_in(user_id, now=datetime(2024, 3, day, start, tzinfo=timezone.utc))
    service.clock_out(user_id, now=datetime(2024, 3, day, end, tzinfo=timezone.utc))


def test_reports_require_permission(client, employee, manager):
    assert client.get("/api/v1/reports/headcount", headers=employee.headers).status_code == 403
    assert client.get("/api/v1/reports/headcount", headers=manager.headers).status_code == 200


def test_attendance_report(client, session_factory, employee, manager, hr_manager):
    clock_day(session_factory, employee.id, 4)
    clock_day(session_factory, employee.id, 5, end=13)
    clock_day(session_factory, manager.id, 4)
    clock_day(session_factory, manager.id, 20)

    response = client.get(
        "/api/v1/reports/attendance",
        params={"start_date": "2024-03-01", "end_date": "2024-03-10"},
        headers=hr_manager.headers,
    )
    assert response.status_code == 200
    report = response.json()["data"]
    assert report["total_records"] == 3
    assert report["total_hours"] == 20.0

    rows = {row["user_id"]: row for row in report["rows"]}
    assert rows[employee.id]["total_days"] == 2
    assert rows[employee.id]["total_hours"] == 12.0
    assert rows[employee.id]["attendance_rate"] == 100.0
    assert rows[manager.id]["total_days"] == 1


def test_report_period_must_be_ordered(client, hr_manager):
    response = client.get(
        "/api/v1/reports/attendance",
        params={"start_date": "2024-03-10", "end_date": "2024-03-01"},
        headers=hr_manager.headers,
    )
    assert response.status_code == 400

    missing = client.get("/api/v1/reports/leave", headers=hr_manager.headers)
    assert missing.status_code == 400


def test_leave_report(client, employee, manager, hr_manager, leave_types):
    def submit(start, end, leave_type="Annual Leave"):
        return client.post(
            "/api/v1/leave/requests",
            headers=employee.headers,
            json={
                "leave_type_id": leave_types[leave_type],
                "start_date": start,
                "end_date": end,
                "reason": "Scheduled time away",
            },
        ).json()["data"]

    approved = submit("2024-05-06", "2024-05-08")
    client.put(f"/api/v1/leave/requests/{approved['id']}/approve", headers=manager.headers)
    submit("2024-05-20", "2024-05-20", "Sick Leave")
    submit("2024-08-01", "2024-08-02")

    report = client.get(
        "/api/v1/reports/leave",
        params={"start_date": "2024-05-01", "end_date": "2024-05-31"},
        headers=hr_manager.headers,
    ).json()["data"]
    assert report["total_requests"] == 2
    assert report["by_status"]["APPROVED"] == 1
    assert report["by_status"]["PENDING"] == 1
    assert report["by_status"]["REJECTED"] == 0
    assert report["by_type"] == {"Annual Leave": 1, "Sick Leave": 1}
    assert report["total_approved_days"] == 3


def test_headcount(client, employee, manager, admin):
    client.delete(f"/api/v1/employees/{employee.id}", headers=admin.headers)

    report = client.get("/api/v1/reports/headcount", headers=manager.headers).json()["data"]
    assert report["total_employees"] == 3
    assert report["by_status"] == {"ACTIVE": 2, "INACTIVE": 1}
    assert report["by_department"] == {"Unassigned": 3}


def test_dashboard_stats(session_factory, employee, manager, leave_types, client):
    clock_day(session_factory, employee.id, 4)
    client.post(
        "/api/v1/leave/requests",
        headers=employee.headers,
        json={
            "leave_type_id": leave_types["Annual Leave"],
            "start_date": "2024-03-11",
            "end_date": "2024-03-11",
            "reason": "Dentist appointment",
        },
    )

    stats = ReportService(session_factory).dashboard_stats(now=datetime(2024, 3, 4, 18, tzinfo=timezone.utc))
    assert stats.total_employees == 2
    assert stats.active_employees == 2
    assert stats.present_today == 1
    assert stats.pending_leave_requests == 1
    assert stats.average_attendance_rate == 100.0

    over_http = client.get("/api/v1/reports/dashboard/stats", headers=manager.headers)
    assert over_http.status_code == 200


def test_performance_report(client, session_factory, employee, manager, make_user, hr_manager):
    with UnitOfWork(session_factory) as uow:
        it_id = uow.get_repo(DepartmentRepository).get_by_name("IT").id
    moved = client.put(
        f"/api/v1/employees/{employee.id}",
        headers=hr_manager.headers,
        json={"department_id": it_id},
    )
    assert moved.status_code == 200

    other = make_user()
    create_review(client, manager, employee.id, status="COMPLETED")
    create_review(
        client,
        manager,
        other.id,
        review_period_start="2024-02-01",
        overall_rating=None,
    )
    create_review(
        client,
        manager,
        employee.id,
        review_period_start="2023-07-01",
        review_period_end="2023-12-31",
        overall_rating=1,
    )

    period = {"start_date": "2024-01-01", "end_date": "2024-03-31"}
    report = client.get("/api/v1/reports/performance", params=period, headers=hr_manager.headers).json()["data"]
    assert report["total_reviews"] == 2
    assert report["completed_reviews"] == 1
    assert report["average_rating"] == 4.0
    assert [row["user_id"] for row in report["rows"]] == [other.id, employee.id]

    by_department = client.get(
        "/api/v1/reports/performance",
        params=dict(period, department_id=it_id),
        headers=hr_manager.headers,
    ).json()["data"]
    assert by_department["total_reviews"] == 1
    row = by_department["rows"][0]
    assert row["department"] == "IT"
    assert row["reviewer_name"].startswith("Manager Tester")

    assert client.get("/api/v1/reports/performance", params=period, headers=employee.headers).status_code == 403


def test_dashboard_charts_cover_last_seven_days(client, session_factory, employee, manager):
    clock_day(session_factory, employee.id, 2)
    clock_day(session_factory, employee.id, 4)
    clock_day(session_factory, manager.id, 4)

    charts = ReportService(session_factory).dashboard_charts(now=datetime(2024, 3, 4, 18, tzinfo=timezone.utc))
    assert charts.as_of == date(2024, 3, 4)
    assert [point.date for point in charts.weekly_attendance] == [
        date(2024, 2, 27) + timedelta(days=offset) for offset in range(7)
    ]
    assert [point.present for point in charts.weekly_attendance] == [0, 0, 0, 0, 1, 0, 2]

    over_http = client.get("/api/v1/reports/dashboard/charts", headers=manager.headers)
    assert over_http.status_code == 200
    assert len(over_http.json()["data"]["weekly_attendance"]) == 7
    assert client.get("/api/v1/reports/dashboard/charts", headers=employee.headers).status_code == 403
