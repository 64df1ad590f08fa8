import pytest

from app.repositories.user import DepartmentRepository, RoleRepository
from app.services.common.permissions import RoleName
from app.services.common.unit_of_work import UnitOfWork


@pytest.fixture
def references(session_factory):
    """Seeded role and department ids by name."""
    with UnitOfWork(session_factory) as uow:
        roles = uow.get_repo(RoleRepository)
        departments = uow.get_repo(DepartmentRepository)
        return {
            "employee_role": roles.get_by_name(RoleName.EMPLOYEE.value).id,
            "it": departments.get_by_name("IT").id,
            "finance": departments.get_by_name("Finance").id,
        }


def new_employee(references, **overrides):
    payload = {
        "email": "Jane.Doe@Company.com",
        "employee_id": "EMP9001",
        "first_name": "Jane",
        "last_name": "Doe",
        "role_id": references["employee_role"],
        "department_id": references["it"],
        "job_title": "Analyst",
        "hire_date": "2024-01-15",
        "salary": 55000,
    }
    payload.update(overrides)
    return payload


def test_hr_creates_employee_with_temporary_password(client, hr_manager, references):
    response = client.post("/api/v1/employees", headers=hr_manager.headers, json=new_employee(references))
    assert response.status_code == 201

    data = response.json()["data"]
    assert data["temporary_password"]
    employee = data["employee"]
    assert employee["email"] == "jane.doe@company.com"
    assert employee["department"] == "IT"
    assert employee["role"] == "Employee"
    assert employee["profile"]["salary"] == 55000.0
    assert "password_hash" not in employee

    login = client.post(
        "/api/v1/auth/login",
        json={"email": "jane.doe@company.com", "password": data["temporary_password"]},
    )
    assert login.status_code == 200


def test_create_with_explicit_password_returns_none(client, hr_manager, references):
    response = client.post(
        "/api/v1/employees",
        headers=hr_manager.headers,
        json=new_employee(references, password="Str0ngPass!"),
    )
    assert response.status_code == 201
    assert response.json()["data"].get("temporary_password") is None


def test_duplicate_identity_is_rejected(client, hr_manager, employee, references):
    by_email = client.post(
        "/api/v1/employees",
        headers=hr_manager.headers,
        json=new_employee(references, email=employee.email),
    )
    assert by_email.status_code == 400
    assert by_email.json()["error_code"] == "DuplicateIdentity"

    by_employee_id = client.post(
        "/api/v1/employees",
        headers=hr_manager.headers,
        json=new_employee(references, employee_id=employee.employee_id),
    )
    assert by_employee_id.status_code == 400


def test_unknown_department_is_not_found(client, hr_manager, references):
    response = client.post(
        "/api/v1/employees",
        headers=hr_manager.headers,
        json=new_employee(references, department_id="nope"),
    )
    assert response.status_code == 404


def test_employee_cannot_create_or_list(client, employee, references):
    assert client.post("/api/v1/employees", headers=employee.headers, json=new_employee(references)).status_code == 403
    assert client.get("/api/v1/employees", headers=employee.headers).status_code == 403


def test_listing_search_and_filters(client, manager, hr_manager, references):
    client.post("/api/v1/employees", headers=hr_manager.headers, json=new_employee(references))
    client.post(
        "/api/v1/employees",
        headers=hr_manager.headers,
        json=new_employee(
            references,
            email="bob.smith@company.com",
            employee_id="EMP9002",
            first_name="Bob",
            last_name="Smith",
            department_id=references["finance"],
        ),
    )

    found = client.get("/api/v1/employees", params={"search": "jane"}, headers=manager.headers).json()["data"]
    assert [e["employee_id"] for e in found["items"]] == ["EMP9001"]

    finance = client.get(
        "/api/v1/employees",
        params={"department_id": references["finance"]},
        headers=manager.headers,
    ).json()["data"]
    assert [e["employee_id"] for e in finance["items"]] == ["EMP9002"]

    paged = client.get("/api/v1/employees", params={"page_size": 1}, headers=manager.headers).json()["data"]
    assert len(paged["items"]) == 1
    assert paged["meta"]["total_items"] == 4
    assert paged["meta"]["has_next"] is True

    bad_sort = client.get("/api/v1/employees", params={"sort_by": "password_hash"}, headers=manager.headers)
    assert bad_sort.status_code == 400


def test_get_employee_owner_or_reader(client, employee, manager, make_user):
    assert client.get(f"/api/v1/employees/{employee.id}", headers=employee.headers).status_code == 200
    assert client.get(f"/api/v1/employees/{employee.id}", headers=manager.headers).status_code == 200
    assert client.get(f"/api/v1/employees/{employee.id}", headers=make_user().headers).status_code == 403
    assert client.get("/api/v1/employees/missing", headers=manager.headers).status_code == 404


def test_update_employee(client, employee, hr_manager, manager, references):
    response = client.put(
        f"/api/v1/employees/{employee.id}",
        headers=hr_manager.headers,
        json={"department_id": references["finance"], "job_title": "Senior Analyst"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["department"] == "Finance"
    assert data["profile"]["job_title"] == "Senior Analyst"

    assert client.put(
        f"/api/v1/employees/{employee.id}", headers=manager.headers, json={"job_title": "Boss"}
    ).status_code == 403


def test_update_to_taken_email(client, employee, manager, hr_manager):
    response = client.put(
        f"/api/v1/employees/{employee.id}",
        headers=hr_manager.headers,
        json={"email": manager.email},
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "DuplicateIdentity"


def test_delete_deactivates(client, employee, hr_manager, admin):
    assert client.delete(f"/api/v1/employees/{employee.id}", headers=hr_manager.headers).status_code == 403

    response = client.delete(f"/api/v1/employees/{employee.id}", headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "INACTIVE"

    # The row is kept and still readable.
    fetched = client.get(f"/api/v1/employees/{employee.id}", headers=admin.headers)
    assert fetched.json()["data"]["status"] == "INACTIVE"

    login = client.post("/api/v1/auth/login", json={"email": employee.email, "password": employee.password})
    assert login.status_code == 401


def test_profile_self_service(client, employee, hr_manager):
    url = f"/api/v1/employees/{employee.id}/profile"

    updated = client.put(url, headers=employee.headers, json={"phone": "+1 555 0100"})
    assert updated.status_code == 200
    assert updated.json()["data"]["phone"] == "+1 555 0100"
    assert updated.json()["data"]["first_name"] == "Employee"

    raise_salary = client.put(url, headers=employee.headers, json={"salary": 999999})
    assert raise_salary.status_code == 403

    by_hr = client.put(url, headers=hr_manager.headers, json={"salary": 60000})
    assert by_hr.status_code == 200
    assert by_hr.json()["data"]["salary"] == 60000.0

    assert client.get(url, headers=employee.headers).json()["data"]["salary"] == 60000.0


def test_profile_of_someone_else(client, employee, make_user):
    other = make_user()
    url = f"/api/v1/employees/{other.id}/profile"
    assert client.get(url, headers=employee.headers).status_code == 403
    assert client.put(url, headers=employee.headers, json={"phone": "123"}).status_code == 403


def test_employee_stats(client, employee, manager, leave_types):
    client.post("/api/v1/attendance/clock-in", headers=employee.headers)
    client.post(
        "/api/v1/leave/requests",
        headers=employee.headers,
        json={
            "leave_type_id": leave_types["Annual Leave"],
            "start_date": "2024-06-03",
            "end_date": "2024-06-04",
            "reason": "Long weekend away",
        },
    )

    stats = client.get(f"/api/v1/employees/{employee.id}/stats", headers=manager.headers).json()["data"]
    assert stats["attendance_this_month"]["total_days"] == 1
    assert stats["leave_requests_by_status"]["PENDING"] == 1
    assert stats["total_leave_requests"] == 1
    assert stats["performance_reviews"] == 0
