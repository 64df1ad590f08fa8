from app.models.base.enums import UserStatus
from app.services.auth import FORGOT_PASSWORD_MESSAGE
from app.services.common.permissions import RoleName

LOGIN_URL = "/api/v1/auth/login"


def login(client, email, password):
    return client.post(LOGIN_URL, json={"email": email, "password": password})


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_login_returns_tokens_and_summary(client, employee):
    response = login(client, employee.email.upper(), employee.password)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    data = body["data"]
    assert data["user"]["id"] == employee.id
    assert data["user"]["role"] == RoleName.EMPLOYEE.value
    assert data["access_token"] and data["refresh_token"]
    assert "password_hash" not in data["user"]


def test_wrong_password_and_unknown_email_are_indistinguishable(client, employee):
    wrong_password = login(client, employee.email, "not-the-password")
    unknown_email = login(client, "nobody@company.com", "not-the-password")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.content == unknown_email.content
    assert wrong_password.json()["error_code"] == "InvalidCredentials"


def test_inactive_account_cannot_log_in(client, make_user):
    user = make_user(RoleName.EMPLOYEE, status=UserStatus.INACTIVE)
    response = login(client, user.email, user.password)

    assert response.status_code == 401
    assert response.json()["error_code"] == "AccountNotActive"


def test_register_assigns_default_role(client):
    payload = {
        "email": "New.Hire@Company.com",
        "password": "Sup3rSecret!",
        "employee_id": "EMP900",
        "first_name": "Nina",
        "last_name": "Hire",
    }
    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "new.hire@company.com"
    assert data["role"] == "Employee"

    duplicate = client.post("/api/v1/auth/register", json=payload)
    assert duplicate.status_code == 400
    assert duplicate.json()["error_code"] == "DuplicateIdentity"


def test_refresh_issues_new_pair_and_rejects_access_token(client, employee):
    tokens = login(client, employee.email, employee.password).json()["data"]

    refreshed = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["access_token"]

    misused = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert misused.status_code == 401


def test_refresh_token_is_not_a_bearer_credential(client, employee):
    tokens = login(client, employee.email, employee.password).json()["data"]
    response = client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {tokens['refresh_token']}"},
    )
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_me_returns_caller(client, employee):
    response = client.get("/api/v1/auth/me", headers=employee.headers)
    assert response.status_code == 200
    assert response.json()["data"]["employee_id"] == employee.employee_id


def test_deactivated_user_token_stops_working(client, employee, admin):
    assert client.get("/api/v1/auth/me", headers=employee.headers).status_code == 200

    client.delete(f"/api/v1/employees/{employee.id}", headers=admin.headers)

    assert client.get("/api/v1/auth/me", headers=employee.headers).status_code == 401


def test_forgot_password_bodies_identical(client, employee):
    known = client.post("/api/v1/auth/forgot-password", json={"email": employee.email})
    unknown = client.post("/api/v1/auth/forgot-password", json={"email": "ghost@company.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.content == unknown.content
    assert known.json()["message"] == FORGOT_PASSWORD_MESSAGE


def test_change_password(client, employee):
    wrong = client.post(
        "/api/v1/auth/change-password",
        headers=employee.headers,
        json={"current_password": "incorrect-1", "new_password": "BrandNew123!"},
    )
    assert wrong.status_code == 401

    changed = client.post(
        "/api/v1/auth/change-password",
        headers=employee.headers,
        json={"current_password": employee.password, "new_password": "BrandNew123!"},
    )
    assert changed.status_code == 200
    assert login(client, employee.email, "BrandNew123!").status_code == 200
    assert login(client, employee.email, employee.password).status_code == 401


def test_logout(client, employee):
    response = client.post("/api/v1/auth/logout", headers=employee.headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


def test_validation_errors_are_400_with_field_details(client):
    response = client.post(LOGIN_URL, json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password"} <= fields
