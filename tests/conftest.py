"""
Shared fixtures: an in-memory SQLite database seeded with reference
data, a TestClient around the application, and users for every role.
"""
import os

os.environ.update(
    {
        "DATABASE_URL": "sqlite://",
        "SEED_ON_STARTUP": "false",
        "PASSWORD_BCRYPT_ROUNDS": "4",
        "JWT_SECRET_KEY": "test-access-secret-key",
        "JWT_REFRESH_SECRET_KEY": "test-refresh-secret-key",
        "LOG_LEVEL": "WARNING",
        "TIMEZONE": "UTC",
    }
)

from dataclasses import dataclass
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.config.settings import get_settings
from app.db.init_db import init_db, seed_reference_data
from app.db.session import build_session_factory
from app.main import create_app
from app.models.base.enums import UserStatus
from app.models.user import Profile, User
from app.repositories.leave import LeaveTypeRepository
from app.repositories.user import RoleRepository
from app.services.common import security
from app.services.common.permissions import RoleName
from app.services.common.unit_of_work import UnitOfWork

DEFAULT_PASSWORD = "Password123!"


@dataclass
class TestUser:
    __test__ = False

    id: str
    email: str
    employee_id: str
    password: str
    headers: dict


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    security.configure_password_hashing(4)
    factory = build_session_factory(engine)
    seed_reference_data(factory)
    return factory


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def client(session_factory, settings):
    app = create_app(settings=settings, session_factory=session_factory)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(session_factory, settings):
    """Factory creating an active user with a profile for the given role."""
    counter = {"n": 0}

    def _make(
        role: RoleName = RoleName.EMPLOYEE,
        *,
        status: UserStatus = UserStatus.ACTIVE,
        password: str = DEFAULT_PASSWORD,
    ) -> TestUser:
        counter["n"] += 1
        slug = role.value.lower().replace(" ", "")
        email = f"{slug}{counter['n']}@company.com"
        employee_id = f"EMP{slug[:3].upper()}{counter['n']:03d}"

        with UnitOfWork(session_factory) as uow:
            role_row = uow.get_repo(RoleRepository).get_by_name(role.value)
            user = User(
                employee_id=employee_id,
                email=email,
                password_hash=security.hash_password(password),
                status=status,
                role_id=role_row.id,
            )
            user.profile = Profile(
                first_name=role.value.split()[0],
                last_name=f"Tester{counter['n']}",
                hire_date=date(2023, 1, 9),
            )
            uow.session.add(user)
            uow.flush()
            user_id = user.id

        token = security.create_access_token(subject=user_id, jwt_settings=settings.jwt_settings)
        return TestUser(
            id=user_id,
            email=email,
            employee_id=employee_id,
            password=password,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _make


@pytest.fixture
def employee(make_user):
    return make_user(RoleName.EMPLOYEE)


@pytest.fixture
def manager(make_user):
    return make_user(RoleName.MANAGER)


@pytest.fixture
def hr_manager(make_user):
    return make_user(RoleName.HR_MANAGER)


@pytest.fixture
def admin(make_user):
    return make_user(RoleName.ADMINISTRATOR)


@pytest.fixture
def leave_types(session_factory):
    """Seeded leave type ids by name."""
    with UnitOfWork(session_factory) as uow:
        return {t.name: t.id for t in uow.get_repo(LeaveTypeRepository).list_types(active_only=False)}
