# app/db/init_db.py
"""Database initialization and reference data seeding."""
from decimal import Decimal
from typing import Callable

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.db.base import Base, import_models
from app.models.leave import LeaveType
from app.models.user import Department, Role
from app.repositories.leave import LeaveTypeRepository
from app.repositories.user import DepartmentRepository, RoleRepository
from app.services.common.permissions import DEFAULT_ROLE_PERMISSIONS, ROLE_DESCRIPTIONS
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)

DEFAULT_DEPARTMENTS = (
    ("IT", "Information Technology", Decimal("500000")),
    ("HR", "Human Resources", Decimal("200000")),
    ("Finance", "Finance and Accounting", Decimal("300000")),
    ("Marketing", "Marketing and Sales", Decimal("250000")),
)

# name, description, max days per year, carry forward
DEFAULT_LEAVE_TYPES = (
    ("Annual Leave", "Yearly paid vacation", 25, True),
    ("Sick Leave", "Leave for illness or medical appointments", 10, False),
    ("Personal Leave", "Leave for personal matters", 5, False),
    ("Maternity Leave", "Leave around childbirth", 90, False),
)


def init_db(engine: Engine) -> None:
    """
    Create all tables that do not exist yet.

    Suitable for development and tests; production schemas are expected
    to be managed by migrations.
    """
    import_models()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured", extra={"tables": len(Base.metadata.tables)})


def drop_db(engine: Engine) -> None:
    """Drop all tables. Destroys every row."""
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def seed_reference_data(session_factory: Callable[[], Session]) -> None:
    """
    Provision default roles, departments and leave types.

    Idempotent: rows are matched by name and only missing ones are
    inserted, so existing data is never overwritten.
    """
    created = {"roles": 0, "departments": 0, "leave_types": 0}

    with UnitOfWork(session_factory) as uow:
        roles = uow.get_repo(RoleRepository)
        for role_name, permission_set in DEFAULT_ROLE_PERMISSIONS.items():
            if roles.get_by_name(role_name.value) is None:
                roles.add(
                    Role(
                        name=role_name.value,
                        description=ROLE_DESCRIPTIONS[role_name],
                        permissions=permission_set.to_strings(),
                    )
                )
                created["roles"] += 1

        departments = uow.get_repo(DepartmentRepository)
        for name, description, budget in DEFAULT_DEPARTMENTS:
            if departments.get_by_name(name) is None:
                departments.add(Department(name=name, description=description, budget=budget))
                created["departments"] += 1

        leave_types = uow.get_repo(LeaveTypeRepository)
        for name, description, max_days, carry_forward in DEFAULT_LEAVE_TYPES:
            if leave_types.get_by_name(name) is None:
                leave_types.add(
                    LeaveType(
                        name=name,
                        description=description,
                        max_days_per_year=max_days,
                        carry_forward=carry_forward,
                    )
                )
                created["leave_types"] += 1

    logger.info("Reference data seeded", extra=created)
