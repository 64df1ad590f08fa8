"""
User Repository - identity lookup, employee search and headcount queries.
"""
from typing import Dict, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.models.user import Department, Profile, Role, User
from app.repositories.base.base_repository import BaseRepository
from app.schemas.user.user_base import EmployeeFilter


class UserRepository(BaseRepository[User]):
    """
    Repository for User entity: authentication lookups, employee
    listing and headcount aggregation.
    """

    def __init__(self, session: Session):
        super().__init__(User, session)

    # ==================== Identity Lookups ====================

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Find user by email address (compared lowercase).
        """
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.session.scalars(stmt).unique().first()

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        stmt = select(User).where(User.employee_id == employee_id)
        return self.session.scalars(stmt).unique().first()

    def identity_taken(
        self,
        email: str,
        employee_id: str,
        exclude_user_id: Optional[str] = None,
    ) -> bool:
        """
        Check whether the email or employee id is already used.

        Args:
            email: Email to check
            employee_id: Employee identifier to check
            exclude_user_id: User ID to exclude from check (for updates)
        """
        stmt = select(func.count(User.id)).where(
            or_(
                func.lower(User.email) == email.lower(),
                User.employee_id == employee_id,
            )
        )
        if exclude_user_id:
            stmt = stmt.where(User.id != exclude_user_id)
        return (self.session.scalar(stmt) or 0) > 0

    def email_taken(self, email: str, exclude_user_id: Optional[str] = None) -> bool:
        stmt = select(func.count(User.id)).where(func.lower(User.email) == email.lower())
        if exclude_user_id:
            stmt = stmt.where(User.id != exclude_user_id)
        return (self.session.scalar(stmt) or 0) > 0

    # ==================== Listing ====================

    def search_stmt(self, filters: EmployeeFilter) -> Select:
        """
        Build the employee listing query from an explicit filter.

        Search matches employee id, email, first name or last name.
        """
        stmt = select(User).outerjoin(Profile, Profile.user_id == User.id)

        if filters.search:
            pattern = f"%{filters.search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.employee_id).like(pattern),
                    func.lower(User.email).like(pattern),
                    func.lower(Profile.first_name).like(pattern),
                    func.lower(Profile.last_name).like(pattern),
                )
            )
        if filters.department_id:
            stmt = stmt.where(User.department_id == filters.department_id)
        if filters.status:
            stmt = stmt.where(User.status == filters.status)

        column = getattr(User, filters.sort_by)
        stmt = stmt.order_by(column.desc() if filters.sort_order == "desc" else column.asc())
        return stmt

    # ==================== Aggregates ====================

    def count_by_status(self) -> Dict[str, int]:
        stmt = select(User.status, func.count(User.id)).group_by(User.status)
        return {status.value: int(count) for status, count in self.session.execute(stmt)}

    def count_by_department(self) -> Dict[str, int]:
        """Headcount per department name; users without one are 'Unassigned'."""
        stmt = (
            select(Department.name, func.count(User.id))
            .select_from(User)
            .outerjoin(Department, User.department_id == Department.id)
            .group_by(Department.name)
        )
        return {
            (name or "Unassigned"): int(count)
            for name, count in self.session.execute(stmt)
        }


class RoleRepository(BaseRepository[Role]):
    def __init__(self, session: Session):
        super().__init__(Role, session)

    def get_by_name(self, name: str) -> Optional[Role]:
        return self.session.scalars(select(Role).where(Role.name == name)).first()


class DepartmentRepository(BaseRepository[Department]):
    def __init__(self, session: Session):
        super().__init__(Department, session)

    def get_by_name(self, name: str) -> Optional[Department]:
        return self.session.scalars(
            select(Department).where(Department.name == name)
        ).first()
