"""
Leave Type Repository
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.leave import LeaveType
from app.repositories.base.base_repository import BaseRepository


class LeaveTypeRepository(BaseRepository[LeaveType]):
    def __init__(self, session: Session):
        super().__init__(LeaveType, session)

    def get_by_name(self, name: str) -> Optional[LeaveType]:
        stmt = select(LeaveType).where(func.lower(LeaveType.name) == name.lower())
        return self.session.scalars(stmt).first()

    def list_types(self, active_only: bool = False) -> List[LeaveType]:
        stmt = select(LeaveType).order_by(LeaveType.name)
        if active_only:
            stmt = stmt.where(LeaveType.is_active.is_(True))
        return list(self.session.scalars(stmt).all())
