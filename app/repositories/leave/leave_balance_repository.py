"""
Leave Balance Repository

Balances per (user, leave type, year). Consumption goes through a
conditional UPDATE so two concurrent approvals cannot both draw on the
last remaining days.
"""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.base.mixins import utcnow
from app.models.leave import LeaveBalance
from app.repositories.base.base_repository import BaseRepository


class LeaveBalanceRepository(BaseRepository[LeaveBalance]):
    """
    Leave balance repository with allocation and usage tracking.
    """

    def __init__(self, session: Session):
        super().__init__(LeaveBalance, session)

    def get(self, user_id: str, leave_type_id: str, year: int) -> Optional[LeaveBalance]:
        stmt = select(LeaveBalance).where(
            LeaveBalance.user_id == user_id,
            LeaveBalance.leave_type_id == leave_type_id,
            LeaveBalance.year == year,
        )
        return self.session.scalars(stmt).unique().first()

    def consume(self, balance: LeaveBalance, days: float) -> bool:
        """
        Move `days` from remaining to used if enough remain.

        Returns:
            True if the row was updated, False if the balance was short
        """
        stmt = (
            update(LeaveBalance)
            .where(
                LeaveBalance.id == balance.id,
                LeaveBalance.remaining_days >= days,
            )
            .values(
                remaining_days=LeaveBalance.remaining_days - days,
                used_days=LeaveBalance.used_days + days,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.expire(balance)
        return result.rowcount == 1

    def list_for_year(self, year: int, user_id: Optional[str] = None) -> List[LeaveBalance]:
        stmt = select(LeaveBalance).where(LeaveBalance.year == year)
        if user_id:
            stmt = stmt.where(LeaveBalance.user_id == user_id)
        stmt = stmt.order_by(LeaveBalance.user_id, LeaveBalance.leave_type_id)
        return list(self.session.scalars(stmt).unique().all())
