"""
Leave Request Repository

Leave requests and their state transitions. Transitions out of PENDING
are compare-and-set updates guarded on the current status.
"""

from datetime import date
from typing import Any, Dict, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.models.base.enums import LeaveStatus
from app.models.base.mixins import utcnow
from app.models.leave import LeaveRequest, LeaveType
from app.repositories.base.base_repository import BaseRepository
from app.schemas.leave.leave_application import LeaveRequestFilter


class LeaveRequestRepository(BaseRepository[LeaveRequest]):
    def __init__(self, session: Session):
        super().__init__(LeaveRequest, session)

    # ==================== Transitions ====================

    def transition_if_pending(
        self,
        request: LeaveRequest,
        status: LeaveStatus,
        values: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Set `status` (and extra column values) only if still PENDING.

        Returns:
            True if this call performed the transition
        """
        stmt = (
            update(LeaveRequest)
            .where(
                LeaveRequest.id == request.id,
                LeaveRequest.status == LeaveStatus.PENDING,
            )
            .values(status=status, updated_at=utcnow(), **(values or {}))
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.expire(request)
        return result.rowcount == 1

    # ==================== Listing ====================

    def filtered_stmt(self, filters: LeaveRequestFilter) -> Select:
        stmt = select(LeaveRequest)
        if filters.status:
            stmt = stmt.where(LeaveRequest.status == filters.status)
        if filters.user_id:
            stmt = stmt.where(LeaveRequest.user_id == filters.user_id)
        if filters.leave_type_id:
            stmt = stmt.where(LeaveRequest.leave_type_id == filters.leave_type_id)
        return stmt.order_by(LeaveRequest.created_at.desc())

    # ==================== Aggregates ====================

    def _range(self, stmt: Select, start_date: Optional[date], end_date: Optional[date]) -> Select:
        if start_date:
            stmt = stmt.where(LeaveRequest.start_date >= start_date)
        if end_date:
            stmt = stmt.where(LeaveRequest.start_date <= end_date)
        return stmt

    def count_by_status(
        self,
        user_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict[str, int]:
        """Counts keyed by every status value, zero-filled."""
        stmt = select(LeaveRequest.status, func.count(LeaveRequest.id)).group_by(
            LeaveRequest.status
        )
        if user_id:
            stmt = stmt.where(LeaveRequest.user_id == user_id)
        stmt = self._range(stmt, start_date, end_date)

        counts = {status.value: 0 for status in LeaveStatus}
        for status, count in self.session.execute(stmt):
            counts[status.value] = int(count)
        return counts

    def count_by_type(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict[str, int]:
        stmt = (
            select(LeaveType.name, func.count(LeaveRequest.id))
            .select_from(LeaveRequest)
            .join(LeaveType, LeaveRequest.leave_type_id == LeaveType.id)
            .group_by(LeaveType.name)
        )
        stmt = self._range(stmt, start_date, end_date)
        return {name: int(count) for name, count in self.session.execute(stmt)}

    def approved_days(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        stmt = select(func.coalesce(func.sum(LeaveRequest.days_requested), 0)).where(
            LeaveRequest.status == LeaveStatus.APPROVED
        )
        stmt = self._range(stmt, start_date, end_date)
        return int(self.session.scalar(stmt) or 0)
