"""
Performance Repository - reviews and goals.
"""

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.models.base.enums import GoalStatus
from app.models.performance import Goal, PerformanceReview
from app.models.user import User
from app.repositories.base.base_repository import BaseRepository
from app.schemas.performance.goal import GoalFilter
from app.schemas.performance.performance_review import ReviewFilter


class PerformanceReviewRepository(BaseRepository[PerformanceReview]):
    def __init__(self, session: Session):
        super().__init__(PerformanceReview, session)

    def filtered_stmt(self, filters: ReviewFilter) -> Select:
        stmt = select(PerformanceReview)
        if filters.user_id:
            stmt = stmt.where(PerformanceReview.user_id == filters.user_id)
        if filters.reviewer_id:
            stmt = stmt.where(PerformanceReview.reviewer_id == filters.reviewer_id)
        if filters.status:
            stmt = stmt.where(PerformanceReview.status == filters.status)
        return stmt.order_by(PerformanceReview.review_period_end.desc())

    def average_rating(self, user_id: Optional[str] = None) -> Optional[float]:
        stmt = select(func.avg(PerformanceReview.overall_rating)).where(
            PerformanceReview.overall_rating.is_not(None)
        )
        if user_id:
            stmt = stmt.where(PerformanceReview.user_id == user_id)
        value = self.session.scalar(stmt)
        return round(float(value), 2) if value is not None else None

    def in_period(
        self,
        start_date: date,
        end_date: date,
        department_id: Optional[str] = None,
    ) -> List[PerformanceReview]:
        """Reviews whose period starts in the range, newest first."""
        stmt = select(PerformanceReview).where(
            PerformanceReview.review_period_start >= start_date,
            PerformanceReview.review_period_start <= end_date,
        )
        if department_id:
            stmt = stmt.join(User, PerformanceReview.user_id == User.id).where(
                User.department_id == department_id
            )
        stmt = stmt.order_by(PerformanceReview.review_period_start.desc())
        return list(self.session.scalars(stmt).unique().all())


class GoalRepository(BaseRepository[Goal]):
    def __init__(self, session: Session):
        super().__init__(Goal, session)

    def filtered(self, filters: GoalFilter) -> List[Goal]:
        stmt = select(Goal)
        if filters.user_id:
            stmt = stmt.where(Goal.user_id == filters.user_id)
        if filters.status:
            stmt = stmt.where(Goal.status == filters.status)
        stmt = stmt.order_by(Goal.target_date, Goal.created_at)
        return list(self.session.scalars(stmt).all())

    def count_by_status(self, user_id: Optional[str] = None) -> Dict[str, int]:
        stmt = select(Goal.status, func.count(Goal.id)).group_by(Goal.status)
        if user_id:
            stmt = stmt.where(Goal.user_id == user_id)
        counts = {status.value: 0 for status in GoalStatus}
        for status, count in self.session.execute(stmt):
            counts[status.value] = int(count)
        return counts
