"""
Performance reviews and goals.
"""

from __future__ import annotations

from typing import Callable, List

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.performance import Goal, PerformanceReview
from app.repositories.performance import GoalRepository, PerformanceReviewRepository
from app.repositories.user import UserRepository
from app.schemas.common.pagination import PaginatedResponse, PaginationParams
from app.schemas.performance.goal import GoalCreate, GoalFilter, GoalResponse, GoalUpdate
from app.schemas.performance.overview import PerformanceOverview
from app.schemas.performance.performance_review import (
    ReviewCreate,
    ReviewFilter,
    ReviewResponse,
    ReviewUpdate,
)
from app.services.common import errors
from app.services.common.pagination import paginate
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


class PerformanceService:
    """CRUD for reviews and goals plus an aggregate overview."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _ensure_user(self, uow: UnitOfWork, user_id: str) -> None:
        if uow.get_repo(UserRepository).find_by_id(user_id) is None:
            raise errors.NotFoundError("Employee", user_id)

    def _get_review(self, repo: PerformanceReviewRepository, review_id: str) -> PerformanceReview:
        review = repo.find_by_id(review_id)
        if review is None:
            raise errors.NotFoundError("Performance review", review_id)
        return review

    def _get_goal(self, repo: GoalRepository, goal_id: str) -> Goal:
        goal = repo.find_by_id(goal_id)
        if goal is None:
            raise errors.NotFoundError("Goal", goal_id)
        return goal

    # ------------------------------------------------------------------ #
    # Reviews
    # ------------------------------------------------------------------ #
    def list_reviews(
        self,
        filters: ReviewFilter,
        params: PaginationParams,
    ) -> PaginatedResponse[ReviewResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(PerformanceReviewRepository)
            items, total = repo.paginate(repo.filtered_stmt(filters), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=ReviewResponse.from_review,
            )

    def get_review(self, review_id: str) -> ReviewResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(PerformanceReviewRepository)
            return ReviewResponse.from_review(self._get_review(repo, review_id))

    def create_review(self, reviewer_id: str, data: ReviewCreate) -> ReviewResponse:
        with UnitOfWork(self._session_factory) as uow:
            self._ensure_user(uow, data.user_id)
            review = PerformanceReview(reviewer_id=reviewer_id, **data.model_dump())
            repo = uow.get_repo(PerformanceReviewRepository)
            repo.add(review)
            uow.refresh(review)
            response = ReviewResponse.from_review(review)

        logger.info("Performance review created", extra={"review_id": response.id})
        return response

    def update_review(self, review_id: str, data: ReviewUpdate) -> ReviewResponse:
        changes = data.changes()
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(PerformanceReviewRepository)
            review = self._get_review(repo, review_id)

            start = changes.get("review_period_start") or review.review_period_start
            end = changes.get("review_period_end") or review.review_period_end
            if end < start:
                raise errors.ValidationError(
                    "review_period_end must be after or equal to review_period_start",
                    field="review_period_end",
                )

            repo.update(review, changes)
            return ReviewResponse.from_review(review)

    def delete_review(self, review_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(PerformanceReviewRepository)
            repo.delete(self._get_review(repo, review_id))

    # ------------------------------------------------------------------ #
    # Goals
    # ------------------------------------------------------------------ #
    def list_goals(self, filters: GoalFilter) -> List[GoalResponse]:
        with UnitOfWork(self._session_factory) as uow:
            goals = uow.get_repo(GoalRepository).filtered(filters)
            return [GoalResponse.model_validate(g) for g in goals]

    def create_goal(self, data: GoalCreate) -> GoalResponse:
        with UnitOfWork(self._session_factory) as uow:
            self._ensure_user(uow, data.user_id)
            goal = Goal(**data.model_dump())
            uow.get_repo(GoalRepository).add(goal)
            return GoalResponse.model_validate(goal)

    def update_goal(self, goal_id: str, data: GoalUpdate) -> GoalResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(GoalRepository)
            goal = self._get_goal(repo, goal_id)
            repo.update(goal, data.changes())
            return GoalResponse.model_validate(goal)

    def delete_goal(self, goal_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(GoalRepository)
            repo.delete(self._get_goal(repo, goal_id))

    # ------------------------------------------------------------------ #
    # Overview
    # ------------------------------------------------------------------ #
    def overview(self) -> PerformanceOverview:
        with UnitOfWork(self._session_factory) as uow:
            reviews = uow.get_repo(PerformanceReviewRepository)
            goals_by_status = uow.get_repo(GoalRepository).count_by_status()
            return PerformanceOverview(
                total_reviews=reviews.count(),
                average_rating=reviews.average_rating(),
                goals_by_status=goals_by_status,
                total_goals=sum(goals_by_status.values()),
            )
