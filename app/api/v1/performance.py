"""
Performance reviews, goals and the performance overview.

Reads need performance.read; everything that writes needs
performance.manage. Employees without manage rights only see their own
reviews and goals.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import (
    CurrentPrincipal,
    PaginationDep,
    PerformanceServiceDep,
    require_permission,
)
from app.models.base.enums import GoalStatus, ReviewStatus
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.common.response import SuccessResponse
from app.schemas.performance import (
    GoalCreate,
    GoalFilter,
    GoalResponse,
    GoalUpdate,
    PerformanceOverview,
    ReviewCreate,
    ReviewFilter,
    ReviewResponse,
    ReviewUpdate,
)
from app.services.common.permissions import (
    Permission,
    Principal,
    require_owner_or_permission,
    visible_user_id,
)

router = APIRouter(prefix="/performance")

can_read = Depends(require_permission(Permission.PERFORMANCE_READ))
can_manage = Depends(require_permission(Permission.PERFORMANCE_MANAGE))


# ==================== Reviews ====================

@router.get("/reviews", response_model=SuccessResponse[PaginatedResponse], dependencies=[can_read])
def list_reviews(
    principal: CurrentPrincipal,
    service: PerformanceServiceDep,
    pagination: PaginationDep,
    user_id: Optional[str] = Query(None),
    reviewer_id: Optional[str] = Query(None),
    status_: Optional[ReviewStatus] = Query(None, alias="status"),
):
    filters = ReviewFilter(
        user_id=visible_user_id(principal, user_id, Permission.PERFORMANCE_MANAGE),
        reviewer_id=reviewer_id,
        status=status_,
    )
    return SuccessResponse.create(service.list_reviews(filters, pagination))


@router.get("/reviews/{review_id}", response_model=SuccessResponse[ReviewResponse], dependencies=[can_read])
def get_review(review_id: str, principal: CurrentPrincipal, service: PerformanceServiceDep):
    review = service.get_review(review_id)
    require_owner_or_permission(principal, review.user_id, Permission.PERFORMANCE_MANAGE)
    return SuccessResponse.create(review)


@router.post(
    "/reviews",
    response_model=SuccessResponse[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_review(
    data: ReviewCreate,
    service: PerformanceServiceDep,
    principal: Principal = can_manage,
):
    review = service.create_review(principal.user_id, data)
    return SuccessResponse.create(review, "Performance review created successfully")


@router.put("/reviews/{review_id}", response_model=SuccessResponse[ReviewResponse], dependencies=[can_manage])
def update_review(review_id: str, data: ReviewUpdate, service: PerformanceServiceDep):
    review = service.update_review(review_id, data)
    return SuccessResponse.create(review, "Performance review updated successfully")


@router.delete("/reviews/{review_id}", response_model=SuccessResponse[None], dependencies=[can_manage])
def delete_review(review_id: str, service: PerformanceServiceDep):
    service.delete_review(review_id)
    return SuccessResponse.create(message="Performance review deleted successfully")


# ==================== Goals ====================

@router.get("/goals", response_model=SuccessResponse[List[GoalResponse]], dependencies=[can_read])
def list_goals(
    principal: CurrentPrincipal,
    service: PerformanceServiceDep,
    user_id: Optional[str] = Query(None),
    status_: Optional[GoalStatus] = Query(None, alias="status"),
):
    filters = GoalFilter(
        user_id=visible_user_id(principal, user_id, Permission.PERFORMANCE_MANAGE),
        status=status_,
    )
    return SuccessResponse.create(service.list_goals(filters))


@router.get("/goals/user/{user_id}", response_model=SuccessResponse[List[GoalResponse]], dependencies=[can_read])
def user_goals(user_id: str, principal: CurrentPrincipal, service: PerformanceServiceDep):
    require_owner_or_permission(principal, user_id, Permission.PERFORMANCE_MANAGE)
    return SuccessResponse.create(service.list_goals(GoalFilter(user_id=user_id)))


@router.post(
    "/goals",
    response_model=SuccessResponse[GoalResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
def create_goal(data: GoalCreate, service: PerformanceServiceDep):
    return SuccessResponse.create(service.create_goal(data), "Goal created successfully")


@router.put("/goals/{goal_id}", response_model=SuccessResponse[GoalResponse], dependencies=[can_manage])
def update_goal(goal_id: str, data: GoalUpdate, service: PerformanceServiceDep):
    return SuccessResponse.create(service.update_goal(goal_id, data), "Goal updated successfully")


@router.delete("/goals/{goal_id}", response_model=SuccessResponse[None], dependencies=[can_manage])
def delete_goal(goal_id: str, service: PerformanceServiceDep):
    service.delete_goal(goal_id)
    return SuccessResponse.create(message="Goal deleted successfully")


# ==================== Overview ====================

@router.get(
    "/analytics/overview",
    response_model=SuccessResponse[PerformanceOverview],
    dependencies=[can_read],
)
def overview(service: PerformanceServiceDep):
    return SuccessResponse.create(service.overview())
