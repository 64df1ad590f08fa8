# app/services/common/pagination.py
"""
Turns one page of ORM rows plus a total count into a PaginatedResponse.
"""
from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from app.schemas.common.base import BaseSchema
from app.schemas.common.pagination import PaginatedResponse, PaginationParams

TModel = TypeVar("TModel")
TSchema = TypeVar("TSchema", bound=BaseSchema)


def paginate(
    *,
    items: Sequence[TModel],
    total_items: int,
    params: PaginationParams,
    mapper: Callable[[TModel], TSchema],
) -> PaginatedResponse[TSchema]:
    """
    Example:
        >>> paginate(
        ...     items=rows,
        ...     total_items=total,
        ...     params=params,
        ...     mapper=LeaveRequestResponse.from_request,
        ... )
    """
    return PaginatedResponse.create(
        items=[mapper(item) for item in items],
        total_items=total_items,
        page=params.page,
        page_size=params.page_size,
    )
