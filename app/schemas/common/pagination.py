"""
Page-based listing: query parameters in, items plus metadata out.
"""

from __future__ import annotations

from typing import Generic, List, TypeVar

from pydantic import Field

from app.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
]


class PaginationParams(BaseSchema):
    """1-indexed page and a page size capped at 100."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


class PaginationMeta(BaseSchema):
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    has_next: bool
    has_previous: bool


class PaginatedResponse(BaseSchema, Generic[T]):
    items: List[T]
    meta: PaginationMeta

    @classmethod
    def create(
        cls,
        items: List[T],
        total_items: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResponse[T]":
        """
        Example:
            45 items at 20 per page gives total_pages=3; page 3 has no next.
        """
        total_pages = -(-total_items // page_size)
        return cls(
            items=items,
            meta=PaginationMeta(
                total_items=total_items,
                total_pages=total_pages,
                current_page=page,
                page_size=page_size,
                has_next=page < total_pages,
                has_previous=page > 1,
            ),
        )
