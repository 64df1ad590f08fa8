"""
Reusable listing filters.
"""

from datetime import date as Date
from typing import Optional

from pydantic import Field, model_validator

from app.schemas.common.base import BaseFilterSchema

__all__ = ["DateRangeFilter"]


class DateRangeFilter(BaseFilterSchema):
    """Inclusive calendar range; either end may be left open."""

    start_date: Optional[Date] = Field(default=None, description="First day included")
    end_date: Optional[Date] = Field(default=None, description="Last day included")

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be after or equal to start_date")
        return self
