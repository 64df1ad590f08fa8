from __future__ import annotations

from typing import Dict

from app.schemas.common.base import BaseSchema

__all__ = ["RecruitmentPipeline", "RecruitmentMetrics"]


class RecruitmentPipeline(BaseSchema):
    """Application counts for every pipeline stage, zero-filled."""

    total_applications: int
    by_status: Dict[str, int]


class RecruitmentMetrics(BaseSchema):
    total_jobs: int
    active_jobs: int
    total_candidates: int
    total_applications: int
    hired: int
