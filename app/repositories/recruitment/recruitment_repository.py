"""
Recruitment Repository - job postings, candidates and applications.
"""

from typing import Dict, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.models.base.enums import ApplicationStatus
from app.models.recruitment import Application, Candidate, JobPosting
from app.repositories.base.base_repository import BaseRepository
from app.schemas.recruitment.application import ApplicationFilter
from app.schemas.recruitment.job_posting import JobPostingFilter


class JobPostingRepository(BaseRepository[JobPosting]):
    def __init__(self, session: Session):
        super().__init__(JobPosting, session)

    def filtered_stmt(self, filters: JobPostingFilter) -> Select:
        stmt = select(JobPosting)
        if filters.status:
            stmt = stmt.where(JobPosting.status == filters.status)
        if filters.department_id:
            stmt = stmt.where(JobPosting.department_id == filters.department_id)
        return stmt.order_by(JobPosting.created_at.desc())


class CandidateRepository(BaseRepository[Candidate]):
    def __init__(self, session: Session):
        super().__init__(Candidate, session)

    def get_by_email(self, email: str) -> Optional[Candidate]:
        return self.session.scalars(
            select(Candidate).where(Candidate.email == email.lower())
        ).first()

    def search_stmt(self, search: Optional[str] = None) -> Select:
        """Case-insensitive match on first name, last name or email."""
        stmt = select(Candidate)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Candidate.first_name).like(pattern),
                    func.lower(Candidate.last_name).like(pattern),
                    func.lower(Candidate.email).like(pattern),
                )
            )
        return stmt.order_by(Candidate.created_at.desc())


class ApplicationRepository(BaseRepository[Application]):
    """
    Applications. The (candidate_id, job_posting_id) unique constraint
    decides duplicate submissions; `add` lets the IntegrityError through.
    """

    def __init__(self, session: Session):
        super().__init__(Application, session)

    def find_for(self, candidate_id: str, job_posting_id: str) -> Optional[Application]:
        stmt = select(Application).where(
            Application.candidate_id == candidate_id,
            Application.job_posting_id == job_posting_id,
        )
        return self.session.scalars(stmt).unique().first()

    def filtered_stmt(self, filters: ApplicationFilter) -> Select:
        stmt = select(Application)
        if filters.status:
            stmt = stmt.where(Application.status == filters.status)
        if filters.job_posting_id:
            stmt = stmt.where(Application.job_posting_id == filters.job_posting_id)
        if filters.candidate_id:
            stmt = stmt.where(Application.candidate_id == filters.candidate_id)
        return stmt.order_by(Application.application_date.desc())

    def count_by_status(self) -> Dict[str, int]:
        stmt = select(Application.status, func.count(Application.id)).group_by(Application.status)
        counts = {status.value: 0 for status in ApplicationStatus}
        for status, count in self.session.execute(stmt):
            counts[status.value] = int(count)
        return counts
