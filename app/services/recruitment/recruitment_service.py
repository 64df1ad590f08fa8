"""
Recruitment: job postings, candidates, applications and pipeline
analytics.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import ApplicationStatus, JobPostingStatus
from app.models.recruitment import Application, Candidate, JobPosting
from app.repositories.recruitment import (
    ApplicationRepository,
    CandidateRepository,
    JobPostingRepository,
)
from app.repositories.user import DepartmentRepository
from app.schemas.common.pagination import PaginatedResponse, PaginationParams
from app.schemas.recruitment import (
    ApplicationCreate,
    ApplicationFilter,
    ApplicationResponse,
    ApplicationUpdate,
    CandidateCreate,
    CandidateResponse,
    CandidateUpdate,
    JobPostingCreate,
    JobPostingFilter,
    JobPostingResponse,
    JobPostingUpdate,
    RecruitmentMetrics,
    RecruitmentPipeline,
)
from app.services.common import errors
from app.services.common.pagination import paginate
from app.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


class RecruitmentService:
    """
    Hiring pipeline CRUD.

    Applications are only accepted for ACTIVE postings, and a candidate
    applies to a given posting once.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _ensure_department(self, uow: UnitOfWork, department_id: str) -> None:
        if uow.get_repo(DepartmentRepository).find_by_id(department_id) is None:
            raise errors.NotFoundError("Department", department_id)

    def _get_posting(self, repo: JobPostingRepository, posting_id: str) -> JobPosting:
        posting = repo.find_by_id(posting_id)
        if posting is None:
            raise errors.NotFoundError("Job posting", posting_id)
        return posting

    def _get_candidate(self, repo: CandidateRepository, candidate_id: str) -> Candidate:
        candidate = repo.find_by_id(candidate_id)
        if candidate is None:
            raise errors.NotFoundError("Candidate", candidate_id)
        return candidate

    def _get_application(self, repo: ApplicationRepository, application_id: str) -> Application:
        application = repo.find_by_id(application_id)
        if application is None:
            raise errors.NotFoundError("Application", application_id)
        return application

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return now or datetime.now(timezone.utc)

    # ------------------------------------------------------------------ #
    # Job postings
    # ------------------------------------------------------------------ #
    def list_jobs(
        self,
        filters: JobPostingFilter,
        params: PaginationParams,
    ) -> PaginatedResponse[JobPostingResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(JobPostingRepository)
            items, total = repo.paginate(repo.filtered_stmt(filters), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=JobPostingResponse.from_posting,
            )

    def get_job(self, posting_id: str) -> JobPostingResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(JobPostingRepository)
            return JobPostingResponse.from_posting(self._get_posting(repo, posting_id))

    def create_job(
        self,
        posted_by: str,
        data: JobPostingCreate,
        *,
        now: Optional[datetime] = None,
    ) -> JobPostingResponse:
        with UnitOfWork(self._session_factory) as uow:
            self._ensure_department(uow, data.department_id)
            posting = JobPosting(posted_by=posted_by, **data.model_dump())
            if posting.status == JobPostingStatus.ACTIVE:
                posting.posted_at = self._now(now)

            repo = uow.get_repo(JobPostingRepository)
            repo.add(posting)
            uow.refresh(posting)
            response = JobPostingResponse.from_posting(posting)

        logger.info("Job posting created", extra={"job_posting_id": response.id})
        return response

    def update_job(
        self,
        posting_id: str,
        data: JobPostingUpdate,
        *,
        now: Optional[datetime] = None,
    ) -> JobPostingResponse:
        changes = data.changes()
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(JobPostingRepository)
            posting = self._get_posting(repo, posting_id)

            if changes.get("department_id"):
                self._ensure_department(uow, changes["department_id"])
            if changes.get("status") == JobPostingStatus.ACTIVE and posting.posted_at is None:
                changes["posted_at"] = self._now(now)

            repo.update(posting, changes)
            uow.refresh(posting)
            return JobPostingResponse.from_posting(posting)

    def delete_job(self, posting_id: str) -> None:
        """Delete a posting together with its applications."""
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(JobPostingRepository)
            repo.delete(self._get_posting(repo, posting_id))

        logger.info("Job posting deleted", extra={"job_posting_id": posting_id})

    # ------------------------------------------------------------------ #
    # Candidates
    # ------------------------------------------------------------------ #
    def list_candidates(
        self,
        params: PaginationParams,
        search: Optional[str] = None,
    ) -> PaginatedResponse[CandidateResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(CandidateRepository)
            items, total = repo.paginate(repo.search_stmt(search), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=CandidateResponse.from_candidate,
            )

    def get_candidate(self, candidate_id: str) -> CandidateResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(CandidateRepository)
            return CandidateResponse.from_candidate(self._get_candidate(repo, candidate_id))

    def create_candidate(self, data: CandidateCreate) -> CandidateResponse:
        """
        Raises:
            DuplicateCandidate: If the email is already registered
        """
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(CandidateRepository)
            if repo.get_by_email(data.email) is not None:
                raise errors.DuplicateCandidate()

            candidate = Candidate(**data.to_columns())
            try:
                repo.add(candidate)
            except IntegrityError as exc:
                raise errors.DuplicateCandidate() from exc
            uow.refresh(candidate)
            return CandidateResponse.from_candidate(candidate)

    def update_candidate(self, candidate_id: str, data: CandidateUpdate) -> CandidateResponse:
        changes = data.changes()
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(CandidateRepository)
            candidate = self._get_candidate(repo, candidate_id)

            email = changes.get("email")
            if email and email != candidate.email:
                existing = repo.get_by_email(email)
                if existing is not None and existing.id != candidate.id:
                    raise errors.DuplicateCandidate()

            try:
                repo.update(candidate, changes)
            except IntegrityError as exc:
                raise errors.DuplicateCandidate() from exc
            return CandidateResponse.from_candidate(candidate)

    def delete_candidate(self, candidate_id: str) -> None:
        """Delete a candidate together with their applications."""
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(CandidateRepository)
            repo.delete(self._get_candidate(repo, candidate_id))

    # ------------------------------------------------------------------ #
    # Applications
    # ------------------------------------------------------------------ #
    def list_applications(
        self,
        filters: ApplicationFilter,
        params: PaginationParams,
    ) -> PaginatedResponse[ApplicationResponse]:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(ApplicationRepository)
            items, total = repo.paginate(repo.filtered_stmt(filters), params.offset, params.limit)
            return paginate(
                items=items,
                total_items=total,
                params=params,
                mapper=ApplicationResponse.from_application,
            )

    def get_application(self, application_id: str) -> ApplicationResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(ApplicationRepository)
            return ApplicationResponse.from_application(self._get_application(repo, application_id))

    def create_application(
        self,
        data: ApplicationCreate,
        *,
        now: Optional[datetime] = None,
    ) -> ApplicationResponse:
        """
        Record an application of a candidate to an ACTIVE posting.

        Raises:
            NotFoundError: Unknown candidate or posting
            JobPostingNotOpen: If the posting is not ACTIVE
            DuplicateApplication: If the candidate already applied
        """
        with UnitOfWork(self._session_factory) as uow:
            self._get_candidate(uow.get_repo(CandidateRepository), data.candidate_id)
            posting = self._get_posting(uow.get_repo(JobPostingRepository), data.job_posting_id)
            if posting.status != JobPostingStatus.ACTIVE:
                raise errors.JobPostingNotOpen(posting.status.value)

            repo = uow.get_repo(ApplicationRepository)
            if repo.find_for(data.candidate_id, data.job_posting_id) is not None:
                raise errors.DuplicateApplication()

            application = Application(
                application_date=self._now(now),
                status=ApplicationStatus.APPLIED,
                **data.model_dump(),
            )
            try:
                repo.add(application)
            except IntegrityError as exc:
                logger.warning(
                    "Concurrent duplicate application rejected",
                    extra={"candidate_id": data.candidate_id, "job_posting_id": data.job_posting_id},
                )
                raise errors.DuplicateApplication() from exc

            uow.refresh(application)
            response = ApplicationResponse.from_application(application)

        logger.info("Application received", extra={"application_id": response.id})
        return response

    def update_application(self, application_id: str, data: ApplicationUpdate) -> ApplicationResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(ApplicationRepository)
            application = self._get_application(repo, application_id)
            repo.update(application, data.changes())
            return ApplicationResponse.from_application(application)

    def delete_application(self, application_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(ApplicationRepository)
            repo.delete(self._get_application(repo, application_id))

    # ------------------------------------------------------------------ #
    # Analytics
    # ------------------------------------------------------------------ #
    def pipeline(self) -> RecruitmentPipeline:
        with UnitOfWork(self._session_factory) as uow:
            by_status = uow.get_repo(ApplicationRepository).count_by_status()
        return RecruitmentPipeline(total_applications=sum(by_status.values()), by_status=by_status)

    def metrics(self) -> RecruitmentMetrics:
        with UnitOfWork(self._session_factory) as uow:
            jobs = uow.get_repo(JobPostingRepository)
            by_status = uow.get_repo(ApplicationRepository).count_by_status()
            return RecruitmentMetrics(
                total_jobs=jobs.count(),
                active_jobs=jobs.count(JobPosting.status == JobPostingStatus.ACTIVE),
                total_candidates=uow.get_repo(CandidateRepository).count(),
                total_applications=sum(by_status.values()),
                hired=by_status[ApplicationStatus.HIRED.value],
            )
