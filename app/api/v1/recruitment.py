"""
Recruitment: job postings, candidates, applications and pipeline
analytics. Reads need recruitment.read, writes recruitment.manage.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import PaginationDep, RecruitmentServiceDep, require_permission
from app.models.base.enums import ApplicationStatus, JobPostingStatus
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.common.response import SuccessResponse
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
from app.services.common.permissions import Permission, Principal

router = APIRouter(prefix="/recruitment")

can_read = Depends(require_permission(Permission.RECRUITMENT_READ))
can_manage = Depends(require_permission(Permission.RECRUITMENT_MANAGE))


# ==================== Job postings ====================

@router.get("/jobs", response_model=SuccessResponse[PaginatedResponse], dependencies=[can_read])
def list_jobs(
    service: RecruitmentServiceDep,
    pagination: PaginationDep,
    status_: Optional[JobPostingStatus] = Query(None, alias="status"),
    department_id: Optional[str] = Query(None),
):
    filters = JobPostingFilter(status=status_, department_id=department_id)
    return SuccessResponse.create(service.list_jobs(filters, pagination))


@router.get("/jobs/{posting_id}", response_model=SuccessResponse[JobPostingResponse], dependencies=[can_read])
def get_job(posting_id: str, service: RecruitmentServiceDep):
    return SuccessResponse.create(service.get_job(posting_id))


@router.post(
    "/jobs",
    response_model=SuccessResponse[JobPostingResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_job(
    data: JobPostingCreate,
    service: RecruitmentServiceDep,
    principal: Principal = can_manage,
):
    posting = service.create_job(principal.user_id, data)
    return SuccessResponse.create(posting, "Job posting created successfully")


@router.put("/jobs/{posting_id}", response_model=SuccessResponse[JobPostingResponse], dependencies=[can_manage])
def update_job(posting_id: str, data: JobPostingUpdate, service: RecruitmentServiceDep):
    return SuccessResponse.create(service.update_job(posting_id, data), "Job posting updated successfully")


@router.delete("/jobs/{posting_id}", response_model=SuccessResponse[None], dependencies=[can_manage])
def delete_job(posting_id: str, service: RecruitmentServiceDep):
    service.delete_job(posting_id)
    return SuccessResponse.create(message="Job posting deleted successfully")


# ==================== Candidates ====================

@router.get("/candidates", response_model=SuccessResponse[PaginatedResponse], dependencies=[can_read])
def list_candidates(
    service: RecruitmentServiceDep,
    pagination: PaginationDep,
    search: Optional[str] = Query(None, max_length=100),
):
    return SuccessResponse.create(service.list_candidates(pagination, search))


@router.get(
    "/candidates/{candidate_id}",
    response_model=SuccessResponse[CandidateResponse],
    dependencies=[can_read],
)
def get_candidate(candidate_id: str, service: RecruitmentServiceDep):
    return SuccessResponse.create(service.get_candidate(candidate_id))


@router.post(
    "/candidates",
    response_model=SuccessResponse[CandidateResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
def create_candidate(data: CandidateCreate, service: RecruitmentServiceDep):
    return SuccessResponse.create(service.create_candidate(data), "Candidate created successfully")


@router.put(
    "/candidates/{candidate_id}",
    response_model=SuccessResponse[CandidateResponse],
    dependencies=[can_manage],
)
def update_candidate(candidate_id: str, data: CandidateUpdate, service: RecruitmentServiceDep):
    candidate = service.update_candidate(candidate_id, data)
    return SuccessResponse.create(candidate, "Candidate updated successfully")


@router.delete("/candidates/{candidate_id}", response_model=SuccessResponse[None], dependencies=[can_manage])
def delete_candidate(candidate_id: str, service: RecruitmentServiceDep):
    service.delete_candidate(candidate_id)
    return SuccessResponse.create(message="Candidate deleted successfully")


# ==================== Applications ====================

@router.get("/applications", response_model=SuccessResponse[PaginatedResponse], dependencies=[can_read])
def list_applications(
    service: RecruitmentServiceDep,
    pagination: PaginationDep,
    status_: Optional[ApplicationStatus] = Query(None, alias="status"),
    job_posting_id: Optional[str] = Query(None),
    candidate_id: Optional[str] = Query(None),
):
    filters = ApplicationFilter(
        status=status_,
        job_posting_id=job_posting_id,
        candidate_id=candidate_id,
    )
    return SuccessResponse.create(service.list_applications(filters, pagination))


@router.get(
    "/applications/{application_id}",
    response_model=SuccessResponse[ApplicationResponse],
    dependencies=[can_read],
)
def get_application(application_id: str, service: RecruitmentServiceDep):
    return SuccessResponse.create(service.get_application(application_id))


@router.post(
    "/applications",
    response_model=SuccessResponse[ApplicationResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
def create_application(data: ApplicationCreate, service: RecruitmentServiceDep):
    return SuccessResponse.create(service.create_application(data), "Application created successfully")


@router.put(
    "/applications/{application_id}",
    response_model=SuccessResponse[ApplicationResponse],
    dependencies=[can_manage],
)
def update_application(application_id: str, data: ApplicationUpdate, service: RecruitmentServiceDep):
    application = service.update_application(application_id, data)
    return SuccessResponse.create(application, "Application updated successfully")


@router.delete(
    "/applications/{application_id}",
    response_model=SuccessResponse[None],
    dependencies=[can_manage],
)
def delete_application(application_id: str, service: RecruitmentServiceDep):
    service.delete_application(application_id)
    return SuccessResponse.create(message="Application deleted successfully")


# ==================== Analytics ====================

@router.get(
    "/analytics/pipeline",
    response_model=SuccessResponse[RecruitmentPipeline],
    dependencies=[can_read],
)
def pipeline(service: RecruitmentServiceDep):
    return SuccessResponse.create(service.pipeline())


@router.get(
    "/analytics/metrics",
    response_model=SuccessResponse[RecruitmentMetrics],
    dependencies=[can_read],
)
def metrics(service: RecruitmentServiceDep):
    return SuccessResponse.create(service.metrics())
