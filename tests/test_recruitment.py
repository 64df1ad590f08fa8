from datetime import datetime, timezone

import pytest

from app.models.base.enums import JobPostingStatus
from app.repositories.recruitment import ApplicationRepository
from app.repositories.user import DepartmentRepository
from app.schemas.recruitment import ApplicationCreate, CandidateCreate, JobPostingCreate, JobPostingUpdate
from app.services.common import errors
from app.services.common.unit_of_work import UnitOfWork
from app.services.recruitment import RecruitmentService

DESCRIPTION = (
    "Build and maintain the services behind our HR platform, "
    "working closely with product and operations."
)


@pytest.fixture
def it_department(session_factory):
    with UnitOfWork(session_factory) as uow:
        return uow.get_repo(DepartmentRepository).get_by_name("IT").id


def post_job(client, user, department_id, **overrides):
    payload = {
        "title": "Senior Developer",
        "department_id": department_id,
        "description": DESCRIPTION,
        "employment_type": "FULL_TIME",
        "salary_range": "$70,000 - $90,000",
        "status": "ACTIVE",
    }
    payload.update(overrides)
    response = client.post("/api/v1/recruitment/jobs", headers=user.headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def add_candidate(client, user, email="jane.doe@example.com", **overrides):
    payload = {"first_name": "Jane", "last_name": "Doe", "email": email}
    payload.update(overrides)
    response = client.post("/api/v1/recruitment/candidates", headers=user.headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def apply(client, user, candidate_id, job_id):
    return client.post(
        "/api/v1/recruitment/applications",
        headers=user.headers,
        json={"candidate_id": candidate_id, "job_posting_id": job_id},
    )


# ==================== Job postings ====================

def test_hr_posts_job(client, hr_manager, it_department):
    job = post_job(client, hr_manager, it_department)
    assert job["posted_by"] == hr_manager.id
    assert job["department_name"] == "IT"
    assert job["posted_at"] is not None
    assert job["application_count"] == 0


def test_recruitment_requires_permission(client, employee, manager, hr_manager, it_department):
    assert client.get("/api/v1/recruitment/jobs", headers=employee.headers).status_code == 403
    assert client.get("/api/v1/recruitment/jobs", headers=manager.headers).status_code == 403
    assert client.get("/api/v1/recruitment/jobs", headers=hr_manager.headers).status_code == 200

    response = client.post(
        "/api/v1/recruitment/jobs",
        headers=employee.headers,
        json={
            "title": "Senior Developer",
            "department_id": it_department,
            "description": DESCRIPTION,
            "employment_type": "FULL_TIME",
        },
    )
    assert response.status_code == 403


def test_job_validation(client, hr_manager, it_department):
    short = client.post(
        "/api/v1/recruitment/jobs",
        headers=hr_manager.headers,
        json={
            "title": "Dev",
            "department_id": it_department,
            "description": "Too short",
            "employment_type": "FULL_TIME",
        },
    )
    assert short.status_code == 400

    unknown = client.post(
        "/api/v1/recruitment/jobs",
        headers=hr_manager.headers,
        json={
            "title": "Senior Developer",
            "department_id": "missing",
            "description": DESCRIPTION,
            "employment_type": "FULL_TIME",
        },
    )
    assert unknown.status_code == 404


def test_draft_is_stamped_when_published(session_factory, hr_manager, it_department):
    service = RecruitmentService(session_factory)
    draft = service.create_job(
        hr_manager.id,
        JobPostingCreate(
            title="Data Analyst",
            department_id=it_department,
            description=DESCRIPTION,
            employment_type="CONTRACT",
        ),
    )
    assert draft.status == JobPostingStatus.DRAFT
    assert draft.posted_at is None

    published_at = datetime(2024, 4, 1, 9, tzinfo=timezone.utc)
    published = service.update_job(
        draft.id,
        JobPostingUpdate(status=JobPostingStatus.ACTIVE),
        now=published_at,
    )
    assert published.status == JobPostingStatus.ACTIVE
    assert published.posted_at.replace(tzinfo=timezone.utc) == published_at


def test_job_listing_filters(client, hr_manager, it_department, session_factory):
    with UnitOfWork(session_factory) as uow:
        finance = uow.get_repo(DepartmentRepository).get_by_name("Finance").id
    post_job(client, hr_manager, it_department)
    post_job(client, hr_manager, finance, title="Accountant", status="DRAFT")

    active = client.get(
        "/api/v1/recruitment/jobs",
        params={"status": "ACTIVE"},
        headers=hr_manager.headers,
    ).json()["data"]
    assert active["total_items"] == 1
    assert active["items"][0]["title"] == "Senior Developer"

    in_finance = client.get(
        "/api/v1/recruitment/jobs",
        params={"department_id": finance},
        headers=hr_manager.headers,
    ).json()["data"]
    assert [j["title"] for j in in_finance["items"]] == ["Accountant"]


def test_deleting_job_removes_its_applications(client, session_factory, hr_manager, it_department):
    job = post_job(client, hr_manager, it_department)
    candidate = add_candidate(client, hr_manager)
    assert apply(client, hr_manager, candidate["id"], job["id"]).status_code == 201

    deleted = client.delete(f"/api/v1/recruitment/jobs/{job['id']}", headers=hr_manager.headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/recruitment/jobs/{job['id']}", headers=hr_manager.headers).status_code == 404

    with UnitOfWork(session_factory) as uow:
        assert uow.get_repo(ApplicationRepository).count() == 0


# ==================== Candidates ====================

def test_candidate_email_is_unique(client, hr_manager):
    created = add_candidate(client, hr_manager, email="Jane.Doe@Example.com")
    assert created["email"] == "jane.doe@example.com"
    assert created["full_name"] == "Jane Doe"

    duplicate = client.post(
        "/api/v1/recruitment/candidates",
        headers=hr_manager.headers,
        json={"first_name": "Janet", "last_name": "Doe", "email": "jane.doe@example.com"},
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["error_code"] == "DuplicateCandidate"


def test_candidate_search(client, hr_manager):
    add_candidate(client, hr_manager)
    add_candidate(client, hr_manager, email="omar@example.com", first_name="Omar", last_name="Haddad")

    found = client.get(
        "/api/v1/recruitment/candidates",
        params={"search": "hadd"},
        headers=hr_manager.headers,
    ).json()["data"]
    assert [c["first_name"] for c in found["items"]] == ["Omar"]


def test_candidate_update_and_delete(client, hr_manager):
    first = add_candidate(client, hr_manager)
    second = add_candidate(client, hr_manager, email="omar@example.com", first_name="Omar", last_name="Haddad")

    updated = client.put(
        f"/api/v1/recruitment/candidates/{first['id']}",
        headers=hr_manager.headers,
        json={"phone": "+15550100", "linkedin_profile": "https://www.linkedin.com/in/janedoe"},
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["linkedin_profile"] == "https://www.linkedin.com/in/janedoe"

    clash = client.put(
        f"/api/v1/recruitment/candidates/{second['id']}",
        headers=hr_manager.headers,
        json={"email": "jane.doe@example.com"},
    )
    assert clash.status_code == 400

    deleted = client.delete(f"/api/v1/recruitment/candidates/{first['id']}", headers=hr_manager.headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/recruitment/candidates/{first['id']}", headers=hr_manager.headers).status_code == 404


# ==================== Applications ====================

def test_application_lifecycle(client, hr_manager, it_department):
    job = post_job(client, hr_manager, it_department)
    candidate = add_candidate(client, hr_manager)

    created = apply(client, hr_manager, candidate["id"], job["id"])
    assert created.status_code == 201
    application = created.json()["data"]
    assert application["status"] == "APPLIED"
    assert application["candidate_name"] == "Jane Doe"
    assert application["job_title"] == "Senior Developer"

    moved = client.put(
        f"/api/v1/recruitment/applications/{application['id']}",
        headers=hr_manager.headers,
        json={"status": "INTERVIEW", "notes": "Strong portfolio"},
    )
    assert moved.json()["data"]["status"] == "INTERVIEW"

    listed = client.get(
        "/api/v1/recruitment/applications",
        params={"job_posting_id": job["id"]},
        headers=hr_manager.headers,
    ).json()["data"]
    assert listed["total_items"] == 1

    assert client.get(f"/api/v1/recruitment/jobs/{job['id']}", headers=hr_manager.headers).json()["data"][
        "application_count"
    ] == 1

    removed = client.delete(f"/api/v1/recruitment/applications/{application['id']}", headers=hr_manager.headers)
    assert removed.status_code == 200


def test_application_rejects_duplicates_and_closed_postings(client, hr_manager, it_department):
    job = post_job(client, hr_manager, it_department)
    draft = post_job(client, hr_manager, it_department, title="Platform Engineer", status="DRAFT")
    candidate = add_candidate(client, hr_manager)

    assert apply(client, hr_manager, candidate["id"], job["id"]).status_code == 201

    again = apply(client, hr_manager, candidate["id"], job["id"])
    assert again.status_code == 400
    assert again.json()["error_code"] == "DuplicateApplication"

    closed = apply(client, hr_manager, candidate["id"], draft["id"])
    assert closed.status_code == 400
    assert closed.json()["error_code"] == "JobPostingNotOpen"

    assert apply(client, hr_manager, "missing", job["id"]).status_code == 404


def test_concurrent_duplicate_application(monkeypatch, session_factory, hr_manager, it_department):
    service = RecruitmentService(session_factory)
    job = service.create_job(
        hr_manager.id,
        JobPostingCreate(
            title="Senior Developer",
            department_id=it_department,
            description=DESCRIPTION,
            employment_type="FULL_TIME",
            status=JobPostingStatus.ACTIVE,
        ),
    )
    candidate = service.create_candidate(
        CandidateCreate(first_name="Jane", last_name="Doe", email="jane.doe@example.com")
    )
    data = ApplicationCreate(candidate_id=candidate.id, job_posting_id=job.id)
    service.create_application(data)

    # Both submissions passed the duplicate check; the unique key decides.
    monkeypatch.setattr(ApplicationRepository, "find_for", lambda self, candidate_id, job_posting_id: None)
    with pytest.raises(errors.DuplicateApplication):
        service.create_application(data)

    with UnitOfWork(session_factory) as uow:
        assert uow.get_repo(ApplicationRepository).count() == 1


# ==================== Analytics ====================

def test_pipeline_and_metrics(client, hr_manager, it_department):
    job = post_job(client, hr_manager, it_department)
    post_job(client, hr_manager, it_department, title="Platform Engineer", status="DRAFT")
    jane = add_candidate(client, hr_manager)
    omar = add_candidate(client, hr_manager, email="omar@example.com", first_name="Omar", last_name="Haddad")

    hired = apply(client, hr_manager, jane["id"], job["id"]).json()["data"]
    apply(client, hr_manager, omar["id"], job["id"])
    client.put(
        f"/api/v1/recruitment/applications/{hired['id']}",
        headers=hr_manager.headers,
        json={"status": "HIRED"},
    )

    pipeline = client.get("/api/v1/recruitment/analytics/pipeline", headers=hr_manager.headers).json()["data"]
    assert pipeline["total_applications"] == 2
    assert pipeline["by_status"]["APPLIED"] == 1
    assert pipeline["by_status"]["HIRED"] == 1
    assert pipeline["by_status"]["OFFER"] == 0

    metrics = client.get("/api/v1/recruitment/analytics/metrics", headers=hr_manager.headers).json()["data"]
    assert metrics == {
        "total_jobs": 2,
        "active_jobs": 1,
        "total_candidates": 2,
        "total_applications": 2,
        "hired": 1,
    }
