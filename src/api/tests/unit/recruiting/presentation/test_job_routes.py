"""Unit tests for job, stage and member routes.

Services are replaced through dependency_overrides; the tenant context
arrives as the headers the access gate would inject.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from recruiting.application.job_service import JobDetails, JobService
from recruiting.application.member_service import MemberService
from recruiting.application.stage_service import StageService
from recruiting.dependencies.services import (
    get_job_service,
    get_member_service,
    get_public_job_service,
    get_stage_service,
)
from recruiting.domain.aggregates import Job, Member
from recruiting.domain.aggregates.stage import stages_from_template
from recruiting.domain.value_objects import DEFAULT_STAGE_TEMPLATE, JobStatus
from recruiting.presentation import router
from shared_kernel.results import ActionResult, ErrorCode

ACME_ID = "01JAAAAAAAAAAAAAAAAAAAAAAA"


def context_headers(role: str = "owner") -> dict[str, str]:
    return {
        "x-tenant-id": ACME_ID,
        "x-tenant-slug": "acme",
        "x-user-id": "user-1",
        "x-user-role": role,
    }


@pytest.fixture
def job() -> Job:
    job = Job.create(ACME_ID, "Product Designer", owner_user_id="user-1")
    job.collect_events()
    return job


@pytest.fixture
def job_service(job) -> AsyncMock:
    service = AsyncMock(spec=JobService)
    stages = stages_from_template(job.id, DEFAULT_STAGE_TEMPLATE)
    details = JobDetails(job=job, stages=stages)
    service.create_job.return_value = ActionResult.success(details)
    service.get_job.return_value = ActionResult.success(details)
    service.list_jobs.return_value = ActionResult.success([job])
    return service


@pytest.fixture
def stage_service() -> AsyncMock:
    return AsyncMock(spec=StageService)


@pytest.fixture
def member_service() -> AsyncMock:
    return AsyncMock(spec=MemberService)


@pytest.fixture
def client(job_service, stage_service, member_service) -> TestClient:
    app = FastAPI()
    app.dependency_overrides[get_job_service] = lambda: job_service
    app.dependency_overrides[get_public_job_service] = lambda: job_service
    app.dependency_overrides[get_stage_service] = lambda: stage_service
    app.dependency_overrides[get_member_service] = lambda: member_service
    app.include_router(router)
    return TestClient(app, follow_redirects=False)


class TestJobRoutes:
    def test_list_jobs(self, client, job_service, job):
        response = client.get(
            "/acme/vagas?status=draft", headers=context_headers("viewer")
        )

        assert response.status_code == 200
        assert response.json()[0]["id"] == job.id.value
        filters = job_service.list_jobs.await_args.args[1]
        assert filters.status is JobStatus.DRAFT

    def test_create_job(self, client, job_service, job):
        response = client.post(
            "/acme/vagas",
            json={
                "title": "Product Designer",
                "city": "Recife",
                "stages": [
                    {"name": "Final", "position": 1},
                    {"name": "Início", "position": 0},
                ],
            },
            headers=context_headers("member"),
        )

        assert response.status_code == 201
        body = response.json()
        assert len(body["stages"]) == 5
        assert body["public_url"] == (
            f"/acme/public/vaga/product-designer--{job.id.value}"
        )
        kwargs = job_service.create_job.await_args.kwargs
        assert kwargs["fields"] == {"city": "Recife"}
        assert [s.name for s in kwargs["stages"]] == ["Início", "Final"]

    def test_viewer_cannot_create(self, client, job_service):
        response = client.post(
            "/acme/vagas",
            json={"title": "Dev"},
            headers=context_headers("viewer"),
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/acme/dashboard"
        job_service.create_job.assert_not_called()

    def test_not_found(self, client, job_service):
        job_service.get_job.return_value = ActionResult.failure(
            ErrorCode.NOT_FOUND, "Job not found"
        )

        response = client.get("/acme/vagas/detalhes/x", headers=context_headers())

        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found"

    def test_route_without_context_raises(self, client):
        from shared_kernel.middleware.tenant_context import TenantContextMissingError

        with pytest.raises(TenantContextMissingError):
            client.get("/acme/vagas")


class TestStageRoutes:
    def test_delete_occupied_stage_conflicts(self, client, stage_service, job):
        stage_service.delete_stage.return_value = ActionResult.failure(
            ErrorCode.CONFLICT, "Stage has 2 candidate(s)"
        )

        response = client.delete(
            f"/acme/vagas/detalhes/{job.id.value}/etapas/s1",
            headers=context_headers(),
        )

        assert response.status_code == 409
        stage_service.delete_stage.assert_awaited_once()
        assert stage_service.delete_stage.await_args.kwargs["reassign_to"] is None

    def test_invalid_color_is_rejected_by_schema(self, client, stage_service, job):
        response = client.post(
            f"/acme/vagas/detalhes/{job.id.value}/etapas",
            json={"name": "Teste", "color": "azul"},
            headers=context_headers(),
        )

        assert response.status_code == 422
        stage_service.create_stage.assert_not_called()


class TestMemberRoutes:
    def test_autosave_sends_only_present_fields(self, client, member_service):
        member = Member.create(ACME_ID, "Ana")
        member_service.update_member.return_value = ActionResult.success(member)

        response = client.patch(
            f"/acme/membros/{member.id.value}",
            json={"city": "Recife"},
            headers=context_headers(),
        )

        assert response.status_code == 200
        assert member_service.update_member.await_args.args[2] == {"city": "Recife"}


class TestPublicJobRoute:
    def test_salary_hidden_unless_published(self, client, job_service, job):
        job.salary_min = 5000
        job_service.get_public_job.return_value = ActionResult.success(job)

        response = client.get(f"/acme/public/vaga/product-designer--{job.id.value}")

        assert response.status_code == 200
        assert response.json()["salary_min"] is None
        job_service.get_public_job.assert_awaited_once_with(
            "acme", f"product-designer--{job.id.value}"
        )

    def test_unpublished_job_is_not_found(self, client, job_service):
        job_service.get_public_job.return_value = ActionResult.failure(
            ErrorCode.NOT_FOUND, "Job not found"
        )

        assert client.get("/acme/public/vaga/x--y").status_code == 404
