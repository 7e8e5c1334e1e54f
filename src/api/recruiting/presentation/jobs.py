"""HTTP routes for jobs and their pipeline stages.

All routes sit under the tenant slug; the tenant comes from the context
injected by the access gate, never from the path.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from iam.dependencies.guards import require_tenant_role
from iam.dependencies.tenant_context import get_tenant_context
from iam.domain.value_objects import OrganizationRole
from infrastructure.http_errors import raise_for_failure
from recruiting.application.job_service import JobService
from recruiting.application.stage_service import StageService
from recruiting.dependencies.services import get_job_service, get_stage_service
from recruiting.domain.value_objects import JobStatus
from recruiting.ports.repositories import JobFilters
from recruiting.presentation.models import (
    CreateJobRequest,
    CreateStageRequest,
    JobResponse,
    StageResponse,
    UpdateJobRequest,
    UpdateJobStatusRequest,
    UpdateJobTitleRequest,
)
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(prefix="/{tenant_slug}/vagas", tags=["jobs"])

# Viewers can read but not edit
require_editor = require_tenant_role(
    OrganizationRole.OWNER, OrganizationRole.ADMIN, OrganizationRole.MEMBER
)

Reader = Annotated[TenantContext, Depends(get_tenant_context)]
Editor = Annotated[TenantContext, Depends(require_editor)]
Jobs = Annotated[JobService, Depends(get_job_service)]
Stages = Annotated[StageService, Depends(get_stage_service)]


@router.get("")
async def list_jobs(
    tenant: Reader,
    service: Jobs,
    job_status: Annotated[JobStatus | None, Query(alias="status")] = None,
    search: str | None = None,
    include_archived: bool = False,
) -> list[JobResponse]:
    """List the organization's jobs, newest first."""
    jobs = raise_for_failure(
        await service.list_jobs(
            tenant,
            JobFilters(
                status=job_status, search=search, include_archived=include_archived
            ),
        )
    )
    return [JobResponse.from_domain(job, tenant.tenant_slug) for job in jobs]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    body: CreateJobRequest, tenant: Editor, service: Jobs
) -> JobResponse:
    """Create a draft job together with its pipeline stages."""
    details = raise_for_failure(
        await service.create_job(
            tenant,
            title=body.title,
            fields=body.job_fields(),
            stages=body.stage_templates(),
        )
    )
    return JobResponse.from_domain(details.job, tenant.tenant_slug, details.stages)


@router.get("/detalhes/{job_id}")
async def get_job(job_id: str, tenant: Reader, service: Jobs) -> JobResponse:
    details = raise_for_failure(await service.get_job(tenant, job_id))
    return JobResponse.from_domain(details.job, tenant.tenant_slug, details.stages)


@router.patch("/detalhes/{job_id}")
async def update_job(
    job_id: str, body: UpdateJobRequest, tenant: Editor, service: Jobs
) -> JobResponse:
    job = raise_for_failure(
        await service.update_job(tenant, job_id, body.model_dump(exclude_unset=True))
    )
    return JobResponse.from_domain(job, tenant.tenant_slug)


@router.put("/detalhes/{job_id}/titulo")
async def update_job_title(
    job_id: str, body: UpdateJobTitleRequest, tenant: Editor, service: Jobs
) -> JobResponse:
    job = raise_for_failure(await service.update_job_title(tenant, job_id, body.title))
    return JobResponse.from_domain(job, tenant.tenant_slug)


@router.put("/detalhes/{job_id}/status")
async def update_job_status(
    job_id: str, body: UpdateJobStatusRequest, tenant: Editor, service: Jobs
) -> JobResponse:
    job = raise_for_failure(
        await service.update_job_status(
            tenant,
            job_id,
            body.status,
            archive_reason=body.archive_reason,
            archive_notes=body.archive_notes,
        )
    )
    return JobResponse.from_domain(job, tenant.tenant_slug)


@router.post("/detalhes/{job_id}/etapas", status_code=status.HTTP_201_CREATED)
async def create_stage(
    job_id: str, body: CreateStageRequest, tenant: Editor, service: Stages
) -> StageResponse:
    stage = raise_for_failure(
        await service.create_stage(
            tenant, job_id, body.name, color=body.color, position=body.position
        )
    )
    return StageResponse.from_domain(stage)


@router.delete("/detalhes/{job_id}/etapas/{stage_id}")
async def delete_stage(
    job_id: str,
    stage_id: str,
    tenant: Editor,
    service: Stages,
    reassign_to: str | None = None,
) -> list[StageResponse]:
    """Delete a stage. Candidates in it must be moved with `reassign_to`."""
    remaining = raise_for_failure(
        await service.delete_stage(tenant, job_id, stage_id, reassign_to=reassign_to)
    )
    return [StageResponse.from_domain(stage) for stage in remaining]
