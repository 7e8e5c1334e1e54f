"""Public job pages. Served without authentication."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from infrastructure.http_errors import raise_for_failure
from recruiting.application.job_service import JobService
from recruiting.dependencies.services import get_public_job_service
from recruiting.presentation.models import PublicJobResponse

router = APIRouter(tags=["public"])


@router.get("/{tenant_slug}/public/vaga/{segment}")
async def get_public_job(
    tenant_slug: str,
    segment: str,
    service: Annotated[JobService, Depends(get_public_job_service)],
) -> PublicJobResponse:
    """A published job, addressed as `<slug>--<job_id>`."""
    job = raise_for_failure(await service.get_public_job(tenant_slug, segment))
    return PublicJobResponse.from_domain(job)
