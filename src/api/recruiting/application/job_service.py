"""Application service for job postings.

All operations act on the caller's organization only; jobs of other
organizations are reported as not found.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recruiting.application.observability import (
    DefaultJobServiceProbe,
    JobServiceProbe,
)
from recruiting.domain.aggregates import Job, PipelineStage
from recruiting.domain.aggregates.stage import stages_from_template
from recruiting.domain.slugs import parse_public_job_id
from recruiting.domain.value_objects import (
    DEFAULT_STAGE_TEMPLATE,
    JobId,
    JobStatus,
    StageTemplate,
)
from recruiting.ports.repositories import IJobRepository, IStageRepository, JobFilters
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.results import ActionResult, ErrorCode

JOB_NOT_FOUND = "Job not found"


@dataclass(frozen=True)
class JobDetails:
    """A job with its pipeline stages in position order."""

    job: Job
    stages: list[PipelineStage]


def parse_job_id(job_id: str) -> JobId | None:
    try:
        return JobId.from_string(job_id)
    except ValueError:
        return None


class JobService:
    """Create, edit and list the organization's jobs."""

    def __init__(
        self,
        session: AsyncSession,
        job_repository: IJobRepository,
        stage_repository: IStageRepository,
        probe: JobServiceProbe | None = None,
    ):
        self._session = session
        self._jobs = job_repository
        self._stages = stage_repository
        self._probe = probe or DefaultJobServiceProbe()

    async def create_job(
        self,
        ctx: TenantContext,
        title: str,
        fields: Mapping[str, Any] | None = None,
        stages: Sequence[StageTemplate] | None = None,
    ) -> ActionResult[JobDetails]:
        """Create a draft job with its pipeline stages.

        Stages come from `stages` in the given order, or from the default
        template when none are given. The job owner defaults to the caller.
        """
        fields = dict(fields or {})
        owner = fields.pop("owner_user_id", None) or ctx.user_id
        template = list(stages) if stages else list(DEFAULT_STAGE_TEMPLATE)

        try:
            job = Job.create(
                organization_id=ctx.tenant_id,
                title=title,
                owner_user_id=owner,
                stage_count=len(template),
                fields=fields,
            )
            job_stages = stages_from_template(job.id, template)
        except ValueError as e:  # title, stage or job type
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))

        try:
            async with self._session.begin():
                await self._jobs.add(job)
                await self._stages.add_all(job_stages)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("create_job", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save job")

        self._probe.job_created(job.id.value, ctx.tenant_id, len(job_stages))
        return ActionResult.success(JobDetails(job=job, stages=job_stages))

    async def update_job(
        self, ctx: TenantContext, job_id: str, changes: Mapping[str, Any]
    ) -> ActionResult[Job]:
        """Partial update; rich-text fields are sanitized."""
        return await self._mutate(
            ctx,
            job_id,
            "update_job",
            lambda job: job.update(changes),
            on_success=lambda job: self._probe.job_updated(
                job.id.value, sorted(changes)
            ),
        )

    async def update_job_title(
        self, ctx: TenantContext, job_id: str, title: str
    ) -> ActionResult[Job]:
        return await self._mutate(
            ctx,
            job_id,
            "update_job_title",
            lambda job: job.rename(title),
            on_success=lambda job: self._probe.job_updated(job.id.value, ["title"]),
        )

    async def update_job_status(
        self,
        ctx: TenantContext,
        job_id: str,
        status: JobStatus,
        archive_reason: str | None = None,
        archive_notes: str | None = None,
    ) -> ActionResult[Job]:
        """Change lifecycle status; step and publication follow the status."""
        return await self._mutate(
            ctx,
            job_id,
            "update_job_status",
            lambda job: job.change_status(
                status, archive_reason=archive_reason, archive_notes=archive_notes
            ),
            on_success=lambda job: self._probe.job_status_changed(
                job.id.value, status.value
            ),
        )

    async def list_jobs(
        self, ctx: TenantContext, filters: JobFilters | None = None
    ) -> ActionResult[list[Job]]:
        try:
            async with self._session.begin():
                jobs = await self._jobs.list_all(ctx.tenant_id, filters or JobFilters())
        except SQLAlchemyError as e:
            self._probe.persistence_failed("list_jobs", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not load jobs")
        return ActionResult.success(jobs)

    async def get_job(
        self, ctx: TenantContext, job_id: str
    ) -> ActionResult[JobDetails]:
        parsed = parse_job_id(job_id)
        if parsed is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
        try:
            async with self._session.begin():
                job = await self._jobs.get(ctx.tenant_id, parsed)
                stages = (
                    await self._stages.list_for_job(ctx.tenant_id, parsed)
                    if job is not None
                    else []
                )
        except SQLAlchemyError as e:
            self._probe.persistence_failed("get_job", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not load job")
        if job is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
        return ActionResult.success(JobDetails(job=job, stages=stages))

    async def get_public_job(
        self, tenant_slug: str, segment: str
    ) -> ActionResult[Job]:
        """Resolve a public job URL segment to a published job.

        Unpublished jobs and jobs of disabled organizations are not found.
        """
        raw_id = parse_public_job_id(segment)
        parsed = parse_job_id(raw_id) if raw_id else None
        if parsed is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
        async with self._session.begin():
            job = await self._jobs.get_published(tenant_slug, parsed)
        if job is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
        return ActionResult.success(job)

    async def _mutate(
        self, ctx: TenantContext, job_id: str, operation: str, change, on_success
    ) -> ActionResult[Job]:
        parsed = parse_job_id(job_id)
        if parsed is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
        try:
            async with self._session.begin():
                job = await self._jobs.get(ctx.tenant_id, parsed)
                if job is None:
                    return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
                change(job)
                await self._jobs.save(job)
        except ValueError as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))
        except SQLAlchemyError as e:
            self._probe.persistence_failed(operation, e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save job")

        on_success(job)
        return ActionResult.success(job)
