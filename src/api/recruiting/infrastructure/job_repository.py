"""PostgreSQL implementation of IJobRepository."""

from __future__ import annotations

from sqlalchemy import column, or_, select, table, true
from sqlalchemy.ext.asyncio import AsyncSession

from recruiting.domain.aggregates import Job
from recruiting.domain.value_objects import JobId, JobStatus, JobType
from recruiting.infrastructure.models import JobModel
from recruiting.infrastructure.observability import (
    DefaultRecruitingRepositoryProbe,
    RecruitingRepositoryProbe,
)
from recruiting.infrastructure.queries import job_scope
from recruiting.ports.repositories import IJobRepository, JobFilters

# Read-only view of the organizations table mapped by the IAM context
_organizations = table(
    "organizations",
    column("id"),
    column("slug"),
    column("is_active"),
)

# Columns copied verbatim between the aggregate and the row
_PLAIN_COLUMNS = (
    "title",
    "step",
    "is_published",
    "published_at",
    "owner_user_id",
    "sector",
    "company_id",
    "seniority",
    "city",
    "country",
    "work_model",
    "contract_type",
    "hiring_deadline",
    "description",
    "activities",
    "requirements",
    "benefits",
    "salary_min",
    "salary_max",
    "salary_currency",
    "publish_salary",
    "publish_company",
    "archive_reason",
    "archive_notes",
)


class JobRepository(IJobRepository):
    """Repository managing PostgreSQL storage for Job aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RecruitingRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRecruitingRepositoryProbe()

    async def add(self, job: Job) -> None:
        model = JobModel(id=job.id.value, organization_id=job.organization_id)
        self._apply(job, model)
        self._session.add(model)
        await self._session.flush()
        self._record(job)

    async def save(self, job: Job) -> None:
        model = await self._get_model(job.organization_id, job.id)
        if model is None:
            await self.add(job)
            return
        self._apply(job, model)
        await self._session.flush()
        self._record(job)

    async def get(self, organization_id: str, job_id: JobId) -> Job | None:
        model = await self._get_model(organization_id, job_id)
        return self._to_domain(model) if model is not None else None

    async def list_all(self, organization_id: str, filters: JobFilters) -> list[Job]:
        stmt = job_scope(organization_id)
        if filters.status is not None:
            stmt = stmt.where(JobModel.status == filters.status.value)
        elif not filters.include_archived:
            stmt = stmt.where(JobModel.status != JobStatus.ARCHIVED.value)
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            stmt = stmt.where(
                or_(JobModel.title.ilike(pattern), JobModel.city.ilike(pattern))
            )
        stmt = stmt.order_by(JobModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get_published(
        self, organization_slug: str, job_id: JobId
    ) -> Job | None:
        stmt = (
            select(JobModel)
            .join(_organizations, _organizations.c.id == JobModel.organization_id)
            .where(_organizations.c.slug == organization_slug)
            .where(_organizations.c.is_active == true())
            .where(JobModel.id == job_id.value)
            .where(JobModel.is_published.is_(True))
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def _get_model(self, organization_id: str, job_id: JobId) -> JobModel | None:
        stmt = job_scope(organization_id).where(JobModel.id == job_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _record(self, job: Job) -> None:
        for event in job.collect_events():
            self._probe.domain_event_recorded(event)
        self._probe.job_saved(job.id.value, job.organization_id)

    @staticmethod
    def _apply(job: Job, model: JobModel) -> None:
        model.job_type = job.job_type.value
        model.status = job.status.value
        for name in _PLAIN_COLUMNS:
            setattr(model, name, getattr(job, name))

    @staticmethod
    def _to_domain(model: JobModel) -> Job:
        return Job(
            id=JobId(value=model.id),
            organization_id=model.organization_id,
            job_type=JobType(model.job_type),
            status=JobStatus(model.status),
            **{name: getattr(model, name) for name in _PLAIN_COLUMNS},
        )
