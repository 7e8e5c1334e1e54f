"""Repository protocols (ports) for the recruiting bounded context.

Every method takes the organization id and implementations must use it
as a query predicate, even where row-level security also applies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from recruiting.domain.aggregates import Job, Member, PipelineStage
from recruiting.domain.value_objects import JobId, JobStatus, MemberId, StageId


@dataclass(frozen=True)
class JobFilters:
    """Optional filters for job listings."""

    status: JobStatus | None = None
    search: str | None = None
    include_archived: bool = False


@runtime_checkable
class IJobRepository(Protocol):
    """Repository for Job aggregate persistence."""

    async def add(self, job: Job) -> None:
        ...

    async def save(self, job: Job) -> None:
        ...

    async def get(self, organization_id: str, job_id: JobId) -> Job | None:
        ...

    async def list_all(self, organization_id: str, filters: JobFilters) -> list[Job]:
        ...

    async def get_published(
        self, organization_slug: str, job_id: JobId
    ) -> Job | None:
        """A published job of an active organization, looked up by slug."""
        ...


@runtime_checkable
class IStageRepository(Protocol):
    """Repository for a job's pipeline stages.

    Stages carry no organization column; implementations scope them by
    joining to their job.
    """

    async def list_for_job(
        self, organization_id: str, job_id: JobId
    ) -> list[PipelineStage]:
        """Stages of the job ordered by position."""
        ...

    async def add_all(self, stages: list[PipelineStage]) -> None:
        ...

    async def save_positions(
        self, organization_id: str, job_id: JobId, stages: list[PipelineStage]
    ) -> None:
        """Persist the position of every given stage."""
        ...

    async def delete(self, organization_id: str, stage_id: StageId) -> bool:
        ...

    async def count_candidates(self, organization_id: str, stage_id: StageId) -> int:
        ...

    async def move_candidates(
        self, organization_id: str, from_stage_id: StageId, to_stage_id: StageId
    ) -> int:
        """Reassign every candidate of one stage to another; returns the count."""
        ...


@runtime_checkable
class IMemberRepository(Protocol):
    """Repository for talent-pool members."""

    async def add(self, member: Member) -> None:
        ...

    async def save(self, member: Member) -> None:
        ...

    async def get(self, organization_id: str, member_id: MemberId) -> Member | None:
        ...

    async def list_all(
        self, organization_id: str, search: str | None = None
    ) -> list[Member]:
        ...
