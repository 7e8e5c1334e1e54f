"""Storage ports for the pipeline bounded context.

Every method takes the caller's tenant context; implementations filter
by its tenant id.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pipeline.domain.board import CandidateCard, StageSnapshot
from shared_kernel.middleware.tenant_context import TenantContext


@dataclass(frozen=True)
class BoardSnapshot:
    """Stages and candidates of one job as stored."""

    stages: list[StageSnapshot]
    candidates: list[CandidateCard]


@runtime_checkable
class IPipelineStore(Protocol):
    """Reads and writes behind the pipeline engine."""

    async def load(self, ctx: TenantContext, job_id: str) -> BoardSnapshot | None:
        """Stages and candidates of the job, or None if the job is not in
        the caller's tenant."""
        ...

    async def fetch_candidate(
        self, ctx: TenantContext, job_candidate_id: str
    ) -> CandidateCard | None:
        """One candidate joined with its member record."""
        ...

    async def persist_move(
        self,
        ctx: TenantContext,
        job_candidate_id: str,
        stage_id: str,
        expected_version: int,
    ) -> int:
        """Compare-and-set the candidate's stage; returns the new version.

        Raises:
            StaleCandidateVersionError: If the stored version differs
            CandidateNotFoundError: If the candidate or stage is not in the
                caller's tenant
        """
        ...

    async def save_stage_order(
        self, ctx: TenantContext, job_id: str, ordered_ids: Sequence[str]
    ) -> None:
        """Rewrite stage positions in one transaction.

        Raises:
            StageOrderRejectedError: If the order could not be saved
        """
        ...


@runtime_checkable
class IJobCandidateRepository(Protocol):
    """Adding members to and removing them from a job's pipeline."""

    async def first_stage_id(self, ctx: TenantContext, job_id: str) -> str | None:
        """Id of the leftmost stage of the job, or None if the job is not in
        the caller's tenant or has no stages."""
        ...

    async def stage_in_job(
        self, ctx: TenantContext, job_id: str, stage_id: str
    ) -> bool:
        ...

    async def member_exists(self, ctx: TenantContext, member_id: str) -> bool:
        ...

    async def add(
        self, ctx: TenantContext, job_id: str, member_id: str, stage_id: str
    ) -> CandidateCard:
        """Raises DuplicateCandidateError if the member is already in the job."""
        ...

    async def remove(self, ctx: TenantContext, job_candidate_id: str) -> bool:
        ...
