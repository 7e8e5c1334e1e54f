"""PostgreSQL implementation of IPipelineStore.

Reads the recruiting tables directly. Each method runs in its own
transaction; the stage reorder goes through the recruiting stage service
so positions are validated and written in one place.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import utc_now
from pipeline.domain.board import CandidateCard, StageSnapshot
from pipeline.infrastructure.rows import card_query, to_card
from pipeline.ports.exceptions import (
    CandidateNotFoundError,
    StageOrderRejectedError,
    StaleCandidateVersionError,
)
from pipeline.ports.store import BoardSnapshot, IPipelineStore
from recruiting.application.stage_service import StageService
from recruiting.infrastructure.models import (
    JobCandidateModel,
    JobModel,
    PipelineStageModel,
)
from recruiting.infrastructure.queries import job_scope, scoped_job_ids, stage_scope
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.results import ErrorCode


class PipelineStore(IPipelineStore):
    """Board storage over jobs, pipeline_stages and job_candidates."""

    def __init__(self, session: AsyncSession, stage_service: StageService):
        self._session = session
        self._stage_service = stage_service

    async def load(self, ctx: TenantContext, job_id: str) -> BoardSnapshot | None:
        org = ctx.tenant_id
        async with self._session.begin():
            job = await self._session.execute(
                job_scope(org).where(JobModel.id == job_id)
            )
            if job.scalar_one_or_none() is None:
                return None

            # Event streams reuse one session; refresh rows it already maps
            stage_rows = await self._session.execute(
                stage_scope(org)
                .where(PipelineStageModel.job_id == job_id)
                .order_by(PipelineStageModel.position)
                .execution_options(populate_existing=True)
            )
            stages = [
                StageSnapshot(
                    id=stage.id,
                    name=stage.name,
                    color=stage.color,
                    position=stage.position,
                )
                for stage in stage_rows.scalars().all()
            ]

            candidate_rows = await self._session.execute(
                card_query(org)
                .where(JobCandidateModel.job_id == job_id)
                .order_by(JobCandidateModel.added_at, JobCandidateModel.id)
                .execution_options(populate_existing=True)
            )
            candidates = [to_card(*row) for row in candidate_rows.all()]

        return BoardSnapshot(stages=stages, candidates=candidates)

    async def fetch_candidate(
        self, ctx: TenantContext, job_candidate_id: str
    ) -> CandidateCard | None:
        async with self._session.begin():
            result = await self._session.execute(
                card_query(ctx.tenant_id)
                .where(JobCandidateModel.id == job_candidate_id)
                .execution_options(populate_existing=True)
            )
            row = result.one_or_none()
        return to_card(*row) if row is not None else None

    async def persist_move(
        self,
        ctx: TenantContext,
        job_candidate_id: str,
        stage_id: str,
        expected_version: int,
    ) -> int:
        org = ctx.tenant_id
        target_in_same_job = exists(
            select(PipelineStageModel.id)
            .where(PipelineStageModel.id == stage_id)
            .where(PipelineStageModel.job_id == JobCandidateModel.job_id)
        )
        stmt = (
            update(JobCandidateModel)
            .where(JobCandidateModel.id == job_candidate_id)
            .where(JobCandidateModel.organization_id == org)
            .where(JobCandidateModel.job_id.in_(scoped_job_ids(org)))
            .where(JobCandidateModel.version == expected_version)
            .where(target_in_same_job)
            .values(
                stage_id=stage_id,
                version=JobCandidateModel.version + 1,
                updated_at=utc_now(),
            )
            .returning(JobCandidateModel.version)
            .execution_options(synchronize_session=False)
        )
        async with self._session.begin():
            new_version = (await self._session.execute(stmt)).scalar_one_or_none()
            if new_version is not None:
                return new_version

            current = await self._session.execute(
                select(JobCandidateModel.version)
                .where(JobCandidateModel.id == job_candidate_id)
                .where(JobCandidateModel.organization_id == org)
                .where(JobCandidateModel.job_id.in_(scoped_job_ids(org)))
            )
            version = current.scalar_one_or_none()

        if version is None:
            raise CandidateNotFoundError(f"Candidate {job_candidate_id} not found")
        if version != expected_version:
            raise StaleCandidateVersionError(job_candidate_id, expected_version)
        raise CandidateNotFoundError(f"Stage {stage_id} is not part of this job")

    async def save_stage_order(
        self, ctx: TenantContext, job_id: str, ordered_ids: Sequence[str]
    ) -> None:
        result = await self._stage_service.reorder_stages(ctx, job_id, ordered_ids)
        if not result.ok:
            code = result.code or ErrorCode.PERSISTENCE
            raise StageOrderRejectedError(result.error or "", code.value)
