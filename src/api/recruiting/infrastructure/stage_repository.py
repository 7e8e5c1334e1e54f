"""PostgreSQL implementation of IStageRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from recruiting.domain.aggregates import PipelineStage
from recruiting.domain.value_objects import JobId, StageId
from recruiting.infrastructure.models import JobCandidateModel, PipelineStageModel
from recruiting.infrastructure.observability import (
    DefaultRecruitingRepositoryProbe,
    RecruitingRepositoryProbe,
)
from recruiting.infrastructure.queries import scoped_job_ids, stage_scope
from recruiting.ports.repositories import IStageRepository


class StageRepository(IStageRepository):
    """Pipeline stages, always scoped through their job's organization."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RecruitingRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRecruitingRepositoryProbe()

    async def list_for_job(
        self, organization_id: str, job_id: JobId
    ) -> list[PipelineStage]:
        stmt = (
            stage_scope(organization_id)
            .where(PipelineStageModel.job_id == job_id.value)
            .order_by(PipelineStageModel.position)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def add_all(self, stages: list[PipelineStage]) -> None:
        self._session.add_all(
            [
                PipelineStageModel(
                    id=stage.id.value,
                    job_id=stage.job_id.value,
                    name=stage.name,
                    color=stage.color,
                    position=stage.position,
                )
                for stage in stages
            ]
        )
        await self._session.flush()
        if stages:
            self._probe.stages_saved(stages[0].job_id.value, len(stages))

    async def save_positions(
        self, organization_id: str, job_id: JobId, stages: list[PipelineStage]
    ) -> None:
        # The (job_id, position) constraint is deferred to commit time
        for stage in stages:
            await self._session.execute(
                update(PipelineStageModel)
                .where(PipelineStageModel.id == stage.id.value)
                .where(PipelineStageModel.job_id == job_id.value)
                .where(PipelineStageModel.job_id.in_(scoped_job_ids(organization_id)))
                .values(position=stage.position)
                .execution_options(synchronize_session=False)
            )
        self._probe.stages_saved(job_id.value, len(stages))

    async def delete(self, organization_id: str, stage_id: StageId) -> bool:
        result = await self._session.execute(
            delete(PipelineStageModel)
            .where(PipelineStageModel.id == stage_id.value)
            .where(PipelineStageModel.job_id.in_(scoped_job_ids(organization_id)))
            .execution_options(synchronize_session=False)
        )
        return bool(result.rowcount)

    async def count_candidates(self, organization_id: str, stage_id: StageId) -> int:
        stmt = (
            select(func.count())
            .select_from(JobCandidateModel)
            .where(JobCandidateModel.stage_id == stage_id.value)
            .where(JobCandidateModel.organization_id == organization_id)
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def move_candidates(
        self, organization_id: str, from_stage_id: StageId, to_stage_id: StageId
    ) -> int:
        result = await self._session.execute(
            update(JobCandidateModel)
            .where(JobCandidateModel.stage_id == from_stage_id.value)
            .where(JobCandidateModel.organization_id == organization_id)
            .values(
                stage_id=to_stage_id.value,
                version=JobCandidateModel.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        self._probe.candidates_reassigned(
            from_stage_id.value, to_stage_id.value, result.rowcount
        )
        return result.rowcount

    @staticmethod
    def _to_domain(model: PipelineStageModel) -> PipelineStage:
        return PipelineStage(
            id=StageId(value=model.id),
            job_id=JobId(value=model.job_id),
            name=model.name,
            color=model.color,
            position=model.position,
        )
