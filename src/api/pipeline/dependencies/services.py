"""Dependencies for pipeline routes."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.observation import get_tenant_observation
from infrastructure.database.dependencies import get_write_session
from pipeline.application.candidate_service import CandidateService
from pipeline.application.observability import DefaultPipelineProbe, PipelineProbe
from pipeline.infrastructure.job_candidate_repository import JobCandidateRepository
from pipeline.infrastructure.pipeline_store import PipelineStore
from recruiting.application.observability import DefaultJobServiceProbe
from recruiting.application.stage_service import StageService
from recruiting.infrastructure.job_repository import JobRepository
from recruiting.infrastructure.observability import DefaultRecruitingRepositoryProbe
from recruiting.infrastructure.stage_repository import StageRepository
from shared_kernel.observability_context import ObservationContext

Observation = Annotated[ObservationContext, Depends(get_tenant_observation)]


def build_pipeline_store(
    session: AsyncSession, observation: ObservationContext
) -> PipelineStore:
    """Store over `session`; also used by the event stream, which owns its
    session for the lifetime of the connection."""
    repository_probe = DefaultRecruitingRepositoryProbe().with_context(observation)
    return PipelineStore(
        session=session,
        stage_service=StageService(
            session=session,
            job_repository=JobRepository(session, probe=repository_probe),
            stage_repository=StageRepository(session, probe=repository_probe),
            probe=DefaultJobServiceProbe().with_context(observation),
        ),
    )


def get_pipeline_store(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    observation: Observation,
) -> PipelineStore:
    return build_pipeline_store(session, observation)


def get_pipeline_probe(observation: Observation) -> PipelineProbe:
    """Engine probe bound to the request's tenant and caller."""
    return DefaultPipelineProbe().with_context(observation)


def get_candidate_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[PipelineProbe, Depends(get_pipeline_probe)],
) -> CandidateService:
    return CandidateService(
        session=session,
        candidate_repository=JobCandidateRepository(session),
        probe=probe,
    )
