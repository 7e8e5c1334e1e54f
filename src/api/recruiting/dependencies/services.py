"""Application service dependencies for recruiting routes."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.observation import (
    get_request_observation,
    get_tenant_observation,
)
from infrastructure.database.dependencies import get_write_session
from recruiting.application.job_service import JobService
from recruiting.application.member_service import MemberService
from recruiting.application.observability import (
    DefaultJobServiceProbe,
    DefaultMemberServiceProbe,
)
from recruiting.application.stage_service import StageService
from recruiting.infrastructure.job_repository import JobRepository
from recruiting.infrastructure.member_repository import MemberRepository
from recruiting.infrastructure.observability import DefaultRecruitingRepositoryProbe
from recruiting.infrastructure.stage_repository import StageRepository
from shared_kernel.observability_context import ObservationContext

Session = Annotated[AsyncSession, Depends(get_write_session)]
Observation = Annotated[ObservationContext, Depends(get_tenant_observation)]


def _repository_probe(
    observation: ObservationContext,
) -> DefaultRecruitingRepositoryProbe:
    return DefaultRecruitingRepositoryProbe().with_context(observation)


def _job_service(
    session: AsyncSession, observation: ObservationContext
) -> JobService:
    repository_probe = _repository_probe(observation)
    return JobService(
        session=session,
        job_repository=JobRepository(session, probe=repository_probe),
        stage_repository=StageRepository(session, probe=repository_probe),
        probe=DefaultJobServiceProbe().with_context(observation),
    )


def get_job_service(session: Session, observation: Observation) -> JobService:
    return _job_service(session, observation)


def get_public_job_service(
    session: Session,
    observation: Annotated[ObservationContext, Depends(get_request_observation)],
) -> JobService:
    """Job service for unauthenticated pages, which carry no tenant context."""
    return _job_service(session, observation)


def get_stage_service(session: Session, observation: Observation) -> StageService:
    repository_probe = _repository_probe(observation)
    return StageService(
        session=session,
        job_repository=JobRepository(session, probe=repository_probe),
        stage_repository=StageRepository(session, probe=repository_probe),
        probe=DefaultJobServiceProbe().with_context(observation),
    )


def get_member_service(session: Session, observation: Observation) -> MemberService:
    return MemberService(
        session=session,
        member_repository=MemberRepository(
            session, probe=_repository_probe(observation)
        ),
        probe=DefaultMemberServiceProbe().with_context(observation),
    )
