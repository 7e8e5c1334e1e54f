"""Application service dependencies for IAM routes."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultOrganizationServiceProbe,
    DefaultPortalLoginProbe,
)
from iam.application.organization_service import OrganizationService
from iam.application.portal_login import PortalLoginService
from iam.dependencies.authentication import get_portal_token_codec
from iam.dependencies.observation import get_request_observation
from iam.domain.value_objects import PortalKind
from iam.infrastructure.capability_providers import MasterAdminStore
from iam.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    DefaultPortalRepositoryProbe,
)
from iam.infrastructure.organization_repository import OrganizationRepository
from iam.infrastructure.portal_repositories import (
    OneTimePasscodeRepository,
    PortalAccountRepository,
)
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import get_portal_auth_settings, get_settings
from shared_kernel.observability_context import ObservationContext

Observation = Annotated[ObservationContext, Depends(get_request_observation)]


def get_organization_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    observation: Observation,
) -> OrganizationService:
    return OrganizationService(
        session=session,
        organization_repository=OrganizationRepository(
            session,
            probe=DefaultOrganizationRepositoryProbe().with_context(observation),
        ),
        master_admin_store=MasterAdminStore(session),
        probe=DefaultOrganizationServiceProbe().with_context(observation),
    )


def _portal_login_service(
    session: AsyncSession, kind: PortalKind, observation: ObservationContext
) -> PortalLoginService:
    return PortalLoginService(
        session=session,
        accounts=PortalAccountRepository(session, kind),
        passcodes=OneTimePasscodeRepository(
            session,
            kind,
            probe=DefaultPortalRepositoryProbe().with_context(observation),
        ),
        codec=get_portal_token_codec(kind),
        settings=get_portal_auth_settings(),
        log_codes=get_settings().environment == "development",
        probe=DefaultPortalLoginProbe().with_context(observation),
    )


def get_candidate_login_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    observation: Observation,
) -> PortalLoginService:
    return _portal_login_service(session, PortalKind.CANDIDATE, observation)


def get_client_login_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    observation: Observation,
) -> PortalLoginService:
    return _portal_login_service(session, PortalKind.CLIENT, observation)
