"""PostgreSQL implementation of IOrganizationRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Organization
from iam.domain.value_objects import OrganizationId
from iam.infrastructure.models import OrganizationModel
from iam.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)
from iam.ports.exceptions import DuplicateOrganizationSlugError
from iam.ports.repositories import IOrganizationRepository


class OrganizationRepository(IOrganizationRepository):
    """Repository managing PostgreSQL storage for Organization aggregates.

    Pending domain events are collected on save and reported through the
    probe once the row has been flushed.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: OrganizationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultOrganizationRepositoryProbe()

    async def save(self, organization: Organization) -> None:
        """Insert or update an organization.

        Raises:
            DuplicateOrganizationSlugError: If the slug is already taken
        """
        stmt = select(OrganizationModel).where(
            OrganizationModel.id == organization.id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            model = OrganizationModel(id=organization.id.value, slug=organization.slug)
            self._session.add(model)

        model.name = organization.name
        model.is_active = organization.is_active
        model.disabled_at = organization.disabled_at
        model.logo_url = organization.logo_url

        try:
            await self._session.flush()
        except IntegrityError as e:
            if "organizations_slug" in str(e):
                self._probe.duplicate_organization_slug(organization.slug)
                raise DuplicateOrganizationSlugError(organization.slug) from e
            raise

        for event in organization.collect_events():
            self._probe.domain_event_recorded(event)
        self._probe.organization_saved(organization.id.value, organization.slug)

    async def get_by_id(self, organization_id: OrganizationId) -> Organization | None:
        stmt = select(OrganizationModel).where(
            OrganizationModel.id == organization_id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        self._probe.organization_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_slug(self, slug: str) -> Organization | None:
        stmt = select(OrganizationModel).where(OrganizationModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def list_all(self) -> list[Organization]:
        stmt = select(OrganizationModel).order_by(OrganizationModel.name)
        result = await self._session.execute(stmt)
        organizations = [self._to_domain(model) for model in result.scalars().all()]
        self._probe.organizations_listed(len(organizations))
        return organizations

    @staticmethod
    def _to_domain(model: OrganizationModel) -> Organization:
        return Organization(
            id=OrganizationId(value=model.id),
            name=model.name,
            slug=model.slug,
            is_active=model.is_active,
            disabled_at=model.disabled_at,
            logo_url=model.logo_url,
        )
