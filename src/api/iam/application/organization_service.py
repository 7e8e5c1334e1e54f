"""Organization application service for IAM bounded context.

Platform master admins create, enable and disable organizations and
grant the master admin capability. Organization owners and admins edit
their own organization's settings.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from iam.application.tenant_helpers import has_role
from iam.domain.aggregates import Organization
from iam.domain.exceptions import InvalidOrganizationNameError, InvalidSlugError
from iam.domain.value_objects import SETTINGS_ROLES, OrganizationId, UserId
from iam.ports.exceptions import DuplicateOrganizationSlugError
from iam.ports.repositories import IMasterAdminStore, IOrganizationRepository
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.results import ActionResult, ErrorCode


class OrganizationService:
    """Application service for organization management."""

    def __init__(
        self,
        session: AsyncSession,
        organization_repository: IOrganizationRepository,
        master_admin_store: IMasterAdminStore,
        probe: OrganizationServiceProbe | None = None,
    ):
        self._session = session
        self._organizations = organization_repository
        self._master_admins = master_admin_store
        self._probe = probe or DefaultOrganizationServiceProbe()

    async def create_organization(
        self, name: str, slug: str | None = None
    ) -> ActionResult[Organization]:
        """Create an active organization; the slug defaults to one derived
        from the name."""
        try:
            organization = Organization.create(name=name, slug=slug)
        except (InvalidOrganizationNameError, InvalidSlugError) as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))

        try:
            async with self._session.begin():
                if await self._organizations.get_by_slug(organization.slug):
                    raise DuplicateOrganizationSlugError(organization.slug)
                await self._organizations.save(organization)
        except DuplicateOrganizationSlugError:
            self._probe.duplicate_organization_slug(organization.slug)
            return ActionResult.failure(
                ErrorCode.CONFLICT,
                f"Slug '{organization.slug}' is already in use",
            )
        except SQLAlchemyError as e:
            self._probe.persistence_failed("create_organization", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save")

        self._probe.organization_created(organization.id.value, organization.slug)
        return ActionResult.success(organization)

    async def list_organizations(self) -> list[Organization]:
        async with self._session.begin():
            return await self._organizations.list_all()

    async def set_organization_active(
        self, organization_id: str, is_active: bool
    ) -> ActionResult[Organization]:
        """Enable or soft-disable an organization."""
        try:
            org_id = OrganizationId.from_string(organization_id)
        except ValueError:
            return ActionResult.failure(ErrorCode.NOT_FOUND, "Organization not found")

        try:
            async with self._session.begin():
                organization = await self._organizations.get_by_id(org_id)
                if organization is None:
                    return ActionResult.failure(
                        ErrorCode.NOT_FOUND, "Organization not found"
                    )
                organization.set_active(is_active)
                await self._organizations.save(organization)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("set_organization_active", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save")

        self._probe.organization_activation_changed(org_id.value, is_active)
        return ActionResult.success(organization)

    async def disable_organization(
        self, organization_id: str
    ) -> ActionResult[Organization]:
        """Soft delete. Organizations are never removed from storage."""
        return await self.set_organization_active(organization_id, False)

    async def set_master_admin(
        self, user_id: str, promote: bool
    ) -> ActionResult[None]:
        """Grant or revoke master admin in every capability source."""
        try:
            target = UserId.from_string(user_id)
        except ValueError as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))

        try:
            async with self._session.begin():
                await self._master_admins.set_master_admin(target.value, promote)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("set_master_admin", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save")

        self._probe.master_admin_changed(target.value, promote)
        return ActionResult.success()

    async def get_organization(
        self, ctx: TenantContext
    ) -> ActionResult[Organization]:
        async with self._session.begin():
            organization = await self._organizations.get_by_id(
                OrganizationId(value=ctx.tenant_id)
            )
        if organization is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, "Organization not found")
        return ActionResult.success(organization)

    async def update_organization_settings(
        self,
        ctx: TenantContext,
        name: str | None = None,
        logo_url: str | None = None,
    ) -> ActionResult[Organization]:
        """Update the caller's own organization. Owner or admin only."""
        if not has_role(ctx.user_role, SETTINGS_ROLES):
            self._probe.settings_update_forbidden(ctx.tenant_id, ctx.user_id)
            return ActionResult.failure(
                ErrorCode.FORBIDDEN, "Only owners and admins can change settings"
            )

        try:
            async with self._session.begin():
                organization = await self._organizations.get_by_id(
                    OrganizationId(value=ctx.tenant_id)
                )
                if organization is None:
                    return ActionResult.failure(
                        ErrorCode.NOT_FOUND, "Organization not found"
                    )
                organization.update_settings(name=name, logo_url=logo_url)
                await self._organizations.save(organization)
        except InvalidOrganizationNameError as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))
        except SQLAlchemyError as e:
            self._probe.persistence_failed("update_organization_settings", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save")

        self._probe.organization_settings_updated(ctx.tenant_id, ctx.user_id)
        return ActionResult.success(organization)
