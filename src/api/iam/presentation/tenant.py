"""HTTP routes for signed-in platform users and their organizations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from iam.application.identity import PlatformIdentityResolver
from iam.application.organization_service import OrganizationService
from iam.dependencies.authentication import (
    get_membership_lookup,
    get_platform_resolver,
)
from iam.dependencies.guards import redirect_to, require_tenant_role
from iam.dependencies.services import get_organization_service
from iam.dependencies.tenant_context import get_tenant_context
from iam.domain.principals import PlatformPrincipal, Rejected
from iam.domain.value_objects import OrganizationRole
from iam.infrastructure.membership_lookup import SqlMembershipLookup
from iam.presentation.models import (
    DashboardResponse,
    HomeResponse,
    MembershipResponse,
    OrganizationResponse,
    UpdateOrganizationSettingsRequest,
)
from infrastructure.http_errors import raise_for_failure
from infrastructure.settings import get_routing_settings
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(tags=["organizations"])

require_settings_role = require_tenant_role(
    OrganizationRole.OWNER, OrganizationRole.ADMIN
)


async def get_platform_principal(
    request: Request,
    resolver: Annotated[PlatformIdentityResolver, Depends(get_platform_resolver)],
) -> PlatformPrincipal:
    """The principal the access gate admitted, or a fresh resolution."""
    principal = getattr(request.state, "principal", None)
    if isinstance(principal, PlatformPrincipal):
        return principal
    principal = await resolver.resolve(request.cookies)
    if isinstance(principal, Rejected):
        raise redirect_to(get_routing_settings().auth_path)
    return principal


@router.get("/")
async def home(
    principal: Annotated[PlatformPrincipal, Depends(get_platform_principal)],
    lookup: Annotated[SqlMembershipLookup, Depends(get_membership_lookup)],
) -> HomeResponse:
    """The caller's active organizations."""
    memberships = await lookup.list_memberships(principal.user_id)
    return HomeResponse(
        user_id=principal.user_id,
        email=principal.email,
        organizations=[MembershipResponse.from_domain(m) for m in memberships],
    )


@router.get("/{tenant_slug}/dashboard")
async def dashboard(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
) -> DashboardResponse:
    return DashboardResponse(
        tenant_id=tenant.tenant_id,
        tenant_slug=tenant.tenant_slug,
        user_id=tenant.user_id,
        user_role=tenant.user_role,
    )


@router.get("/{tenant_slug}/configuracoes")
async def get_settings_page(
    tenant: Annotated[TenantContext, Depends(require_settings_role)],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Organization settings. Owners and admins only."""
    organization = raise_for_failure(await service.get_organization(tenant))
    return OrganizationResponse.from_domain(organization)


@router.patch("/{tenant_slug}/configuracoes")
async def update_settings(
    body: UpdateOrganizationSettingsRequest,
    tenant: Annotated[TenantContext, Depends(require_settings_role)],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    organization = raise_for_failure(
        await service.update_organization_settings(
            tenant, name=body.name, logo_url=body.logo_url
        )
    )
    return OrganizationResponse.from_domain(organization)
