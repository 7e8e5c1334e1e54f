"""Route guards that answer with redirects.

Guards raise an HTTPException carrying a 307 and a Location header, which
FastAPI sends as-is.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated
from urllib.parse import urlencode

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.capabilities import MasterAdminCheck
from iam.application.identity import PlatformIdentityResolver
from iam.application.tenant_helpers import build_tenant_path, has_role
from iam.dependencies.authentication import get_platform_resolver
from iam.dependencies.tenant_context import get_tenant_context
from iam.domain.principals import PlatformPrincipal, Rejected
from iam.domain.value_objects import OrganizationRole
from iam.infrastructure.capability_providers import (
    LegacyFlagCapabilityProvider,
    ProfileRoleCapabilityProvider,
)
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import get_routing_settings
from shared_kernel.middleware.tenant_context import TenantContext


def redirect_to(location: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        headers={"Location": location},
    )


def require_tenant_role(
    *roles: OrganizationRole,
) -> Callable[..., Awaitable[TenantContext]]:
    """Build a dependency admitting only the given organization roles.

    Callers without one of the roles are sent to their tenant dashboard.
    """

    async def dependency(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ) -> TenantContext:
        if not has_role(tenant.user_role, roles):
            raise redirect_to(build_tenant_path(tenant.tenant_slug, "/dashboard"))
        return tenant

    return dependency


def get_master_admin_check(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MasterAdminCheck:
    """Capability sources in precedence order: current profile, then legacy."""
    return MasterAdminCheck(
        providers=[
            ProfileRoleCapabilityProvider(session),
            LegacyFlagCapabilityProvider(session),
        ]
    )


async def require_master_admin(
    request: Request,
    resolver: Annotated[PlatformIdentityResolver, Depends(get_platform_resolver)],
    check: Annotated[MasterAdminCheck, Depends(get_master_admin_check)],
) -> PlatformPrincipal:
    """Guard for platform administration routes."""
    routing = get_routing_settings()
    principal = await resolver.resolve(request.cookies)
    if isinstance(principal, Rejected):
        raise redirect_to(
            f"{routing.auth_path}?{urlencode({'redirect': request.url.path})}"
        )
    if not await check.is_master_admin(principal.user_id):
        raise redirect_to(routing.unauthorized_path)
    return principal
