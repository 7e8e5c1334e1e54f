"""Tenant context FastAPI dependency.

Reads the tenant context the access gate injected as request headers.
Handlers on tenant-protected routes depend on it:

    @router.get("/{tenant_slug}/jobs")
    async def list_jobs(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        ...

A missing header means the route was reached without passing through the
gate. That is a server misconfiguration, so it raises instead of falling
back to a default tenant.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated

from fastapi import Depends, Request

from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import (
    TenantContext,
    TenantContextMissingError,
)


def get_tenant_context_probe() -> TenantContextProbe:
    return DefaultTenantContextProbe()


def resolve_tenant_context(
    headers: Mapping[str, str],
    path: str,
    probe: TenantContextProbe,
) -> TenantContext:
    """Build the tenant context from injected headers.

    Raises:
        TenantContextMissingError: If any context header is missing.
    """
    try:
        context = TenantContext.from_headers(headers)
    except TenantContextMissingError as e:
        probe.tenant_context_missing(path, e.missing)
        raise
    probe.tenant_context_loaded(context.tenant_id, context.user_id)
    return context


async def get_tenant_context(
    request: Request,
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantContext:
    """FastAPI dependency returning the request's tenant context."""
    return resolve_tenant_context(request.headers, request.url.path, probe)
