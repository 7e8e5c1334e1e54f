"""Observation context dependencies.

The dependencies that build services and repositories bind these contexts
to their probes, so every event a request emits carries its request id
and, on tenant routes, the acting user and organization.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from ulid import ULID

from iam.dependencies.tenant_context import get_tenant_context
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext

REQUEST_ID_HEADER = "x-request-id"


def get_request_observation(request: Request) -> ObservationContext:
    """Context carrying the caller's request id, or a fresh one."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
    return ObservationContext(request_id=request_id)


def tenant_observation(
    base: ObservationContext, tenant: TenantContext
) -> ObservationContext:
    """Scope `base` to the caller and organization of `tenant`."""
    return ObservationContext(
        request_id=base.request_id,
        user_id=tenant.user_id,
        tenant_id=tenant.tenant_id,
        tenant_slug=tenant.tenant_slug,
        extra=base.extra,
    )


def get_tenant_observation(
    base: Annotated[ObservationContext, Depends(get_request_observation)],
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
) -> ObservationContext:
    return tenant_observation(base, tenant)
