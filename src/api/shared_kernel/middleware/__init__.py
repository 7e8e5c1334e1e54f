"""Shared middleware primitives for cross-cutting concerns.

Holds the tenant context value object and the header names the access
gate uses to forward it to handlers in every bounded context.
"""

from shared_kernel.middleware.tenant_context import (
    TENANT_CONTEXT_HEADERS,
    TenantContext,
    TenantContextMissingError,
)

__all__ = [
    "TENANT_CONTEXT_HEADERS",
    "TenantContext",
    "TenantContextMissingError",
]
