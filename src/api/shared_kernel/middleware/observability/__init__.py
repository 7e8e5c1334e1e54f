"""Probes for reading the tenant context injected by the access gate."""

from shared_kernel.middleware.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)

__all__ = ["DefaultTenantContextProbe", "TenantContextProbe"]
