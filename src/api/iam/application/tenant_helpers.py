"""Helpers for handlers working inside a resolved tenant."""

from __future__ import annotations

from collections.abc import Iterable

from iam.domain.value_objects import OrganizationRole


def build_tenant_path(tenant_slug: str, path: str = "") -> str:
    """Build an absolute path inside a tenant, e.g. `/acme/dashboard`."""
    if path and not path.startswith("/"):
        path = "/" + path
    return f"/{tenant_slug}{path}"


def has_role(role: str | None, allowed: Iterable[OrganizationRole | str]) -> bool:
    """Whether `role` is one of `allowed`. A missing role never matches."""
    if not role:
        return False
    return role in {str(r) for r in allowed}
