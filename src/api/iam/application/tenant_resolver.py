"""Tenant resolution: slug plus platform principal to membership."""

from __future__ import annotations

from iam.application.observability import AccessGateProbe, DefaultAccessGateProbe
from iam.domain.principals import (
    PlatformPrincipal,
    Rejected,
    RejectionReason,
    TenantAccess,
)
from iam.ports.repositories import IMembershipLookup


class TenantResolver:
    """Resolves a platform principal's access to the organization in the path.

    Access is granted iff a membership row exists for the user in an
    active organization with that slug. A missing row and a failed lookup
    both reject as forbidden.
    """

    def __init__(
        self,
        membership_lookup: IMembershipLookup,
        probe: AccessGateProbe | None = None,
    ):
        self._membership_lookup = membership_lookup
        self._probe = probe or DefaultAccessGateProbe()

    async def resolve(
        self, principal: PlatformPrincipal, tenant_slug: str
    ) -> TenantAccess | Rejected:
        try:
            access = await self._membership_lookup.find_membership(
                user_id=principal.user_id,
                organization_slug=tenant_slug,
            )
        except Exception as e:
            self._probe.membership_lookup_failed(tenant_slug, principal.user_id, e)
            return Rejected(
                RejectionReason.FORBIDDEN, detail="membership lookup failed"
            )

        if access is None:
            self._probe.tenant_access_denied(tenant_slug, principal.user_id)
            return Rejected(RejectionReason.FORBIDDEN)

        self._probe.tenant_access_granted(
            access.tenant_id, principal.user_id, access.role
        )
        return access
