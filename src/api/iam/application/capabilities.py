"""Platform capability checks backed by several lookup sources.

The master admin flag lives in two places: the current profile table and
a legacy profile table kept for compatibility. Providers are consulted in
order and the first positive answer wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from iam.application.observability import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from iam.ports.repositories import ICapabilityProvider


class MasterAdminCheck:
    """Answers whether a platform user is a master admin.

    A provider that fails is skipped, so an outage of one source cannot
    hide a positive answer from the next.
    """

    # TODO: drop the legacy provider once every admin has a profile role row
    def __init__(
        self,
        providers: Sequence[ICapabilityProvider],
        probe: OrganizationServiceProbe | None = None,
    ):
        if not providers:
            raise ValueError("At least one capability provider is required")
        self._providers = list(providers)
        self._probe = probe or DefaultOrganizationServiceProbe()

    async def is_master_admin(self, user_id: str) -> bool:
        for provider in self._providers:
            try:
                if await provider.has_capability(user_id):
                    self._probe.capability_granted(user_id, provider.name)
                    return True
            except Exception as e:
                self._probe.capability_provider_failed(user_id, provider.name, e)
        return False
