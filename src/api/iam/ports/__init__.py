"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the application layer independent of
infrastructure.
"""

from iam.ports.exceptions import (
    DuplicateOrganizationSlugError,
    OrganizationNotFoundError,
    PortalAccountNotFoundError,
)
from iam.ports.repositories import (
    ICapabilityProvider,
    IMasterAdminStore,
    IMembershipLookup,
    IOneTimePasscodeRepository,
    IOrganizationRepository,
    IPortalAccountRepository,
    PortalAccount,
)

__all__ = [
    "DuplicateOrganizationSlugError",
    "ICapabilityProvider",
    "IMasterAdminStore",
    "IMembershipLookup",
    "IOneTimePasscodeRepository",
    "IOrganizationRepository",
    "IPortalAccountRepository",
    "OrganizationNotFoundError",
    "PortalAccount",
    "PortalAccountNotFoundError",
]
