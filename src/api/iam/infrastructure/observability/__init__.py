"""Domain-Oriented Observability for IAM infrastructure."""

from iam.infrastructure.observability.repository_probe import (
    DefaultOrganizationRepositoryProbe,
    DefaultPortalRepositoryProbe,
    OrganizationRepositoryProbe,
    PortalRepositoryProbe,
)

__all__ = [
    "DefaultOrganizationRepositoryProbe",
    "DefaultPortalRepositoryProbe",
    "OrganizationRepositoryProbe",
    "PortalRepositoryProbe",
]
