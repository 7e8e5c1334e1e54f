"""Observability for IAM application services."""

from iam.application.observability.access_gate_probe import (
    AccessGateProbe,
    DefaultAccessGateProbe,
)
from iam.application.observability.organization_service_probe import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from iam.application.observability.portal_login_probe import (
    DefaultPortalLoginProbe,
    PortalLoginProbe,
)

__all__ = [
    "AccessGateProbe",
    "DefaultAccessGateProbe",
    "DefaultOrganizationServiceProbe",
    "DefaultPortalLoginProbe",
    "OrganizationServiceProbe",
    "PortalLoginProbe",
]
