"""Domain events for the IAM bounded context.

Events are immutable facts recorded by aggregates. Repositories collect
them on save and report them through their probe, which makes them part
of the structured audit log.
"""

from typing import Union

from iam.domain.events.organization import (
    OrganizationActivationChanged,
    OrganizationCreated,
    OrganizationSettingsUpdated,
)

DomainEvent = Union[
    OrganizationCreated,
    OrganizationActivationChanged,
    OrganizationSettingsUpdated,
]

__all__ = [
    "DomainEvent",
    "OrganizationActivationChanged",
    "OrganizationCreated",
    "OrganizationSettingsUpdated",
]
