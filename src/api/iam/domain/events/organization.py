"""Organization lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrganizationCreated:
    """An organization was created by a platform master admin."""

    organization_id: str
    name: str
    slug: str
    occurred_at: datetime


@dataclass(frozen=True)
class OrganizationActivationChanged:
    """An organization was enabled or soft-disabled."""

    organization_id: str
    is_active: bool
    occurred_at: datetime


@dataclass(frozen=True)
class OrganizationSettingsUpdated:
    """Organization display settings changed.

    Attributes:
        changed_fields: Names of the fields that were updated
    """

    organization_id: str
    changed_fields: tuple[str, ...]
    occurred_at: datetime
