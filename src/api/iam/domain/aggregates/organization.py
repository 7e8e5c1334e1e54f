"""Organization aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.events import (
    DomainEvent,
    OrganizationActivationChanged,
    OrganizationCreated,
    OrganizationSettingsUpdated,
)
from iam.domain.exceptions import InvalidOrganizationNameError, InvalidSlugError
from iam.domain.value_objects import OrganizationId
from shared_kernel.slugs import ORGANIZATION_SLUG_MAX_LENGTH, is_valid_slug, to_slug


@dataclass
class Organization:
    """Organization (tenant) aggregate.

    Organizations are the isolation boundary for all staff-facing data.

    Business rules:
    - Slugs are globally unique and never change after creation
    - Organizations are never hard-deleted; disabling sets `is_active`
      to False and stamps `disabled_at`
    """

    id: OrganizationId
    name: str
    slug: str
    is_active: bool = True
    disabled_at: datetime | None = None
    logo_url: str | None = None
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(cls, name: str, slug: str | None = None) -> Organization:
        """Create a new, active organization.

        Args:
            name: Display name (required).
            slug: Explicit slug; derived from the name when omitted.

        Raises:
            InvalidOrganizationNameError: If the name is blank.
            InvalidSlugError: If no valid slug can be produced.
        """
        name = name.strip()
        if not name:
            raise InvalidOrganizationNameError("Organization name is required")

        final_slug = to_slug(slug or name, max_length=ORGANIZATION_SLUG_MAX_LENGTH)
        if not final_slug or not is_valid_slug(final_slug):
            raise InvalidSlugError(f"Cannot derive a slug from {slug or name!r}")

        organization = cls(id=OrganizationId.generate(), name=name, slug=final_slug)
        organization._pending_events.append(
            OrganizationCreated(
                organization_id=organization.id.value,
                name=name,
                slug=final_slug,
                occurred_at=datetime.now(UTC),
            )
        )
        return organization

    def set_active(self, is_active: bool, now: datetime | None = None) -> None:
        """Enable or soft-disable the organization."""
        if is_active == self.is_active:
            return
        now = now or datetime.now(UTC)
        self.is_active = is_active
        self.disabled_at = None if is_active else now
        self._pending_events.append(
            OrganizationActivationChanged(
                organization_id=self.id.value,
                is_active=is_active,
                occurred_at=now,
            )
        )

    def update_settings(
        self, name: str | None = None, logo_url: str | None = None
    ) -> None:
        """Update display settings. The slug is immutable.

        Raises:
            InvalidOrganizationNameError: If a blank name is given.
        """
        changed: list[str] = []
        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidOrganizationNameError("Organization name is required")
            if name != self.name:
                self.name = name
                changed.append("name")
        if logo_url is not None and logo_url != self.logo_url:
            self.logo_url = logo_url or None
            changed.append("logo_url")

        if changed:
            self._pending_events.append(
                OrganizationSettingsUpdated(
                    organization_id=self.id.value,
                    changed_fields=tuple(changed),
                    occurred_at=datetime.now(UTC),
                )
            )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
