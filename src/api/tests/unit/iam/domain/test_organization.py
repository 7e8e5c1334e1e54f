"""Unit tests for the Organization aggregate."""

import pytest

from iam.domain.aggregates import Organization
from iam.domain.events import OrganizationCreated, OrganizationSettingsUpdated
from iam.domain.exceptions import InvalidOrganizationNameError, InvalidSlugError


class TestCreate:
    def test_create_records_event(self):
        organization = Organization.create("  Acme  ")

        assert organization.name == "Acme"
        assert organization.slug == "acme"
        events = organization.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], OrganizationCreated)
        assert organization.collect_events() == []

    def test_slug_is_capped(self):
        organization = Organization.create("a" * 80)

        assert len(organization.slug) == 50

    def test_name_without_slug_characters_is_rejected(self):
        with pytest.raises(InvalidSlugError):
            Organization.create("!!!")

    def test_blank_name_is_rejected(self):
        with pytest.raises(InvalidOrganizationNameError):
            Organization.create("")


class TestSettings:
    def test_unchanged_values_record_nothing(self):
        organization = Organization.create("Acme")
        organization.collect_events()

        organization.update_settings(name="Acme")

        assert organization.collect_events() == []

    def test_changed_fields_are_listed(self):
        organization = Organization.create("Acme")
        organization.collect_events()

        organization.update_settings(name="Acme SA", logo_url="https://x/l.png")

        (event,) = organization.collect_events()
        assert isinstance(event, OrganizationSettingsUpdated)
        assert event.changed_fields == ("name", "logo_url")

    def test_disable_twice_is_idempotent(self):
        organization = Organization.create("Acme")
        organization.set_active(False)
        disabled_at = organization.disabled_at
        organization.collect_events()

        organization.set_active(False)

        assert organization.disabled_at == disabled_at
        assert organization.collect_events() == []
