"""Unit tests for the Member aggregate."""

from datetime import UTC, datetime

import pytest

from recruiting.domain.aggregates import Member
from recruiting.domain.exceptions import InvalidMemberError

ORG_ID = "01JAAAAAAAAAAAAAAAAAAAAAAA"


@pytest.fixture
def member() -> Member:
    return Member.create(ORG_ID, "Ana Souza", email=" Ana@Example.COM ")


class TestCreate:
    def test_email_is_normalized(self, member):
        assert member.email == "ana@example.com"

    def test_blank_name_is_rejected(self):
        with pytest.raises(InvalidMemberError):
            Member.create(ORG_ID, " ")


class TestUpdate:
    def test_custom_fields_are_merged(self, member):
        member.custom_fields = {"notes_history": [{"content": "x"}], "other": 1}

        member.update({"salary_by_type": {"clt": 10000}, "city": "Recife"})

        assert member.city == "Recife"
        assert member.custom_fields == {
            "notes_history": [{"content": "x"}],
            "other": 1,
            "salary_by_type": {"clt": 10000},
        }

    def test_blank_name_update_is_rejected(self, member):
        with pytest.raises(InvalidMemberError):
            member.update({"name": ""})


class TestNotes:
    def test_newest_note_first(self, member):
        first = datetime(2026, 1, 1, tzinfo=UTC)
        second = datetime(2026, 1, 2, tzinfo=UTC)

        member.append_note("Primeira", "Bia", "user-1", now=first)
        member.append_note("Segunda", "Bia", "user-1", now=second)

        assert [note["content"] for note in member.notes] == ["Segunda", "Primeira"]
        assert member.notes[0]["created_at"] == second.isoformat()

    def test_empty_note_is_rejected(self, member):
        with pytest.raises(InvalidMemberError):
            member.append_note("  ", "Bia", "user-1")
