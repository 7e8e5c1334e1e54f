"""Member aggregate: a talent-pool profile owned by an organization."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Mapping

from recruiting.domain.exceptions import InvalidMemberError
from recruiting.domain.value_objects import MemberId

PROFILE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "email",
        "role",
        "seniority",
        "city",
        "country",
        "availability",
        "linkedin_url",
        "job_type",
    }
)

# Sub-keys of custom_fields that partial updates replace individually
CUSTOM_FIELD_KEYS: frozenset[str] = frozenset(
    {"languages_with_proficiency", "salary_by_type"}
)

NOTES_KEY = "notes_history"


@dataclass(frozen=True)
class MemberNote:
    content: str
    author: str
    author_id: str
    created_at: datetime

    def as_dict(self) -> dict[str, str]:
        return {
            "content": self.content,
            "author": self.author,
            "author_id": self.author_id,
            "created_at": self.created_at.isoformat(),
        }


def _normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


@dataclass
class Member:
    """Talent-pool profile.

    Structured profile data lives in columns; free-form data such as
    language proficiency, salary expectations and the note history lives
    in `custom_fields`.
    """

    id: MemberId
    organization_id: str
    name: str
    email: str | None = None
    role: str | None = None
    seniority: str | None = None
    city: str | None = None
    country: str | None = None
    availability: str | None = None
    linkedin_url: str | None = None
    job_type: str | None = None
    custom_fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        organization_id: str,
        name: str,
        email: str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> Member:
        """Raises InvalidMemberError when the name is blank."""
        name = name.strip()
        if not name:
            raise InvalidMemberError("Member name is required")
        member = cls(
            id=MemberId.generate(),
            organization_id=organization_id,
            name=name,
            email=_normalize_email(email),
        )
        if fields:
            member.update(fields)
        return member

    def update(self, changes: Mapping[str, Any]) -> None:
        """Partial update of profile columns and custom-field sub-keys.

        Custom-field keys are merged into the existing mapping so unrelated
        keys (including the note history) survive.
        """
        for name, value in changes.items():
            if name in PROFILE_FIELDS:
                if name == "name":
                    value = (value or "").strip()
                    if not value:
                        raise InvalidMemberError("Member name is required")
                elif name == "email":
                    value = _normalize_email(value)
                setattr(self, name, value)

        custom = {k: v for k, v in changes.items() if k in CUSTOM_FIELD_KEYS}
        if custom:
            self.custom_fields = {**self.custom_fields, **custom}

    @property
    def notes(self) -> list[dict[str, Any]]:
        """Note history, newest first."""
        return list(self.custom_fields.get(NOTES_KEY, []))

    def append_note(
        self,
        content: str,
        author: str,
        author_id: str,
        now: datetime | None = None,
    ) -> MemberNote:
        """Prepend a note to the history. Notes are never edited or removed."""
        content = content.strip()
        if not content:
            raise InvalidMemberError("Note cannot be empty")
        note = MemberNote(
            content=content,
            author=author,
            author_id=author_id,
            created_at=now or datetime.now(UTC),
        )
        self.custom_fields = {
            **self.custom_fields,
            NOTES_KEY: [note.as_dict(), *self.notes],
        }
        return note
