"""Value objects for row-level change events.

A change event is the envelope emitted by the database trigger for every
insert, update or delete on a watched table:

    {"table": "job_candidates", "event_type": "update", "old": {...}, "new": {...}}

Delivery is at-least-once and unordered; consumers must merge idempotently.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class InvalidChangeEventError(ValueError):
    """Raised when a notification payload is not a valid change envelope."""

    pass


class ChangeEventType(StrEnum):
    """Kind of row change."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    """A single row change.

    Attributes:
        table: Source table name.
        event_type: Insert, update or delete.
        old: Row before the change (empty for inserts).
        new: Row after the change (empty for deletes).
    """

    table: str
    event_type: ChangeEventType
    old: dict[str, Any] = field(default_factory=dict)
    new: dict[str, Any] = field(default_factory=dict)

    @property
    def row(self) -> dict[str, Any]:
        """The row the event is about: `new`, or `old` for deletes."""
        return self.old if self.event_type == ChangeEventType.DELETE else self.new

    @classmethod
    def from_payload(cls, payload: str) -> ChangeEvent:
        """Parse a NOTIFY payload.

        Raises:
            InvalidChangeEventError: If the payload is not JSON or lacks
                the table or event type.
        """
        try:
            data = json.loads(payload)
            event_type = ChangeEventType(str(data["event_type"]).lower())
            table = str(data["table"])
        except (ValueError, KeyError, TypeError) as e:
            raise InvalidChangeEventError(f"Invalid change payload: {e}") from e

        return cls(
            table=table,
            event_type=event_type,
            old=data.get("old") or {},
            new=data.get("new") or {},
        )


@dataclass(frozen=True)
class ChangeScope:
    """Subscription filter: one or more tables plus one column equality.

    Example: ChangeScope(("job_candidates", "pipeline_stages"), "job_id", job_id)
    """

    table: str | tuple[str, ...]
    column: str
    value: str

    @property
    def tables(self) -> tuple[str, ...]:
        return (self.table,) if isinstance(self.table, str) else self.table

    def matches(self, event: ChangeEvent) -> bool:
        if event.table not in self.tables:
            return False
        return str(event.row.get(self.column)) == self.value
