"""Result objects returned by tenant-scoped data operations.

Application services report outcomes as values instead of raising, so
route handlers decide how each failure is presented.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Failure categories for data operations."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"


HTTP_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION: 400,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.PERSISTENCE: 500,
}


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Outcome of a data operation.

    Exactly one of `data` (on success) or `error` + `code` (on failure)
    is meaningful.
    """

    ok: bool
    data: T | None = None
    error: str | None = None
    code: ErrorCode | None = None

    @classmethod
    def success(cls, data: T | None = None) -> ActionResult[T]:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, code: ErrorCode, error: str) -> ActionResult[T]:
        return cls(ok=False, error=error, code=code)

    @property
    def http_status(self) -> int:
        """HTTP status for this result (200 on success)."""
        if self.ok or self.code is None:
            return 200
        return HTTP_STATUS_BY_CODE[self.code]
