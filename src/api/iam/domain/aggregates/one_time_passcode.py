"""One-time passcode aggregate for portal logins."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from ulid import ULID


@dataclass
class OneTimePasscode:
    """A short numeric code that authenticates one portal login.

    At most one live code exists per portal account: issuing a new code
    purges the previous ones, and a successful verification deletes the
    code so it cannot be replayed.
    """

    id: str
    account_id: str
    code: str
    expires_at: datetime

    @classmethod
    def issue(
        cls,
        account_id: str,
        ttl: timedelta,
        length: int = 6,
        now: datetime | None = None,
    ) -> OneTimePasscode:
        """Issue a fresh code of `length` digits with no leading zero."""
        now = now or datetime.now(UTC)
        lower = 10 ** (length - 1)
        code = str(lower + secrets.randbelow(9 * lower))
        return cls(
            id=str(ULID()),
            account_id=account_id,
            code=code,
            expires_at=now + ttl,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def matches(self, code: str, now: datetime | None = None) -> bool:
        """Whether `code` is this passcode and it is still live."""
        return secrets.compare_digest(self.code, code) and not self.is_expired(now)
