"""Passcode login for the candidate and client portals.

Both portals share this flow; each gets a service instance bound to its
own account repository, passcode repository and token codec.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultPortalLoginProbe,
    PortalLoginProbe,
)
from iam.domain.aggregates import OneTimePasscode
from iam.ports.repositories import (
    IOneTimePasscodeRepository,
    IPortalAccountRepository,
    PortalAccount,
)
from infrastructure.settings import PortalAuthSettings
from shared_kernel.auth import PortalTokenCodec
from shared_kernel.results import ActionResult, ErrorCode

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class PortalLogin:
    """A successful verification: the signed token and who it is for."""

    token: str
    account: PortalAccount


class PortalLoginService:
    """Issues and verifies one-time passcodes for one portal."""

    def __init__(
        self,
        session: AsyncSession,
        accounts: IPortalAccountRepository,
        passcodes: IOneTimePasscodeRepository,
        codec: PortalTokenCodec,
        settings: PortalAuthSettings,
        probe: PortalLoginProbe | None = None,
        log_codes: bool = False,
    ):
        self._session = session
        self._accounts = accounts
        self._passcodes = passcodes
        self._codec = codec
        self._settings = settings
        self._probe = probe or DefaultPortalLoginProbe()
        self._log_codes = log_codes
        self._code_pattern = re.compile(rf"^\d{{{settings.otp_length}}}$")

    async def request_code(self, email: str) -> ActionResult[None]:
        """Issue a new passcode for the account registered under `email`.

        Any previous passcode for the account is purged first, so only the
        newest code can be used.
        """
        email = normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            return ActionResult.failure(ErrorCode.VALIDATION, "Invalid email")

        async with self._session.begin():
            account = await self._accounts.find_by_email(email)
            if account is None:
                self._probe.unknown_email(self._accounts.kind, email)
                return ActionResult.failure(ErrorCode.VALIDATION, "Email not found")

            purged = await self._passcodes.purge_for_account(account.id)
            passcode = OneTimePasscode.issue(
                account_id=account.id,
                ttl=self._settings.otp_ttl,
                length=self._settings.otp_length,
            )
            await self._passcodes.add(passcode)

        self._probe.code_issued(self._accounts.kind, account.id, purged)
        if self._log_codes:
            self._probe.code_for_development(self._accounts.kind, email, passcode.code)
        return ActionResult.success()

    async def verify_code(
        self, email: str, code: str, now: datetime | None = None
    ) -> ActionResult[PortalLogin]:
        """Consume a passcode and sign a portal token.

        The passcode row is deleted in the same transaction that finds it;
        a concurrent second verification finds nothing to delete and fails.
        """
        email = normalize_email(email)
        code = code.strip()
        if not EMAIL_PATTERN.match(email):
            return ActionResult.failure(ErrorCode.VALIDATION, "Invalid email")
        if not self._code_pattern.match(code):
            return ActionResult.failure(
                ErrorCode.VALIDATION,
                f"Code must be {self._settings.otp_length} digits",
            )

        now = now or datetime.now(UTC)
        async with self._session.begin():
            account = await self._accounts.find_by_email(email)
            if account is None:
                self._probe.unknown_email(self._accounts.kind, email)
                return ActionResult.failure(ErrorCode.VALIDATION, "Email not found")

            passcode = await self._passcodes.find_live(account.id, code, now)
            if passcode is None or not await self._passcodes.delete(passcode.id):
                self._probe.code_rejected(self._accounts.kind, account.id)
                return ActionResult.failure(
                    ErrorCode.VALIDATION, "Invalid or expired code"
                )

        token = self._codec.issue(account.id, account.email, now=now)
        self._probe.login_succeeded(self._accounts.kind, account.id)
        return ActionResult.success(PortalLogin(token=token, account=account))
