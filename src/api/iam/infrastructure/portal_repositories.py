"""PostgreSQL implementations of the portal account and passcode ports.

One class serves both portals; the `PortalKind` picks the account table
and the passcode table with its owner column.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import column, delete, func, select, table
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import OneTimePasscode
from iam.domain.value_objects import PortalKind
from iam.infrastructure.models import (
    CandidateOtpModel,
    ClientOtpModel,
    CompanyUserModel,
)
from iam.infrastructure.observability import (
    DefaultPortalRepositoryProbe,
    PortalRepositoryProbe,
)
from iam.ports.repositories import (
    IOneTimePasscodeRepository,
    IPortalAccountRepository,
    PortalAccount,
)

# Read-only view of the talent pool table mapped by the recruiting context
_members = table(
    "members",
    column("id"),
    column("email"),
    column("name"),
    column("created_at"),
)


class PortalAccountRepository(IPortalAccountRepository):
    """Finds candidate (member) or client (company user) accounts by email.

    Emails are compared case-insensitively; when the same email exists in
    several organizations the oldest account is used.
    """

    def __init__(self, session: AsyncSession, kind: PortalKind):
        self._session = session
        self.kind = kind

    async def find_by_email(self, email: str) -> PortalAccount | None:
        normalized = email.strip().lower()
        if self.kind is PortalKind.CANDIDATE:
            stmt = (
                select(_members.c.id, _members.c.email, _members.c.name)
                .where(func.lower(_members.c.email) == normalized)
                .order_by(_members.c.created_at)
                .limit(1)
            )
        else:
            stmt = (
                select(
                    CompanyUserModel.id,
                    CompanyUserModel.email,
                    CompanyUserModel.name,
                )
                .where(func.lower(CompanyUserModel.email) == normalized)
                .order_by(CompanyUserModel.created_at)
                .limit(1)
            )
        row = (await self._session.execute(stmt)).one_or_none()
        if row is None:
            return None
        return PortalAccount(id=row.id, email=row.email.lower(), name=row.name)


class OneTimePasscodeRepository(IOneTimePasscodeRepository):
    """Stores passcodes in `candidate_otps` or `client_otps`."""

    def __init__(
        self,
        session: AsyncSession,
        kind: PortalKind,
        probe: PortalRepositoryProbe | None = None,
    ):
        self._session = session
        self.kind = kind
        self._probe = probe or DefaultPortalRepositoryProbe()
        if kind is PortalKind.CANDIDATE:
            self._model = CandidateOtpModel
            self._owner = CandidateOtpModel.member_id
        else:
            self._model = ClientOtpModel
            self._owner = ClientOtpModel.company_user_id

    async def purge_for_account(self, account_id: str) -> int:
        result = await self._session.execute(
            delete(self._model).where(self._owner == account_id)
        )
        self._probe.passcodes_purged(self.kind, account_id, result.rowcount)
        return result.rowcount

    async def add(self, passcode: OneTimePasscode) -> None:
        model = self._model(
            id=passcode.id,
            otp=passcode.code,
            expires_at=passcode.expires_at,
            **{self._owner.key: passcode.account_id},
        )
        self._session.add(model)
        await self._session.flush()

    async def find_live(
        self, account_id: str, code: str, now: datetime
    ) -> OneTimePasscode | None:
        stmt = (
            select(self._model)
            .where(self._owner == account_id)
            .where(self._model.otp == code)
            .where(self._model.expires_at > now)
        )
        model = (await self._session.execute(stmt)).scalars().first()
        if model is None:
            return None
        return OneTimePasscode(
            id=model.id,
            account_id=account_id,
            code=model.otp,
            expires_at=model.expires_at,
        )

    async def delete(self, passcode_id: str) -> bool:
        result = await self._session.execute(
            delete(self._model).where(self._model.id == passcode_id)
        )
        if result.rowcount:
            self._probe.passcode_consumed(self.kind, passcode_id)
        return bool(result.rowcount)
