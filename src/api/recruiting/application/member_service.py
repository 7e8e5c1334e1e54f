"""Application service for the organization's talent pool."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recruiting.application.observability import (
    DefaultMemberServiceProbe,
    MemberServiceProbe,
)
from recruiting.domain.aggregates import Member, MemberNote
from recruiting.domain.exceptions import InvalidMemberError
from recruiting.domain.value_objects import MemberId
from recruiting.ports.repositories import IMemberRepository
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.results import ActionResult, ErrorCode

MEMBER_NOT_FOUND = "Member not found"


def _parse_member_id(member_id: str) -> MemberId | None:
    try:
        return MemberId.from_string(member_id)
    except ValueError:
        return None


class MemberService:
    """Create, edit and annotate talent-pool members."""

    def __init__(
        self,
        session: AsyncSession,
        member_repository: IMemberRepository,
        probe: MemberServiceProbe | None = None,
    ):
        self._session = session
        self._members = member_repository
        self._probe = probe or DefaultMemberServiceProbe()

    async def create_member(
        self,
        ctx: TenantContext,
        name: str,
        email: str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> ActionResult[Member]:
        try:
            member = Member.create(ctx.tenant_id, name, email=email, fields=fields)
        except InvalidMemberError as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))

        try:
            async with self._session.begin():
                await self._members.add(member)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("create_member", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save member")

        self._probe.member_created(member.id.value, ctx.tenant_id)
        return ActionResult.success(member)

    async def update_member(
        self, ctx: TenantContext, member_id: str, changes: Mapping[str, Any]
    ) -> ActionResult[Member]:
        """Partial update; custom-field sub-keys are merged, not replaced."""
        key = _parse_member_id(member_id)
        if key is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, MEMBER_NOT_FOUND)

        try:
            async with self._session.begin():
                member = await self._members.get(ctx.tenant_id, key)
                if member is None:
                    return ActionResult.failure(ErrorCode.NOT_FOUND, MEMBER_NOT_FOUND)
                member.update(changes)
                await self._members.save(member)
        except InvalidMemberError as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))
        except SQLAlchemyError as e:
            self._probe.persistence_failed("update_member", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save member")

        self._probe.member_updated(key.value, sorted(changes))
        return ActionResult.success(member)

    async def append_member_note(
        self, ctx: TenantContext, member_id: str, content: str, author_name: str
    ) -> ActionResult[MemberNote]:
        """Add a note authored by the caller to the top of the history."""
        if not content.strip():
            return ActionResult.failure(ErrorCode.VALIDATION, "Note cannot be empty")
        key = _parse_member_id(member_id)
        if key is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, MEMBER_NOT_FOUND)

        try:
            async with self._session.begin():
                member = await self._members.get(ctx.tenant_id, key)
                if member is None:
                    return ActionResult.failure(ErrorCode.NOT_FOUND, MEMBER_NOT_FOUND)
                note = member.append_note(
                    content, author=author_name, author_id=ctx.user_id
                )
                await self._members.save(member)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("append_member_note", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save note")

        self._probe.member_note_added(key.value, ctx.user_id)
        return ActionResult.success(note)

    async def list_members(
        self, ctx: TenantContext, search: str | None = None
    ) -> ActionResult[list[Member]]:
        try:
            async with self._session.begin():
                members = await self._members.list_all(ctx.tenant_id, search)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("list_members", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not load members")
        return ActionResult.success(members)

    async def get_member(
        self, ctx: TenantContext, member_id: str
    ) -> ActionResult[Member]:
        key = _parse_member_id(member_id)
        if key is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, MEMBER_NOT_FOUND)
        try:
            async with self._session.begin():
                member = await self._members.get(ctx.tenant_id, key)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("get_member", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not load member")
        if member is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, MEMBER_NOT_FOUND)
        return ActionResult.success(member)
