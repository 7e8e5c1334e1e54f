"""HTTP routes for the organization's talent pool."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from iam.dependencies.tenant_context import get_tenant_context
from infrastructure.http_errors import raise_for_failure
from recruiting.application.member_service import MemberService
from recruiting.dependencies.services import get_member_service
from recruiting.presentation.jobs import Editor
from recruiting.presentation.models import (
    AppendNoteRequest,
    CreateMemberRequest,
    MemberResponse,
    NoteResponse,
    UpdateMemberRequest,
)
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(prefix="/{tenant_slug}/membros", tags=["members"])

Reader = Annotated[TenantContext, Depends(get_tenant_context)]
Members = Annotated[MemberService, Depends(get_member_service)]


@router.get("")
async def list_members(
    tenant: Reader, service: Members, search: str | None = None
) -> list[MemberResponse]:
    members = raise_for_failure(await service.list_members(tenant, search))
    return [MemberResponse.from_domain(m) for m in members]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_member(
    body: CreateMemberRequest, tenant: Editor, service: Members
) -> MemberResponse:
    member = raise_for_failure(
        await service.create_member(
            tenant,
            name=body.name,
            email=body.email,
            fields=body.model_dump(exclude={"name", "email"}, exclude_unset=True),
        )
    )
    return MemberResponse.from_domain(member)


@router.get("/{member_id}")
async def get_member(
    member_id: str, tenant: Reader, service: Members
) -> MemberResponse:
    member = raise_for_failure(await service.get_member(tenant, member_id))
    return MemberResponse.from_domain(member)


@router.patch("/{member_id}")
async def update_member(
    member_id: str, body: UpdateMemberRequest, tenant: Editor, service: Members
) -> MemberResponse:
    """Autosave endpoint: only the fields present in the body change."""
    member = raise_for_failure(
        await service.update_member(tenant, member_id, body.changes())
    )
    return MemberResponse.from_domain(member)


@router.post("/{member_id}/notas", status_code=status.HTTP_201_CREATED)
async def append_note(
    member_id: str, body: AppendNoteRequest, tenant: Editor, service: Members
) -> NoteResponse:
    note = raise_for_failure(
        await service.append_member_note(
            tenant, member_id, body.content, body.author_name
        )
    )
    return NoteResponse.from_domain(note)
