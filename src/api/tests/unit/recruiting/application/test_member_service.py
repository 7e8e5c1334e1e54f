"""Unit tests for MemberService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from recruiting.application.member_service import MemberService
from recruiting.domain.aggregates import Member
from recruiting.ports.repositories import IMemberRepository
from shared_kernel.results import ErrorCode


@pytest.fixture
def member_repository():
    return AsyncMock(spec=IMemberRepository)


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def service(mock_session, member_repository, mock_probe):
    return MemberService(mock_session, member_repository, probe=mock_probe)


@pytest.fixture
def member(tenant) -> Member:
    return Member.create(tenant.tenant_id, "Ana", email="ana@example.com")


class TestMemberService:
    @pytest.mark.asyncio
    async def test_create(self, service, tenant, member_repository):
        result = await service.create_member(tenant, "Ana", email="ANA@x.com")

        assert result.data.email == "ana@x.com"
        assert result.data.organization_id == tenant.tenant_id
        member_repository.add.assert_awaited_once_with(result.data)

    @pytest.mark.asyncio
    async def test_create_without_name(self, service, tenant):
        result = await service.create_member(tenant, "")

        assert result.code is ErrorCode.VALIDATION

    @pytest.mark.asyncio
    async def test_update_merges_custom_fields(
        self, service, tenant, member, member_repository
    ):
        member.custom_fields = {"languages_with_proficiency": [{"en": "c1"}]}
        member_repository.get.return_value = member

        result = await service.update_member(
            tenant, member.id.value, {"salary_by_type": {"pj": 1}}
        )

        assert set(result.data.custom_fields) == {
            "languages_with_proficiency",
            "salary_by_type",
        }

    @pytest.mark.asyncio
    async def test_note_author_is_the_caller(
        self, service, tenant, member, member_repository
    ):
        member_repository.get.return_value = member

        result = await service.append_member_note(
            tenant, member.id.value, "Boa entrevista", author_name="Bia"
        )

        assert result.data.author_id == tenant.user_id
        assert member.notes[0]["content"] == "Boa entrevista"
        member_repository.save.assert_awaited_once_with(member)

    @pytest.mark.asyncio
    async def test_empty_note(self, service, tenant, member, member_repository):
        result = await service.append_member_note(tenant, member.id.value, " ", "Bia")

        assert result.code is ErrorCode.VALIDATION
        member_repository.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_member_of_other_tenant(self, service, tenant, member_repository):
        member_repository.get.return_value = None

        result = await service.get_member(tenant, "01JCCCCCCCCCCCCCCCCCCCCCCC")

        assert result.code is ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_member_storage_failure(
        self, service, tenant, member, member_repository, mock_probe
    ):
        error = OperationalError("x", {}, Exception())
        member_repository.get.side_effect = error

        result = await service.get_member(tenant, member.id.value)

        assert not result.ok
        assert result.code is ErrorCode.PERSISTENCE
        mock_probe.persistence_failed.assert_called_once_with("get_member", error)

    @pytest.mark.asyncio
    async def test_list_members_storage_failure(
        self, service, tenant, member_repository, mock_probe
    ):
        member_repository.list_all.side_effect = OperationalError("x", {}, Exception())

        result = await service.list_members(tenant)

        assert result.code is ErrorCode.PERSISTENCE
        mock_probe.persistence_failed.assert_called_once()
