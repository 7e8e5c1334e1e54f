"""Unit tests for JobService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from recruiting.application.job_service import JobService
from recruiting.domain.aggregates import Job
from recruiting.domain.value_objects import JobStatus, StageTemplate
from recruiting.ports.repositories import IJobRepository, IStageRepository
from shared_kernel.results import ErrorCode


@pytest.fixture
def job_repository():
    return AsyncMock(spec=IJobRepository)


@pytest.fixture
def stage_repository():
    return AsyncMock(spec=IStageRepository)


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def service(mock_session, job_repository, stage_repository, mock_probe):
    return JobService(
        session=mock_session,
        job_repository=job_repository,
        stage_repository=stage_repository,
        probe=mock_probe,
    )


@pytest.fixture
def existing_job(tenant) -> Job:
    return Job.create(tenant.tenant_id, "Product Designer", owner_user_id="user-1")


class TestCreateJob:
    @pytest.mark.asyncio
    async def test_default_stages(self, service, tenant, stage_repository):
        result = await service.create_job(tenant, "Product Designer")

        assert result.ok
        assert [s.position for s in result.data.stages] == [0, 1, 2, 3, 4]
        assert result.data.job.organization_id == tenant.tenant_id
        assert result.data.job.owner_user_id == tenant.user_id
        stage_repository.add_all.assert_awaited_once_with(result.data.stages)

    @pytest.mark.asyncio
    async def test_custom_stages_keep_given_order(self, service, tenant):
        templates = [
            StageTemplate("Recebido", "#111111"),
            StageTemplate("Final", "#222222"),
        ]

        result = await service.create_job(tenant, "Dev", stages=templates)

        assert [s.name for s in result.data.stages] == ["Recebido", "Final"]

    @pytest.mark.asyncio
    async def test_blank_title(self, service, tenant, job_repository):
        result = await service.create_job(tenant, " ")

        assert result.code is ErrorCode.VALIDATION
        job_repository.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_stage_color(self, service, tenant):
        result = await service.create_job(
            tenant, "Dev", stages=[StageTemplate("A", "blue")]
        )

        assert result.code is ErrorCode.VALIDATION

    @pytest.mark.asyncio
    async def test_database_failure(
        self, service, tenant, stage_repository, mock_probe
    ):
        stage_repository.add_all.side_effect = OperationalError("x", {}, Exception())

        result = await service.create_job(tenant, "Dev")

        assert result.code is ErrorCode.PERSISTENCE
        mock_probe.persistence_failed.assert_called_once()
        mock_probe.job_created.assert_not_called()


class TestUpdateJob:
    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service, tenant, job_repository):
        job_repository.get.return_value = None

        result = await service.update_job(
            tenant, "01JCCCCCCCCCCCCCCCCCCCCCCC", {"city": "X"}
        )

        assert result.code is ErrorCode.NOT_FOUND
        job_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service, tenant, job_repository):
        result = await service.update_job(tenant, "not-an-id", {})

        assert result.code is ErrorCode.NOT_FOUND
        job_repository.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_is_scoped_to_tenant(
        self, service, tenant, job_repository, existing_job
    ):
        job_repository.get.return_value = existing_job

        result = await service.update_job(
            tenant, existing_job.id.value, {"description": "<p>Oi</p><script>"}
        )

        assert result.ok
        assert result.data.description == "<p>Oi</p>"
        job_repository.get.assert_awaited_once_with(tenant.tenant_id, existing_job.id)
        job_repository.save.assert_awaited_once_with(existing_job)

    @pytest.mark.asyncio
    async def test_rename_validation(
        self, service, tenant, job_repository, existing_job
    ):
        job_repository.get.return_value = existing_job

        result = await service.update_job_title(tenant, existing_job.id.value, "")

        assert result.code is ErrorCode.VALIDATION

    @pytest.mark.asyncio
    async def test_status_change(
        self, service, tenant, job_repository, existing_job, mock_probe
    ):
        job_repository.get.return_value = existing_job

        result = await service.update_job_status(
            tenant, existing_job.id.value, JobStatus.ACTIVE
        )

        assert result.data.step == 2
        mock_probe.job_status_changed.assert_called_once_with(
            existing_job.id.value, "active"
        )


class TestReads:
    @pytest.mark.asyncio
    async def test_get_job_of_other_tenant_is_not_found(
        self, service, tenant, job_repository, stage_repository
    ):
        job_repository.get.return_value = None

        result = await service.get_job(tenant, "01JCCCCCCCCCCCCCCCCCCCCCCC")

        assert result.code is ErrorCode.NOT_FOUND
        stage_repository.list_for_job.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_public_job_requires_well_formed_segment(
        self, service, job_repository
    ):
        result = await service.get_public_job("acme", "designer")

        assert result.code is ErrorCode.NOT_FOUND
        job_repository.get_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_public_job_lookup_by_slug(
        self, service, job_repository, existing_job
    ):
        job_repository.get_published.return_value = existing_job

        result = await service.get_public_job(
            "acme", f"product-designer--{existing_job.id.value}"
        )

        assert result.data is existing_job
        job_repository.get_published.assert_awaited_once_with("acme", existing_job.id)
