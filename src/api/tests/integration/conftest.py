"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance reachable through
the RIVEHR_DB_* environment variables. Tests are skipped when
RIVEHR_DB_HOST is not set. The schema is brought to head with Alembic
once per session.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from ulid import ULID

from iam.infrastructure.models import OrganizationModel
from infrastructure.database.engines import create_write_engine
from infrastructure.settings import DatabaseSettings, get_database_settings
from recruiting.infrastructure.models import (
    JobCandidateModel,
    JobModel,
    MemberModel,
    PipelineStageModel,
)
from shared_kernel.middleware.tenant_context import TenantContext

PROJECT_ROOT = Path(__file__).resolve().parents[4]
MIGRATIONS = PROJECT_ROOT / "src" / "api" / "infrastructure" / "migrations"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


def pytest_collection_modifyitems(config, items):
    if os.getenv("RIVEHR_DB_HOST"):
        return
    skip = pytest.mark.skip(reason="RIVEHR_DB_HOST not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    return get_database_settings()


@pytest.fixture(scope="session")
def migrated(integration_db_settings: DatabaseSettings) -> None:
    """Upgrade the test database schema to head."""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(MIGRATIONS))
    command.upgrade(config, "head")


@pytest.fixture
async def engine(
    migrated: None, integration_db_settings: DatabaseSettings
) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_write_engine(integration_db_settings)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@dataclass(frozen=True)
class SeededPipeline:
    tenant: TenantContext
    job_id: str
    stage_ids: list[str]
    candidate_id: str


@pytest.fixture
async def seeded_pipeline(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[SeededPipeline, None]:
    """One organization with a two-stage job and one candidate at version 1."""
    org_id, job_id, member_id, candidate_id = (str(ULID()) for _ in range(4))
    stage_ids = [str(ULID()), str(ULID())]
    slug = f"it-{org_id.lower()[-12:]}"

    async with sessionmaker() as session, session.begin():
        session.add(OrganizationModel(id=org_id, name="Integration", slug=slug))
        await session.flush()
        session.add(JobModel(id=job_id, organization_id=org_id, title="Dev"))
        session.add(MemberModel(id=member_id, organization_id=org_id, name="Ana"))
        await session.flush()
        session.add_all(
            [
                PipelineStageModel(
                    id=stage_id,
                    job_id=job_id,
                    name=f"Stage {position}",
                    color="#6b7280",
                    position=position,
                )
                for position, stage_id in enumerate(stage_ids)
            ]
        )
        await session.flush()
        session.add(
            JobCandidateModel(
                id=candidate_id,
                organization_id=org_id,
                job_id=job_id,
                member_id=member_id,
                stage_id=stage_ids[0],
                version=1,
            )
        )

    yield SeededPipeline(
        tenant=TenantContext(
            tenant_id=org_id, tenant_slug=slug, user_id="user-1", user_role="owner"
        ),
        job_id=job_id,
        stage_ids=stage_ids,
        candidate_id=candidate_id,
    )

    async with sessionmaker() as session, session.begin():
        await session.execute(
            delete(JobCandidateModel).where(JobCandidateModel.job_id == job_id)
        )
        await session.execute(delete(JobModel).where(JobModel.id == job_id))
        await session.execute(delete(MemberModel).where(MemberModel.id == member_id))
        await session.execute(
            delete(OrganizationModel).where(OrganizationModel.id == org_id)
        )
