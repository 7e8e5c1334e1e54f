"""create jobs, pipeline stages and members tables

Also creates candidate_otps, which references members: talent pool
members are the candidate portal accounts.

Revision ID: 7b5d2e4c9a10
Revises: 3c1f0a9e2b71
Create Date: 2026-09-02 10:40:03.552917

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "7b5d2e4c9a10"
down_revision: Union[str, Sequence[str], None] = "3c1f0a9e2b71"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("organization_id", sa.String(length=26), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column(
            "job_type", sa.String(length=20), nullable=False, server_default="generic"
        ),
        sa.Column(
            "status", sa.String(length=20), nullable=False, server_default="draft"
        ),
        sa.Column("step", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "is_published", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("owner_user_id", sa.String(length=255), nullable=True),
        sa.Column("sector", sa.String(length=255), nullable=True),
        sa.Column("company_id", sa.String(length=26), nullable=True),
        sa.Column("seniority", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=255), nullable=True),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("work_model", sa.String(length=100), nullable=True),
        sa.Column("contract_type", sa.String(length=100), nullable=True),
        sa.Column("hiring_deadline", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("activities", sa.Text(), nullable=True),
        sa.Column("requirements", sa.Text(), nullable=True),
        sa.Column("benefits", sa.Text(), nullable=True),
        sa.Column("salary_min", sa.Numeric(12, 2), nullable=True),
        sa.Column("salary_max", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "salary_currency", sa.String(length=3), nullable=False, server_default="BRL"
        ),
        sa.Column(
            "publish_salary", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "publish_company", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column("archive_reason", sa.String(length=255), nullable=True),
        sa.Column("archive_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="RESTRICT"
        ),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'inactive', 'archived')",
            name="ck_jobs_status",
        ),
    )
    op.create_index(
        "idx_jobs_organization_status", "jobs", ["organization_id", "status"]
    )

    op.create_table(
        "pipeline_stages",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("job_id", sa.String(length=26), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("color", sa.String(length=7), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        # Deferred so a reorder can rewrite all positions in one transaction
        sa.UniqueConstraint(
            "job_id",
            "position",
            name="uq_pipeline_stages_job_position",
            deferrable=True,
            initially="DEFERRED",
        ),
        sa.CheckConstraint("position >= 0", name="ck_pipeline_stages_position"),
    )

    op.create_table(
        "members",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("organization_id", sa.String(length=26), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("role", sa.String(length=255), nullable=True),
        sa.Column("seniority", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=255), nullable=True),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("availability", sa.String(length=100), nullable=True),
        sa.Column("linkedin_url", sa.String(length=1024), nullable=True),
        sa.Column("job_type", sa.String(length=20), nullable=True),
        sa.Column(
            "custom_fields",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="RESTRICT"
        ),
    )
    op.create_index("idx_members_organization_id", "members", ["organization_id"])
    op.create_index("idx_members_email", "members", ["email"])

    op.create_table(
        "candidate_otps",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("member_id", sa.String(length=26), nullable=False),
        sa.Column("otp", sa.String(length=10), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_candidate_otps_member_id", "candidate_otps", ["member_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_candidate_otps_member_id", table_name="candidate_otps")
    op.drop_table("candidate_otps")
    op.drop_index("idx_members_email", table_name="members")
    op.drop_index("idx_members_organization_id", table_name="members")
    op.drop_table("members")
    op.drop_table("pipeline_stages")
    op.drop_index("idx_jobs_organization_status", table_name="jobs")
    op.drop_table("jobs")
