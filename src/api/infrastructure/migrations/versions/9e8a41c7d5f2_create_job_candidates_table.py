"""create job_candidates table

Revision ID: 9e8a41c7d5f2
Revises: 7b5d2e4c9a10
Create Date: 2026-09-03 15:21:47.904416

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "9e8a41c7d5f2"
down_revision: Union[str, Sequence[str], None] = "7b5d2e4c9a10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "job_candidates",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("organization_id", sa.String(length=26), nullable=False),
        sa.Column("job_id", sa.String(length=26), nullable=False),
        sa.Column("member_id", sa.String(length=26), nullable=False),
        sa.Column("stage_id", sa.String(length=26), nullable=False),
        # Bumped on every move; writers compare-and-set on it
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
        # Stages holding candidates cannot be dropped
        sa.ForeignKeyConstraint(
            ["stage_id"], ["pipeline_stages.id"], ondelete="RESTRICT"
        ),
        sa.UniqueConstraint("job_id", "member_id", name="uq_job_candidates_job_member"),
    )
    op.create_index("idx_job_candidates_stage_id", "job_candidates", ["stage_id"])
    op.create_index(
        "idx_job_candidates_organization_id", "job_candidates", ["organization_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_job_candidates_organization_id", table_name="job_candidates")
    op.drop_index("idx_job_candidates_stage_id", table_name="job_candidates")
    op.drop_table("job_candidates")
