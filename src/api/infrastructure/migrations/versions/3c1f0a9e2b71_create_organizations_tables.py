"""create organizations and identity tables

Organizations, their platform users, platform role profiles (current and
legacy) and the client portal accounts with their one-time passcodes.

Revision ID: 3c1f0a9e2b71
Revises:
Create Date: 2026-09-02 10:12:40.118302

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9e2b71"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=50), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column("disabled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("logo_url", sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_organizations_slug"),
    )

    op.create_table(
        "organization_users",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("organization_id", sa.String(length=26), nullable=False),
        # External identity provider subject
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="RESTRICT"
        ),
        sa.UniqueConstraint(
            "organization_id", "user_id", name="uq_organization_users_org_user"
        ),
        sa.CheckConstraint(
            "role IN ('owner', 'admin', 'member', 'viewer')",
            name="ck_organization_users_role",
        ),
    )
    op.create_index(
        "idx_organization_users_user_id", "organization_users", ["user_id"]
    )

    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column(
            "role", sa.String(length=50), nullable=False, server_default="user"
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column(
            "is_master_admin",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "company_users",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("organization_id", sa.String(length=26), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="RESTRICT"
        ),
    )
    op.create_index("idx_company_users_email", "company_users", ["email"])

    op.create_table(
        "client_otps",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("company_user_id", sa.String(length=26), nullable=False),
        sa.Column("otp", sa.String(length=10), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["company_user_id"], ["company_users.id"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "idx_client_otps_company_user_id", "client_otps", ["company_user_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_client_otps_company_user_id", table_name="client_otps")
    op.drop_table("client_otps")
    op.drop_index("idx_company_users_email", table_name="company_users")
    op.drop_table("company_users")
    op.drop_table("profiles")
    op.drop_table("user_profiles")
    op.drop_index("idx_organization_users_user_id", table_name="organization_users")
    op.drop_table("organization_users")
    op.drop_table("organizations")
