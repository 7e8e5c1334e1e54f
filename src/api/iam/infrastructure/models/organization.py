"""SQLAlchemy ORM models for organizations and their staff memberships."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class OrganizationModel(Base, TimestampMixin):
    """ORM model for organizations table.

    Organizations are the tenant isolation boundary. Slugs are globally
    unique; rows are soft-disabled, never deleted.
    """

    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    disabled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    def __repr__(self) -> str:
        return f"<OrganizationModel(id={self.id}, slug={self.slug})>"


class OrganizationUserModel(Base, TimestampMixin):
    """ORM model for organization_users table.

    One row per (organization, platform user); the role decides the
    permission tier inside the organization.
    """

    __tablename__ = "organization_users"
    __table_args__ = (
        UniqueConstraint(
            "organization_id", "user_id", name="uq_organization_users_org_user"
        ),
        Index("idx_organization_users_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<OrganizationUserModel(organization_id={self.organization_id}, "
            f"user_id={self.user_id}, role={self.role})>"
        )
