"""SQLAlchemy ORM models for portal logins.

Client company users are owned by IAM. Candidate accounts are talent
pool members (owned by recruiting) and are only read here.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin, utc_now


class CompanyUserModel(Base, TimestampMixin):
    """ORM model for company_users table (client portal accounts)."""

    __tablename__ = "company_users"
    __table_args__ = (Index("idx_company_users_email", "email"),)

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)


class CandidateOtpModel(Base):
    """ORM model for candidate_otps table."""

    __tablename__ = "candidate_otps"
    __table_args__ = (Index("idx_candidate_otps_member_id", "member_id"),)

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    # FK to members.id is declared in the migration
    member_id: Mapped[str] = mapped_column(String(26), nullable=False)
    otp: Mapped[str] = mapped_column(String(10), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=utc_now, nullable=False
    )


class ClientOtpModel(Base):
    """ORM model for client_otps table."""

    __tablename__ = "client_otps"
    __table_args__ = (
        Index("idx_client_otps_company_user_id", "company_user_id"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    company_user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("company_users.id", ondelete="CASCADE"),
        nullable=False,
    )
    otp: Mapped[str] = mapped_column(String(10), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=utc_now, nullable=False
    )
