"""SQLAlchemy ORM models for jobs and their pipeline stages."""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class JobModel(Base, TimestampMixin):
    """ORM model for jobs table.

    Every job row belongs to one organization; all queries filter on
    organization_id.
    """

    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_jobs_organization_status", "organization_id", "status"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    job_type: Mapped[str] = mapped_column(String(20), nullable=False, default="generic")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    step: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    owner_user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sector: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    seniority: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    work_model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contract_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    hiring_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    activities: Mapped[str | None] = mapped_column(Text, nullable=True)
    requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    benefits: Mapped[str | None] = mapped_column(Text, nullable=True)
    salary_min: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )
    salary_max: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )
    salary_currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="BRL"
    )
    publish_salary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    publish_company: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    archive_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    archive_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<JobModel(id={self.id}, organization_id={self.organization_id})>"


class PipelineStageModel(Base, TimestampMixin):
    """ORM model for pipeline_stages table.

    (job_id, position) is unique. The constraint is deferred so a reorder
    can rewrite every position inside one transaction.
    """

    __tablename__ = "pipeline_stages"
    __table_args__ = (
        UniqueConstraint(
            "job_id",
            "position",
            name="uq_pipeline_stages_job_position",
            deferrable=True,
            initially="DEFERRED",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    job_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<PipelineStageModel(id={self.id}, job_id={self.job_id}, "
            f"position={self.position})>"
        )
