"""SQLAlchemy ORM model for candidates in a job's pipeline."""

from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now


class JobCandidateModel(Base):
    """ORM model for job_candidates table.

    One row per (job, member). Moving a candidate rewrites `stage_id` and
    bumps `version`; writers compare-and-set on the version they read.
    Row changes are published on the change feed by a trigger.
    """

    __tablename__ = "job_candidates"
    __table_args__ = (
        UniqueConstraint("job_id", "member_id", name="uq_job_candidates_job_member"),
        Index("idx_job_candidates_stage_id", "stage_id"),
        Index("idx_job_candidates_organization_id", "organization_id"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    job_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
    )
    member_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
    )
    stage_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("pipeline_stages.id", ondelete="RESTRICT"),
        nullable=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<JobCandidateModel(id={self.id}, job_id={self.job_id}, "
            f"stage_id={self.stage_id}, version={self.version})>"
        )
