"""SQLAlchemy ORM models for the recruiting context."""

from recruiting.infrastructure.models.job import JobModel, PipelineStageModel
from recruiting.infrastructure.models.job_candidate import JobCandidateModel
from recruiting.infrastructure.models.member import MemberModel

__all__ = [
    "JobCandidateModel",
    "JobModel",
    "MemberModel",
    "PipelineStageModel",
]
