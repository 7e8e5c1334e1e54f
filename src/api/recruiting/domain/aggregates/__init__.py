"""Recruiting aggregates."""

from recruiting.domain.aggregates.job import Job
from recruiting.domain.aggregates.member import Member, MemberNote
from recruiting.domain.aggregates.stage import PipelineStage

__all__ = [
    "Job",
    "Member",
    "MemberNote",
    "PipelineStage",
]
