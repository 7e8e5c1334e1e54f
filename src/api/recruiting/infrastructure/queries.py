"""Tenant-scoped base queries.

Every recruiting read starts from one of these, so the organization
predicate is present on every statement. Stages and candidates have no
organization column of their own to trust and are scoped through their
job.
"""

from __future__ import annotations

from sqlalchemy import Select, select

from recruiting.infrastructure.models import (
    JobCandidateModel,
    JobModel,
    MemberModel,
    PipelineStageModel,
)


def job_scope(organization_id: str) -> Select:
    return select(JobModel).where(JobModel.organization_id == organization_id)


def stage_scope(organization_id: str) -> Select:
    return (
        select(PipelineStageModel)
        .join(JobModel, JobModel.id == PipelineStageModel.job_id)
        .where(JobModel.organization_id == organization_id)
    )


def member_scope(organization_id: str) -> Select:
    return select(MemberModel).where(MemberModel.organization_id == organization_id)


def job_candidate_scope(organization_id: str) -> Select:
    return (
        select(JobCandidateModel)
        .join(JobModel, JobModel.id == JobCandidateModel.job_id)
        .where(JobModel.organization_id == organization_id)
        .where(JobCandidateModel.organization_id == organization_id)
    )


def scoped_job_ids(organization_id: str) -> Select:
    """Subquery of the organization's job ids, for UPDATE/DELETE predicates."""
    return select(JobModel.id).where(JobModel.organization_id == organization_id)


def scoped_stage_ids(organization_id: str) -> Select:
    return select(PipelineStageModel.id).where(
        PipelineStageModel.job_id.in_(scoped_job_ids(organization_id))
    )
