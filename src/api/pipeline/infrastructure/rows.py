"""Shared query for candidate cards: job_candidates joined to members."""

from __future__ import annotations

from sqlalchemy import Select

from pipeline.domain.board import CandidateCard
from recruiting.infrastructure.models import JobCandidateModel, MemberModel
from recruiting.infrastructure.queries import job_candidate_scope


def card_query(organization_id: str) -> Select:
    """Candidates of the organization with the member fields a card shows."""
    return (
        job_candidate_scope(organization_id)
        .join(MemberModel, MemberModel.id == JobCandidateModel.member_id)
        .where(MemberModel.organization_id == organization_id)
        .add_columns(MemberModel.name, MemberModel.email, MemberModel.role)
    )


def to_card(
    model: JobCandidateModel, name: str, email: str | None, role: str | None
) -> CandidateCard:
    return CandidateCard(
        id=model.id,
        job_id=model.job_id,
        member_id=model.member_id,
        stage_id=model.stage_id,
        version=model.version,
        member_name=name,
        member_email=email,
        member_role=role,
        added_at=model.added_at,
        updated_at=model.updated_at,
    )
