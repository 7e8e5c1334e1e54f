"""Pydantic models for pipeline API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from pipeline.application.engine import MoveOutcome
from pipeline.domain.board import Board, CandidateCard, StageColumn


class CandidateCardResponse(BaseModel):
    id: str
    job_id: str
    member_id: str
    stage_id: str
    version: int
    member_name: str
    member_email: str | None = None
    member_role: str | None = None
    added_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, card: CandidateCard) -> CandidateCardResponse:
        return cls(
            id=card.id,
            job_id=card.job_id,
            member_id=card.member_id,
            stage_id=card.stage_id,
            version=card.version,
            member_name=card.member_name,
            member_email=card.member_email,
            member_role=card.member_role,
            added_at=card.added_at,
            updated_at=card.updated_at,
        )


class StageColumnResponse(BaseModel):
    id: str
    name: str
    color: str
    position: int
    candidates: list[CandidateCardResponse]

    @classmethod
    def from_domain(cls, column: StageColumn) -> StageColumnResponse:
        return cls(
            id=column.id,
            name=column.name,
            color=column.color,
            position=column.position,
            candidates=[
                CandidateCardResponse.from_domain(card) for card in column.candidates
            ],
        )


class BoardResponse(BaseModel):
    """Columns in position order, each with its candidates."""

    job_id: str
    stages: list[StageColumnResponse]

    @classmethod
    def from_domain(cls, board: Board) -> BoardResponse:
        return cls(
            job_id=board.job_id,
            stages=[StageColumnResponse.from_domain(c) for c in board.columns],
        )


class MoveRequest(BaseModel):
    candidate_id: str = Field(..., min_length=1)
    target_stage_id: str = Field(..., min_length=1)
    expected_version: int | None = Field(
        default=None,
        ge=1,
        description="Version the client last saw; a newer stored version is a conflict",
    )


class MoveResponse(BaseModel):
    ok: bool
    candidate_id: str
    from_stage_id: str | None = None
    to_stage_id: str | None = None
    moved: bool = False
    version: int | None = None
    error: str | None = None
    board: BoardResponse

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome) -> MoveResponse:
        return cls(
            ok=outcome.ok,
            candidate_id=outcome.candidate_id,
            from_stage_id=outcome.from_stage_id,
            to_stage_id=outcome.to_stage_id,
            moved=outcome.moved,
            version=outcome.version,
            error=outcome.error,
            board=BoardResponse.from_domain(outcome.board),
        )


class ReorderStagesRequest(BaseModel):
    stage_ids: list[str] = Field(..., min_length=1)


class AddCandidateRequest(BaseModel):
    member_id: str = Field(..., min_length=1)
    stage_id: str | None = None
