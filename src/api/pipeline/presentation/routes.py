"""HTTP routes for a job's pipeline board.

Each request builds a PipelineEngine for the job in the caller's tenant.
The events route keeps one engine alive for the whole connection and
streams a board snapshot after every merged change event.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.dependencies.guards import require_tenant_role
from iam.dependencies.tenant_context import get_tenant_context
from iam.domain.value_objects import OrganizationRole
from infrastructure.database.dependencies import get_write_sessionmaker
from infrastructure.dependencies import get_change_feed
from infrastructure.http_errors import raise_for_failure
from pipeline.application.candidate_service import CandidateService
from pipeline.application.engine import PipelineEngine
from pipeline.application.observability import PipelineProbe
from pipeline.dependencies.services import (
    build_pipeline_store,
    Observation,
    get_candidate_service,
    get_pipeline_probe,
    get_pipeline_store,
)
from pipeline.domain.board import CANDIDATES_TABLE, STAGES_TABLE, Board
from pipeline.ports.store import IPipelineStore
from pipeline.presentation.models import (
    AddCandidateRequest,
    BoardResponse,
    CandidateCardResponse,
    MoveRequest,
    MoveResponse,
    ReorderStagesRequest,
)
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.realtime import ChangeFeed, ChangeScope, ChangeSubscription

router = APIRouter(
    prefix="/{tenant_slug}/vagas/detalhes/{job_id}/pipeline", tags=["pipeline"]
)

require_editor = require_tenant_role(
    OrganizationRole.OWNER, OrganizationRole.ADMIN, OrganizationRole.MEMBER
)

Reader = Annotated[TenantContext, Depends(get_tenant_context)]
Editor = Annotated[TenantContext, Depends(require_editor)]
Store = Annotated[IPipelineStore, Depends(get_pipeline_store)]
Candidates = Annotated[CandidateService, Depends(get_candidate_service)]
Probe = Annotated[PipelineProbe, Depends(get_pipeline_probe)]

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def _loaded_engine(
    tenant: TenantContext, job_id: str, store: IPipelineStore, probe: PipelineProbe
) -> PipelineEngine:
    engine = PipelineEngine(tenant, job_id, store, probe=probe)
    raise_for_failure(await engine.load())
    return engine


@router.get("")
async def get_board(
    job_id: str, tenant: Reader, store: Store, probe: Probe
) -> BoardResponse:
    """Stages in position order with the candidates in each."""
    engine = await _loaded_engine(tenant, job_id, store, probe)
    return BoardResponse.from_domain(engine.board)


@router.post("/moves", response_model=MoveResponse)
async def move_candidate(
    job_id: str, body: MoveRequest, tenant: Editor, store: Store, probe: Probe
) -> JSONResponse:
    """Move a candidate to another stage of the job.

    A failed move answers with its error status (409 when another session
    moved the candidate first) and the board as it stands after the revert.
    """
    engine = await _loaded_engine(tenant, job_id, store, probe)
    outcome = await engine.move(
        body.candidate_id,
        body.target_stage_id,
        expected_version=body.expected_version,
    )
    return JSONResponse(
        status_code=outcome.http_status,
        content=MoveResponse.from_outcome(outcome).model_dump(mode="json"),
    )


@router.put("/stages/order")
async def reorder_stages(
    job_id: str,
    body: ReorderStagesRequest,
    tenant: Editor,
    store: Store,
    probe: Probe,
) -> BoardResponse:
    """Rewrite stage positions to follow `stage_ids`, all or nothing."""
    engine = await _loaded_engine(tenant, job_id, store, probe)
    board = raise_for_failure(await engine.reorder_stages(body.stage_ids))
    return BoardResponse.from_domain(board)


@router.post("/candidatos", status_code=status.HTTP_201_CREATED)
async def add_candidate(
    job_id: str, body: AddCandidateRequest, tenant: Editor, service: Candidates
) -> CandidateCardResponse:
    card = raise_for_failure(
        await service.add_candidate_to_job(
            tenant, job_id, body.member_id, stage_id=body.stage_id
        )
    )
    return CandidateCardResponse.from_domain(card)


@router.delete("/candidatos/{job_candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_candidate(
    job_id: str, job_candidate_id: str, tenant: Editor, service: Candidates
) -> None:
    raise_for_failure(await service.remove_candidate(tenant, job_candidate_id))


def format_sse(event: str, board: Board) -> str:
    data = BoardResponse.from_domain(board).model_dump_json()
    return f"event: {event}\ndata: {data}\n\n"


async def stream_board(
    engine: PipelineEngine,
    subscription: ChangeSubscription,
    session: AsyncSession,
) -> AsyncIterator[str]:
    """Initial snapshot, then one snapshot per merged change event."""
    try:
        yield format_sse("snapshot", engine.board)
        async for event in subscription:
            board = await engine.handle_event(event)
            yield format_sse("board", board)
    finally:
        await subscription.close()
        await session.close()


@router.get("/events")
async def board_events(
    job_id: str,
    tenant: Reader,
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_write_sessionmaker)
    ],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    observation: Observation,
    probe: Probe,
) -> StreamingResponse:
    """Server-sent board snapshots for the job.

    The stream holds its own session; request-scoped sessions close
    before a streaming body finishes.
    """
    session = sessionmaker()
    try:
        engine = await _loaded_engine(
            tenant, job_id, build_pipeline_store(session, observation), probe
        )
    except Exception:
        await session.close()
        raise

    subscription = feed.subscribe(
        ChangeScope((CANDIDATES_TABLE, STAGES_TABLE), "job_id", job_id)
    )
    return StreamingResponse(
        stream_board(engine, subscription, session),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
