"""Pipeline engine: one job's board, kept in step with storage.

The engine owns a `Board` value and replaces it on every change. User
moves are applied to the board before their write is issued; a failed
write reverts the move and is reported in the returned `MoveOutcome`.
Change events from other sessions are merged with the pure functions in
`pipeline.domain.board`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from sqlalchemy.exc import SQLAlchemyError

from pipeline.application.observability import DefaultPipelineProbe, PipelineProbe
from pipeline.domain import board as board_ops
from pipeline.domain.board import Board
from pipeline.domain.exceptions import InvalidBoardOperationError
from pipeline.ports.exceptions import (
    CandidateNotFoundError,
    StageOrderRejectedError,
    StaleCandidateVersionError,
)
from pipeline.ports.store import IPipelineStore
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.realtime import ChangeEvent, ChangeEventType
from shared_kernel.results import HTTP_STATUS_BY_CODE, ActionResult, ErrorCode

JOB_NOT_FOUND = "Job not found"


class BoardNotLoadedError(RuntimeError):
    """Raised when the engine is used before `load()` succeeded."""


@dataclass(frozen=True)
class MoveOutcome:
    """Result of a move, carrying the board after it (or after its revert)."""

    ok: bool
    board: Board
    candidate_id: str
    from_stage_id: str | None = None
    to_stage_id: str | None = None
    moved: bool = False
    version: int | None = None
    error: str | None = None
    code: ErrorCode | None = None

    @property
    def http_status(self) -> int:
        if self.ok or self.code is None:
            return 200
        return HTTP_STATUS_BY_CODE[self.code]


class PipelineEngine:
    """Stage and candidate state of one job in the caller's tenant."""

    def __init__(
        self,
        ctx: TenantContext,
        job_id: str,
        store: IPipelineStore,
        probe: PipelineProbe | None = None,
    ):
        self._ctx = ctx
        self._job_id = job_id
        self._store = store
        self._probe = probe or DefaultPipelineProbe()
        self._board: Board | None = None

    @property
    def job_id(self) -> str:
        return self._job_id

    @property
    def board(self) -> Board:
        if self._board is None:
            raise BoardNotLoadedError(f"Board for job {self._job_id} is not loaded")
        return self._board

    async def load(self) -> ActionResult[Board]:
        """Fetch stages and candidates and build the initial board."""
        try:
            snapshot = await self._store.load(self._ctx, self._job_id)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("load_board", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not load board")
        if snapshot is None:
            return ActionResult.failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)

        self._board = board_ops.load_board(
            self._job_id, snapshot.stages, snapshot.candidates
        )
        self._probe.board_loaded(
            self._job_id, len(snapshot.stages), len(snapshot.candidates)
        )
        return ActionResult.success(self._board)

    async def move(
        self,
        candidate_id: str,
        target_stage_id: str,
        expected_version: int | None = None,
    ) -> MoveOutcome:
        """Move a candidate to another stage.

        The board changes before the write is awaited. If the write fails
        (stale version, candidate gone, storage error) the move is
        reverted and the outcome carries the error.

        A candidate or target stage that is not on the board is not a
        no-op: the outcome has ok=False and code NOT_FOUND, which the
        route returns as 404, and the board is left as it was. Moving a
        candidate to the stage it is already in succeeds without a write.

        Args:
            candidate_id: job_candidates row id.
            target_stage_id: Stage to move to.
            expected_version: Version the caller saw; defaults to the
                version on the board.
        """
        board = self.board
        location = board.locate(candidate_id)
        if location is None:
            return MoveOutcome(
                ok=False,
                board=board,
                candidate_id=candidate_id,
                to_stage_id=target_stage_id,
                error="Candidate not found",
                code=ErrorCode.NOT_FOUND,
            )
        source_stage_id = location.card.stage_id
        if board.column_index(target_stage_id) is None:
            return MoveOutcome(
                ok=False,
                board=board,
                candidate_id=candidate_id,
                from_stage_id=source_stage_id,
                to_stage_id=target_stage_id,
                error="Stage not found",
                code=ErrorCode.NOT_FOUND,
            )
        if source_stage_id == target_stage_id:
            return MoveOutcome(
                ok=True,
                board=board,
                candidate_id=candidate_id,
                from_stage_id=source_stage_id,
                to_stage_id=target_stage_id,
                version=location.card.version,
            )

        version = (
            expected_version if expected_version is not None else location.card.version
        )
        self._board = board_ops.move(board, candidate_id, target_stage_id)

        try:
            new_version = await self._store.persist_move(
                self._ctx, candidate_id, target_stage_id, version
            )
        except StaleCandidateVersionError as e:
            return self._revert(location, target_stage_id, ErrorCode.CONFLICT, str(e))
        except CandidateNotFoundError as e:
            return self._revert(location, target_stage_id, ErrorCode.NOT_FOUND, str(e))
        except SQLAlchemyError as e:
            self._probe.persistence_failed("move_candidate", e)
            return self._revert(
                location, target_stage_id, ErrorCode.PERSISTENCE, "Could not save move"
            )

        moved = self.board.locate(candidate_id)
        if moved is not None:
            self._board = board_ops.upsert_card(
                self.board,
                replace(moved.card, version=new_version),
            )
        self._probe.candidate_moved(
            self._job_id, candidate_id, source_stage_id, target_stage_id
        )
        return MoveOutcome(
            ok=True,
            board=self.board,
            candidate_id=candidate_id,
            from_stage_id=source_stage_id,
            to_stage_id=target_stage_id,
            moved=True,
            version=new_version,
        )

    def _revert(
        self,
        location: board_ops.CardLocation,
        target_stage_id: str,
        code: ErrorCode,
        error: str,
    ) -> MoveOutcome:
        self._board = board_ops.revert_move(
            self.board, location.card.id, location.card.stage_id, location.index
        )
        self._probe.move_reverted(self._job_id, location.card.id, error)
        return MoveOutcome(
            ok=False,
            board=self.board,
            candidate_id=location.card.id,
            from_stage_id=location.card.stage_id,
            to_stage_id=target_stage_id,
            error=error,
            code=code,
        )

    async def handle_event(self, event: ChangeEvent) -> Board:
        """Merge a change event and return the resulting board.

        Inserts of candidates not yet on the board fetch the joined
        record first; a failed fetch leaves the board unchanged. Stage
        changes and moves into stages the board lacks rebuild the board
        from storage; a failed reload keeps the current board.
        """
        before = self.board
        if board_ops.needs_reload(before, event):
            after = await self._reload(event.table)
            self._probe.change_event_applied(
                self._job_id, event.event_type.value, after != before
            )
            return after

        after = board_ops.apply_change_event(before, event)
        candidate_id = str(event.row.get("id"))
        if (
            event.event_type == ChangeEventType.INSERT
            and event.table == board_ops.CANDIDATES_TABLE
            and str(event.row.get("job_id")) == self._job_id
            and after.locate(candidate_id) is None
        ):
            try:
                card = await self._store.fetch_candidate(self._ctx, candidate_id)
            except SQLAlchemyError as e:
                self._probe.candidate_fetch_failed(self._job_id, candidate_id, e)
                card = None
            if card is not None:
                # Re-read: other events may have landed during the fetch
                after = board_ops.upsert_card(self.board, card)
            else:
                after = self.board

        self._board = after
        self._probe.change_event_applied(
            self._job_id, event.event_type.value, after != before
        )
        return after

    async def _reload(self, table: str) -> Board:
        try:
            snapshot = await self._store.load(self._ctx, self._job_id)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("reload_board", e)
            return self.board
        if snapshot is None:
            # Job gone; the stream ends when the caller loses access
            return self.board

        self._board = board_ops.load_board(
            self._job_id, snapshot.stages, snapshot.candidates
        )
        self._probe.board_reloaded(self._job_id, table, len(snapshot.stages))
        return self._board

    async def reorder_stages(self, ordered_ids: Sequence[str]) -> ActionResult[Board]:
        """Reorder the board's stages and persist positions 0..N-1.

        The save is all-or-nothing; on failure the previous order is
        restored.
        """
        board = self.board
        previous_order = board.stage_ids()
        try:
            self._board = board_ops.reorder_stages(board, ordered_ids)
        except InvalidBoardOperationError as e:
            return ActionResult.failure(ErrorCode.VALIDATION, str(e))

        try:
            await self._store.save_stage_order(self._ctx, self._job_id, ordered_ids)
        except StageOrderRejectedError as e:
            self._restore_order(previous_order, str(e))
            return ActionResult.failure(ErrorCode(e.code), str(e))
        except SQLAlchemyError as e:
            self._probe.persistence_failed("reorder_stages", e)
            self._restore_order(previous_order, "persistence")
            return ActionResult.failure(
                ErrorCode.PERSISTENCE, "Could not save stage order"
            )

        self._probe.stages_reordered(self._job_id, len(ordered_ids))
        return ActionResult.success(self.board)

    def _restore_order(self, previous_order: list[str], reason: str) -> None:
        self._board = board_ops.reorder_stages(self.board, previous_order)
        self._probe.stage_reorder_reverted(self._job_id, reason)
