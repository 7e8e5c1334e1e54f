"""Kanban board state for one job's pipeline.

The board is an immutable value. Every operation is a pure function that
returns a new board, so the same functions serve the optimistic move
path and the merge of change events from other sessions.

Merging is idempotent: applying an event twice yields the same board as
applying it once. UPDATE events whose version is not newer than the one
already on the board are ignored, which also keeps an optimistic move in
place until its own write comes back.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from pipeline.domain.exceptions import InvalidBoardOperationError
from shared_kernel.realtime import ChangeEvent, ChangeEventType

CANDIDATES_TABLE = "job_candidates"
STAGES_TABLE = "pipeline_stages"

# Row columns an UPDATE event may change on a card
_MERGEABLE_COLUMNS = ("stage_id", "version", "updated_at")


@dataclass(frozen=True)
class CandidateCard:
    """A candidate as shown on the board: the job_candidates row plus the
    member fields the card displays."""

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


@dataclass(frozen=True)
class StageColumn:
    id: str
    name: str
    color: str
    position: int
    candidates: tuple[CandidateCard, ...] = ()


@dataclass(frozen=True)
class StageSnapshot:
    """A stage as loaded from storage, before candidates are placed."""

    id: str
    name: str
    color: str
    position: int


@dataclass(frozen=True)
class CardLocation:
    column_index: int
    index: int
    card: CandidateCard


@dataclass(frozen=True)
class Board:
    job_id: str
    columns: tuple[StageColumn, ...] = ()

    def locate(self, candidate_id: str) -> CardLocation | None:
        for column_index, column in enumerate(self.columns):
            for index, card in enumerate(column.candidates):
                if card.id == candidate_id:
                    return CardLocation(column_index, index, card)
        return None

    def column_index(self, stage_id: str) -> int | None:
        for index, column in enumerate(self.columns):
            if column.id == stage_id:
                return index
        return None

    def stage_ids(self) -> list[str]:
        return [column.id for column in self.columns]

    def candidate_ids(self) -> list[str]:
        return [card.id for column in self.columns for card in column.candidates]


def load_board(
    job_id: str,
    stages: Iterable[StageSnapshot],
    candidates: Iterable[CandidateCard],
) -> Board:
    """Partition candidates into their stages, stages in position order.

    Candidates keep the order they are given in; candidates whose stage
    is not on the board are left out.
    """
    ordered = sorted(stages, key=lambda stage: stage.position)
    by_stage: dict[str, list[CandidateCard]] = {stage.id: [] for stage in ordered}
    for card in candidates:
        if card.stage_id in by_stage:
            by_stage[card.stage_id].append(card)
    return Board(
        job_id=job_id,
        columns=tuple(
            StageColumn(
                id=stage.id,
                name=stage.name,
                color=stage.color,
                position=stage.position,
                candidates=tuple(by_stage[stage.id]),
            )
            for stage in ordered
        ),
    )


def _with_candidates(
    board: Board, changes: Mapping[int, tuple[CandidateCard, ...]]
) -> Board:
    columns = tuple(
        replace(column, candidates=changes[index]) if index in changes else column
        for index, column in enumerate(board.columns)
    )
    return replace(board, columns=columns)


def _relocate(
    board: Board, location: CardLocation, card: CandidateCard, index: int | None
) -> Board:
    """Remove the card at `location` and place `card` in its stage column at
    `index` (appended when None)."""
    target = board.column_index(card.stage_id)
    if target is None:
        return board
    source_cards = list(board.columns[location.column_index].candidates)
    del source_cards[location.index]
    if target == location.column_index:
        target_cards = source_cards
    else:
        target_cards = list(board.columns[target].candidates)
    position = len(target_cards) if index is None else min(index, len(target_cards))
    target_cards.insert(position, card)
    return _with_candidates(
        board,
        {location.column_index: tuple(source_cards), target: tuple(target_cards)},
    )


def move(board: Board, candidate_id: str, target_stage_id: str) -> Board:
    """Move a candidate to the end of another stage.

    No-op when the candidate is unknown, already in the target stage, or
    the target stage is not on the board.
    """
    location = board.locate(candidate_id)
    if location is None or location.card.stage_id == target_stage_id:
        return board
    if board.column_index(target_stage_id) is None:
        return board
    moved = replace(location.card, stage_id=target_stage_id)
    return _relocate(board, location, moved, None)


def revert_move(
    board: Board, candidate_id: str, source_stage_id: str, source_index: int
) -> Board:
    """Undo an optimistic move, restoring the card's previous slot."""
    location = board.locate(candidate_id)
    if location is None:
        return board
    restored = replace(location.card, stage_id=source_stage_id)
    return _relocate(board, location, restored, source_index)


def upsert_card(board: Board, card: CandidateCard) -> Board:
    """Add a card, or merge it into the existing one with the same id.

    Only a newer version changes an existing card.
    """
    if card.job_id != board.job_id:
        return board
    location = board.locate(card.id)
    if location is None:
        target = board.column_index(card.stage_id)
        if target is None:
            return board
        cards = board.columns[target].candidates + (card,)
        return _with_candidates(board, {target: cards})
    if card.version <= location.card.version:
        return board
    values = {column: getattr(card, column) for column in _MERGEABLE_COLUMNS}
    return _merge(board, location, values)


def remove_card(board: Board, candidate_id: str) -> Board:
    location = board.locate(candidate_id)
    if location is None:
        return board
    cards = list(board.columns[location.column_index].candidates)
    del cards[location.index]
    return _with_candidates(board, {location.column_index: tuple(cards)})


def _merge(board: Board, location: CardLocation, values: Mapping[str, Any]) -> Board:
    merged = replace(location.card, **values)
    if merged == location.card:
        return board
    if merged.stage_id == location.card.stage_id:
        cards = list(board.columns[location.column_index].candidates)
        cards[location.index] = merged
        return _with_candidates(board, {location.column_index: tuple(cards)})
    return _relocate(board, location, merged, None)


def _row_version(row: Mapping[str, Any]) -> int | None:
    try:
        return int(row["version"])
    except (KeyError, TypeError, ValueError):
        return None


def _row_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def apply_change_event(board: Board, event: ChangeEvent) -> Board:
    """Merge a job_candidates change event into the board.

    UPDATE events for known candidates merge stage, version and timestamp
    in place. DELETE events remove the candidate. INSERT events for
    candidates already on the board merge like updates; unknown inserts
    need the joined member record, so callers fetch it and use
    `upsert_card`. Events for other tables or jobs leave the board as is,
    as do moves into stages the board does not have; callers check
    `needs_reload` first and rebuild the board from storage.
    """
    if event.table != CANDIDATES_TABLE:
        return board
    row = event.row
    if str(row.get("job_id")) != board.job_id:
        return board
    candidate_id = str(row.get("id"))

    if event.event_type == ChangeEventType.DELETE:
        return remove_card(board, candidate_id)

    location = board.locate(candidate_id)
    if location is None:
        return board

    version = _row_version(row)
    if version is None or version <= location.card.version:
        return board
    stage_id = str(row.get("stage_id") or location.card.stage_id)
    if board.column_index(stage_id) is None:
        return board

    values: dict[str, Any] = {"stage_id": stage_id, "version": version}
    updated_at = _row_timestamp(row.get("updated_at"))
    if updated_at is not None:
        values["updated_at"] = updated_at
    return _merge(board, location, values)


def needs_reload(board: Board, event: ChangeEvent) -> bool:
    """Whether `event` changes the board in a way merging cannot express.

    That is a stage of the job deleted while still on the board, a stage
    inserted or updated whose column is missing or differs in name, color
    or position, and a candidate placed in a stage the board lacks. Events
    already reflected on the board, such as the echo of a reload, do not
    count.
    """
    row = event.row
    if str(row.get("job_id")) != board.job_id:
        return False

    if event.table == STAGES_TABLE:
        index = board.column_index(str(row.get("id")))
        if event.event_type == ChangeEventType.DELETE:
            return index is not None
        if index is None:
            return True
        column = board.columns[index]
        return (
            row.get("name"), row.get("color"), row.get("position")
        ) != (column.name, column.color, column.position)

    if event.table == CANDIDATES_TABLE:
        if event.event_type == ChangeEventType.DELETE:
            return False
        stage_id = row.get("stage_id")
        return stage_id is not None and board.column_index(str(stage_id)) is None

    return False


def reorder_stages(board: Board, ordered_ids: Sequence[str]) -> Board:
    """Reorder columns and renumber positions 0..N-1.

    Raises:
        InvalidBoardOperationError: If `ordered_ids` is not a permutation
            of the board's stage ids.
    """
    by_id = {column.id: column for column in board.columns}
    if len(ordered_ids) != len(by_id) or set(ordered_ids) != set(by_id):
        raise InvalidBoardOperationError(
            "Stage order must list every stage of the job exactly once"
        )
    return replace(
        board,
        columns=tuple(
            replace(by_id[stage_id], position=position)
            for position, stage_id in enumerate(ordered_ids)
        ),
    )
