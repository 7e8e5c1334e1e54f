"""Unit tests for the board value and its merge functions."""

from __future__ import annotations

from dataclasses import replace

import pytest

from pipeline.domain.board import (
    Board,
    CandidateCard,
    StageSnapshot,
    apply_change_event,
    load_board,
    move,
    needs_reload,
    remove_card,
    reorder_stages,
    revert_move,
    upsert_card,
)
from pipeline.domain.exceptions import InvalidBoardOperationError
from shared_kernel.realtime import ChangeEvent, ChangeEventType

JOB_ID = "job-1"


def card(candidate_id: str, stage_id: str, version: int = 1, **extra) -> CandidateCard:
    return CandidateCard(
        id=candidate_id,
        job_id=extra.pop("job_id", JOB_ID),
        member_id=f"m-{candidate_id}",
        stage_id=stage_id,
        version=version,
        member_name=candidate_id.upper(),
        **extra,
    )


def event(event_type: str, **row) -> ChangeEvent:
    row.setdefault("job_id", JOB_ID)
    kind = ChangeEventType(event_type)
    if kind is ChangeEventType.DELETE:
        return ChangeEvent(table="job_candidates", event_type=kind, old=row)
    return ChangeEvent(table="job_candidates", event_type=kind, new=row)


def layout(board: Board) -> dict[str, list[str]]:
    return {column.id: [c.id for c in column.candidates] for column in board.columns}


@pytest.fixture
def board() -> Board:
    stages = [
        StageSnapshot("s2", "Triagem", "#f59e0b", 1),
        StageSnapshot("s1", "Aplicou", "#6366f1", 0),
        StageSnapshot("s3", "Entrevista", "#3b82f6", 2),
    ]
    return load_board(
        JOB_ID,
        stages,
        [card("a", "s1"), card("b", "s1"), card("c", "s2"), card("x", "gone")],
    )


class TestLoadBoard:
    def test_partitions_by_stage_in_position_order(self, board):
        assert layout(board) == {"s1": ["a", "b"], "s2": ["c"], "s3": []}

    def test_candidates_of_unknown_stages_are_dropped(self, board):
        assert "x" not in board.candidate_ids()


class TestMove:
    def test_appends_to_target(self, board):
        moved = move(board, "a", "s2")

        assert layout(moved) == {"s1": ["b"], "s2": ["c", "a"], "s3": []}
        assert moved.locate("a").card.stage_id == "s2"
        assert layout(board)["s1"] == ["a", "b"]

    @pytest.mark.parametrize(
        "candidate,target", [("zz", "s2"), ("a", "s1"), ("a", "s9")]
    )
    def test_noop(self, board, candidate, target):
        assert move(board, candidate, target) is board

    def test_revert_restores_slot(self, board):
        moved = move(board, "a", "s3")

        reverted = revert_move(moved, "a", "s1", 0)

        assert reverted == board


class TestUpsertCard:
    def test_inserts_new_card_at_end(self, board):
        updated = upsert_card(board, card("d", "s3"))

        assert layout(updated)["s3"] == ["d"]

    def test_older_or_same_version_is_ignored(self, board):
        assert upsert_card(board, card("a", "s3", version=1)) is board

    def test_newer_version_moves_card(self, board):
        updated = upsert_card(board, card("a", "s3", version=2))

        assert layout(updated)["s3"] == ["a"]
        assert updated.locate("a").card.version == 2

    def test_card_of_other_job_is_ignored(self, board):
        assert upsert_card(board, card("d", "s1", job_id="job-2")) is board


class TestApplyChangeEvent:
    def test_update_with_newer_version_moves(self, board):
        updated = apply_change_event(
            board, event("update", id="a", stage_id="s3", version=2)
        )

        assert layout(updated) == {"s1": ["b"], "s2": ["c"], "s3": ["a"]}

    def test_replay_is_idempotent(self, board):
        change = event("update", id="a", stage_id="s3", version=2)

        once = apply_change_event(board, change)

        assert apply_change_event(once, change) == once

    def test_stale_update_is_ignored(self, board):
        moved = upsert_card(board, card("a", "s2", version=3))

        after = apply_change_event(
            moved, event("update", id="a", stage_id="s1", version=2)
        )

        assert after is moved

    def test_optimistic_move_survives_its_own_echo(self, board):
        optimistic = move(board, "a", "s2")
        confirmed = upsert_card(
            optimistic, replace(optimistic.locate("a").card, version=2)
        )

        echoed = apply_change_event(
            confirmed, event("update", id="a", stage_id="s2", version=2)
        )

        assert echoed is confirmed
        assert layout(echoed)["s2"] == ["c", "a"]

    def test_delete_removes_card(self, board):
        updated = apply_change_event(board, event("delete", id="b"))

        assert layout(updated)["s1"] == ["a"]
        assert apply_change_event(updated, event("delete", id="b")) == updated

    def test_insert_of_known_card_merges(self, board):
        updated = apply_change_event(
            board, event("insert", id="c", stage_id="s1", version=2)
        )

        assert layout(updated)["s1"] == ["a", "b", "c"]

    def test_unknown_insert_is_left_to_caller(self, board):
        assert (
            apply_change_event(board, event("insert", id="d", stage_id="s1", version=1))
            is board
        )

    def test_other_job_and_table_are_ignored(self, board):
        other_job = event("update", id="a", stage_id="s3", version=9, job_id="job-2")
        other_table = ChangeEvent(
            table="members",
            event_type=ChangeEventType.UPDATE,
            new={"id": "a", "job_id": JOB_ID, "version": 9},
        )

        assert apply_change_event(board, other_job) is board
        assert apply_change_event(board, other_table) is board

    def test_update_timestamp_is_parsed(self, board):
        updated = apply_change_event(
            board,
            event(
                "update",
                id="a",
                stage_id="s1",
                version=2,
                updated_at="2026-03-01T12:00:00+00:00",
            ),
        )

        assert updated.locate("a").card.updated_at.year == 2026

    def test_concurrent_moves_converge(self, board):
        # Two sessions apply the same pair of events in opposite orders
        first = event("update", id="a", stage_id="s2", version=2)
        second = event("update", id="a", stage_id="s3", version=3)

        left = apply_change_event(apply_change_event(board, first), second)
        right = apply_change_event(apply_change_event(board, second), first)

        assert left == right
        assert left.locate("a").card.stage_id == "s3"


def stage_event(event_type: str, **row) -> ChangeEvent:
    row.setdefault("job_id", JOB_ID)
    kind = ChangeEventType(event_type)
    if kind is ChangeEventType.DELETE:
        return ChangeEvent(table="pipeline_stages", event_type=kind, old=row)
    return ChangeEvent(table="pipeline_stages", event_type=kind, new=row)


class TestNeedsReload:
    def test_candidate_in_unknown_stage(self, board):
        assert needs_reload(board, event("update", id="a", stage_id="s9", version=2))
        assert needs_reload(board, event("insert", id="n", stage_id="s9", version=1))

    def test_candidate_in_known_stage(self, board):
        assert not needs_reload(
            board, event("update", id="a", stage_id="s2", version=2)
        )
        assert not needs_reload(board, event("delete", id="a", stage_id="s9"))

    def test_new_or_removed_stage(self, board):
        assert needs_reload(board, stage_event("insert", id="s4", position=3))
        assert needs_reload(board, stage_event("delete", id="s3"))
        assert not needs_reload(board, stage_event("delete", id="s4"))

    @pytest.mark.parametrize(
        "changes,expected",
        [
            ({}, False),
            ({"name": "Entrevistas"}, True),
            ({"color": "#000000"}, True),
            ({"position": 0}, True),
        ],
    )
    def test_stage_update(self, board, changes, expected):
        row = {"id": "s3", "name": "Entrevista", "color": "#3b82f6", "position": 2}
        row.update(changes)

        assert needs_reload(board, stage_event("update", **row)) is expected

    def test_other_job_or_table(self, board):
        assert not needs_reload(board, stage_event("insert", id="s4", job_id="job-2"))
        other = ChangeEvent(
            table="members",
            event_type=ChangeEventType.INSERT,
            new={"id": "m", "job_id": JOB_ID, "stage_id": "s9"},
        )
        assert not needs_reload(board, other)


class TestRemoveAndReorder:
    def test_remove_unknown_is_noop(self, board):
        assert remove_card(board, "zz") is board

    def test_reorder_renumbers(self, board):
        reordered = reorder_stages(board, ["s3", "s1", "s2"])

        assert [(c.id, c.position) for c in reordered.columns] == [
            ("s3", 0),
            ("s1", 1),
            ("s2", 2),
        ]
        assert layout(reordered)["s1"] == ["a", "b"]

    @pytest.mark.parametrize(
        "ids", [["s1", "s2"], ["s1", "s2", "s2"], ["s1", "s2", "s4"]]
    )
    def test_reorder_requires_permutation(self, board, ids):
        with pytest.raises(InvalidBoardOperationError):
            reorder_stages(board, ids)
