"""Unit tests for change event parsing and scopes."""

import json

import pytest

from shared_kernel.realtime import (
    ChangeEvent,
    ChangeEventType,
    ChangeScope,
    InvalidChangeEventError,
)


def payload(**overrides) -> str:
    data = {
        "table": "job_candidates",
        "event_type": "UPDATE",
        "old": {"id": "jc-1", "job_id": "job-1", "stage_id": "s1", "version": 1},
        "new": {"id": "jc-1", "job_id": "job-1", "stage_id": "s2", "version": 2},
    }
    data.update(overrides)
    return json.dumps(data)


class TestFromPayload:
    def test_parses_envelope(self):
        event = ChangeEvent.from_payload(payload())

        assert event.table == "job_candidates"
        assert event.event_type == ChangeEventType.UPDATE
        assert event.row["stage_id"] == "s2"

    def test_delete_row_is_old_image(self):
        event = ChangeEvent.from_payload(payload(event_type="delete", new=None))

        assert event.new == {}
        assert event.row["id"] == "jc-1"

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            json.dumps({"table": "job_candidates"}),
            json.dumps({"event_type": "insert"}),
            json.dumps({"table": "x", "event_type": "truncate"}),
        ],
    )
    def test_invalid_payloads(self, raw: str):
        with pytest.raises(InvalidChangeEventError):
            ChangeEvent.from_payload(raw)


class TestChangeScope:
    def test_matches_table_and_column(self):
        event = ChangeEvent.from_payload(payload())

        assert ChangeScope("job_candidates", "job_id", "job-1").matches(event)
        assert not ChangeScope("job_candidates", "job_id", "job-2").matches(event)
        assert not ChangeScope("members", "job_id", "job-1").matches(event)

    def test_matches_any_of_several_tables(self):
        scope = ChangeScope(("job_candidates", "pipeline_stages"), "job_id", "job-1")
        stage = ChangeEvent(
            table="pipeline_stages",
            event_type=ChangeEventType.INSERT,
            new={"id": "s4", "job_id": "job-1"},
        )
        member = ChangeEvent(
            table="members",
            event_type=ChangeEventType.INSERT,
            new={"id": "m", "job_id": "job-1"},
        )

        assert scope.tables == ("job_candidates", "pipeline_stages")
        assert scope.matches(stage)
        assert scope.matches(ChangeEvent.from_payload(payload()))
        assert not scope.matches(member)
        assert ChangeScope("members", "job_id", "job-1").tables == ("members",)
