"""Unit tests for pipeline stage ordering."""

import pytest

from recruiting.domain.aggregates import PipelineStage
from recruiting.domain.aggregates.stage import (
    densify,
    insert_stage,
    reorder,
    stages_from_template,
)
from recruiting.domain.exceptions import InvalidStageError, InvalidStageOrderError
from recruiting.domain.value_objects import (
    DEFAULT_STAGE_COLOR,
    DEFAULT_STAGE_TEMPLATE,
    JobId,
)


@pytest.fixture
def job_id() -> JobId:
    return JobId.generate()


@pytest.fixture
def stages(job_id) -> list[PipelineStage]:
    return stages_from_template(job_id, DEFAULT_STAGE_TEMPLATE)


def positions(stages):
    return [stage.position for stage in stages]


class TestCreate:
    def test_default_color(self, job_id):
        stage = PipelineStage.create(job_id, "Teste", None, 0)

        assert stage.color == DEFAULT_STAGE_COLOR

    @pytest.mark.parametrize("name,color", [("  ", "#ffffff"), ("Ok", "red")])
    def test_invalid(self, job_id, name, color):
        with pytest.raises(InvalidStageError):
            PipelineStage.create(job_id, name, color, 0)


class TestTemplate:
    def test_default_template_order(self, stages):
        assert [stage.name for stage in stages] == [
            "Aplicou",
            "Triagem",
            "Entrevista",
            "Proposta",
            "Contratado",
        ]
        assert positions(stages) == [0, 1, 2, 3, 4]


class TestDensify:
    def test_closes_gaps(self, stages):
        del stages[1]
        stages[0].position = 7

        ordered = densify(stages)

        assert positions(ordered) == [0, 1, 2, 3]
        assert ordered[-1].name == "Aplicou"


class TestInsertStage:
    def test_insert_in_middle(self, job_id, stages):
        new = PipelineStage.create(job_id, "Teste técnico", None, 0)

        ordered = insert_stage(stages, new, 2)

        assert ordered[2] is new
        assert positions(ordered) == list(range(6))

    def test_append_when_no_position(self, job_id, stages):
        new = PipelineStage.create(job_id, "Onboarding", None, 0)

        assert insert_stage(stages, new, None)[-1] is new

    def test_position_is_clamped(self, job_id, stages):
        new = PipelineStage.create(job_id, "X", None, 0)

        assert insert_stage(stages, new, 99)[-1] is new

    def test_negative_position_inserts_first(self, job_id, stages):
        new = PipelineStage.create(job_id, "Y", None, 0)

        assert insert_stage(stages, new, -3)[0] is new


class TestReorder:
    def test_applies_permutation(self, stages):
        ids = [stage.id.value for stage in reversed(stages)]

        ordered = reorder(stages, ids)

        assert [stage.id.value for stage in ordered] == ids
        assert positions(ordered) == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("mutation", ["missing", "duplicate", "foreign"])
    def test_non_permutation_is_rejected(self, stages, mutation):
        ids = [stage.id.value for stage in stages]
        if mutation == "missing":
            ids = ids[:-1]
        elif mutation == "duplicate":
            ids[-1] = ids[0]
        else:
            ids[-1] = "01JZZZZZZZZZZZZZZZZZZZZZZZ"

        with pytest.raises(InvalidStageOrderError):
            reorder(stages, ids)
