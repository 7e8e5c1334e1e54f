"""Pipeline stages of a job.

Stage positions are dense and zero-based: a job with N stages always has
positions 0..N-1, each used once.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from recruiting.domain.exceptions import InvalidStageError, InvalidStageOrderError
from recruiting.domain.value_objects import (
    DEFAULT_STAGE_COLOR,
    JobId,
    StageId,
    StageTemplate,
)

_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass
class PipelineStage:
    """A column of a job's hiring pipeline."""

    id: StageId
    job_id: JobId
    name: str
    color: str
    position: int

    @classmethod
    def create(
        cls, job_id: JobId, name: str, color: str | None, position: int
    ) -> PipelineStage:
        """Raises InvalidStageError for a blank name or a malformed color."""
        name = name.strip()
        if not name:
            raise InvalidStageError("Stage name is required")
        color = color or DEFAULT_STAGE_COLOR
        if not _COLOR_PATTERN.match(color):
            raise InvalidStageError(f"Invalid stage color: {color!r}")
        return cls(
            id=StageId.generate(),
            job_id=job_id,
            name=name,
            color=color,
            position=position,
        )


def stages_from_template(
    job_id: JobId, template: Iterable[StageTemplate]
) -> list[PipelineStage]:
    """Build a job's initial stages, positioned in template order."""
    return [
        PipelineStage.create(job_id, entry.name, entry.color, position)
        for position, entry in enumerate(template)
    ]


def densify(stages: Iterable[PipelineStage]) -> list[PipelineStage]:
    """Sort by current position and renumber 0..N-1 in place."""
    ordered = sorted(stages, key=lambda stage: stage.position)
    for position, stage in enumerate(ordered):
        stage.position = position
    return ordered


def insert_stage(
    stages: Sequence[PipelineStage], new_stage: PipelineStage, position: int | None
) -> list[PipelineStage]:
    """Insert at `position` (clamped) or append, then renumber."""
    ordered = densify(stages)
    index = len(ordered) if position is None else max(0, min(position, len(ordered)))
    ordered.insert(index, new_stage)
    for i, stage in enumerate(ordered):
        stage.position = i
    return ordered


def reorder(
    stages: Sequence[PipelineStage], ordered_ids: Sequence[str]
) -> list[PipelineStage]:
    """Apply a new left-to-right order.

    Raises:
        InvalidStageOrderError: If `ordered_ids` is not a permutation of
            the given stages' ids.
    """
    by_id = {stage.id.value: stage for stage in stages}
    if len(ordered_ids) != len(by_id) or set(ordered_ids) != set(by_id):
        raise InvalidStageOrderError(
            "Stage order must list every stage of the job exactly once"
        )
    result = [by_id[stage_id] for stage_id in ordered_ids]
    for position, stage in enumerate(result):
        stage.position = position
    return result
