"""Value objects for the recruiting domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class _UlidId:
    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls):
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str):
        """Parse an identifier.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e
        return cls(value=value)


@dataclass(frozen=True)
class JobId(_UlidId):
    """Identifier for a Job."""


@dataclass(frozen=True)
class StageId(_UlidId):
    """Identifier for a PipelineStage."""


@dataclass(frozen=True)
class MemberId(_UlidId):
    """Identifier for a talent-pool Member."""


class JobStatus(StrEnum):
    """Lifecycle status of a job posting."""

    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"

    @property
    def step(self) -> int:
        """Workflow step kept alongside the status.

        0 = draft, 1 = pending approval, 2 = published.
        """
        match self:
            case JobStatus.ACTIVE:
                return 2
            case JobStatus.INACTIVE:
                return 1
            case _:
                return 0

    @property
    def is_published(self) -> bool:
        return self is JobStatus.ACTIVE


class JobType(StrEnum):
    UX = "ux"
    GENERIC = "generic"


@dataclass(frozen=True)
class StageTemplate:
    """Name and color of a stage to create with a new job."""

    name: str
    color: str


DEFAULT_STAGE_TEMPLATE: tuple[StageTemplate, ...] = (
    StageTemplate(name="Aplicou", color="#6366f1"),
    StageTemplate(name="Triagem", color="#f59e0b"),
    StageTemplate(name="Entrevista", color="#3b82f6"),
    StageTemplate(name="Proposta", color="#10b981"),
    StageTemplate(name="Contratado", color="#14b8a6"),
)

DEFAULT_STAGE_COLOR = "#6b7280"
