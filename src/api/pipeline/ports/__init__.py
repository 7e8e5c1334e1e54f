"""Ports (interfaces) for the pipeline bounded context."""

from pipeline.ports.exceptions import (
    CandidateNotFoundError,
    DuplicateCandidateError,
    StageOrderRejectedError,
    StaleCandidateVersionError,
)
from pipeline.ports.store import BoardSnapshot, IJobCandidateRepository, IPipelineStore

__all__ = [
    "BoardSnapshot",
    "CandidateNotFoundError",
    "DuplicateCandidateError",
    "IJobCandidateRepository",
    "IPipelineStore",
    "StageOrderRejectedError",
    "StaleCandidateVersionError",
]
