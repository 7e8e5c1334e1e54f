"""Ports (interfaces) for the recruiting bounded context."""

from recruiting.ports.repositories import (
    IJobRepository,
    IMemberRepository,
    IStageRepository,
    JobFilters,
)

__all__ = [
    "IJobRepository",
    "IMemberRepository",
    "IStageRepository",
    "JobFilters",
]
