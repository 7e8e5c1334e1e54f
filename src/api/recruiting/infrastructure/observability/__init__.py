"""Observability for recruiting infrastructure."""

from recruiting.infrastructure.observability.repository_probe import (
    DefaultRecruitingRepositoryProbe,
    RecruitingRepositoryProbe,
)

__all__ = [
    "DefaultRecruitingRepositoryProbe",
    "RecruitingRepositoryProbe",
]
