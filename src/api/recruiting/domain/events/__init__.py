"""Domain events for the recruiting bounded context."""

from typing import Union

from recruiting.domain.events.job import JobCreated, JobStatusChanged

DomainEvent = Union[JobCreated, JobStatusChanged]

__all__ = [
    "DomainEvent",
    "JobCreated",
    "JobStatusChanged",
]
