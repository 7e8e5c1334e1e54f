"""Job lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class JobCreated:
    """A job posting was created as a draft."""

    job_id: str
    organization_id: str
    title: str
    stage_count: int
    occurred_at: datetime


@dataclass(frozen=True)
class JobStatusChanged:
    job_id: str
    organization_id: str
    previous_status: str
    status: str
    step: int
    occurred_at: datetime
