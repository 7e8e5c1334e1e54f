"""Job aggregate for the recruiting context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any, Mapping

from recruiting.domain.events import DomainEvent, JobCreated, JobStatusChanged
from recruiting.domain.exceptions import InvalidJobTitleError
from recruiting.domain.rich_text import sanitize_rich_text
from recruiting.domain.value_objects import JobId, JobStatus, JobType

RICH_TEXT_FIELDS: frozenset[str] = frozenset(
    {"description", "activities", "requirements", "benefits"}
)

EDITABLE_FIELDS: frozenset[str] = RICH_TEXT_FIELDS | {
    "job_type",
    "sector",
    "company_id",
    "seniority",
    "city",
    "country",
    "work_model",
    "contract_type",
    "hiring_deadline",
    "salary_min",
    "salary_max",
    "salary_currency",
    "publish_salary",
    "publish_company",
}


def _clean_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise InvalidJobTitleError("Job title cannot be empty")
    return title


@dataclass
class Job:
    """Job posting aggregate.

    Business rules:
    - Every job belongs to exactly one organization
    - `step` always follows `status` (see JobStatus.step)
    - Rich-text fields only ever hold sanitized markup
    """

    id: JobId
    organization_id: str
    title: str
    job_type: JobType = JobType.GENERIC
    status: JobStatus = JobStatus.DRAFT
    step: int = 0
    is_published: bool = False
    published_at: datetime | None = None
    owner_user_id: str | None = None
    sector: str | None = None
    company_id: str | None = None
    seniority: str | None = None
    city: str | None = None
    country: str | None = None
    work_model: str | None = None
    contract_type: str | None = None
    hiring_deadline: date | None = None
    description: str | None = None
    activities: str | None = None
    requirements: str | None = None
    benefits: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str = "BRL"
    publish_salary: bool = False
    publish_company: bool = True
    archive_reason: str | None = None
    archive_notes: str | None = None
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(
        cls,
        organization_id: str,
        title: str,
        owner_user_id: str,
        stage_count: int = 0,
        fields: Mapping[str, Any] | None = None,
    ) -> Job:
        """Create a draft job.

        Raises:
            InvalidJobTitleError: If the title is blank.
        """
        job = cls(
            id=JobId.generate(),
            organization_id=organization_id,
            title=_clean_title(title),
            owner_user_id=owner_user_id,
        )
        if fields:
            job.update(fields)
        job._pending_events.append(
            JobCreated(
                job_id=job.id.value,
                organization_id=organization_id,
                title=job.title,
                stage_count=stage_count,
                occurred_at=datetime.now(UTC),
            )
        )
        return job

    def rename(self, title: str) -> None:
        self.title = _clean_title(title)

    def update(self, changes: Mapping[str, Any]) -> None:
        """Apply a partial update. Unknown keys are ignored."""
        if "title" in changes and changes["title"] is not None:
            self.rename(changes["title"])
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                continue
            if name in RICH_TEXT_FIELDS:
                value = sanitize_rich_text(value)
            elif name == "job_type" and value is not None:
                value = JobType(value)
            setattr(self, name, value)

    def change_status(
        self,
        status: JobStatus,
        now: datetime | None = None,
        archive_reason: str | None = None,
        archive_notes: str | None = None,
    ) -> None:
        """Move the job to a new lifecycle status, keeping `step` in sync."""
        now = now or datetime.now(UTC)
        previous = self.status
        self.status = status
        self.step = status.step
        self.is_published = status.is_published
        if status is JobStatus.ACTIVE:
            self.published_at = now
        if status is JobStatus.ARCHIVED:
            self.archive_reason = archive_reason
            self.archive_notes = archive_notes

        self._pending_events.append(
            JobStatusChanged(
                job_id=self.id.value,
                organization_id=self.organization_id,
                previous_status=previous.value,
                status=status.value,
                step=self.step,
                occurred_at=now,
            )
        )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
