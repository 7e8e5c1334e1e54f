"""Pydantic models for recruiting API requests and responses."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from recruiting.domain.aggregates import Job, Member, MemberNote, PipelineStage
from recruiting.domain.slugs import generate_public_job_url
from recruiting.domain.value_objects import JobStatus, JobType, StageTemplate


class JobFields(BaseModel):
    """Editable job fields shared by create and update."""

    job_type: JobType | None = None
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
    salary_min: float | None = Field(default=None, ge=0)
    salary_max: float | None = Field(default=None, ge=0)
    salary_currency: str | None = Field(default=None, min_length=3, max_length=3)
    publish_salary: bool | None = None
    publish_company: bool | None = None


class StageTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(default="#6b7280", pattern=r"^#[0-9a-fA-F]{6}$")
    position: int = Field(default=0, ge=0)


class CreateJobRequest(JobFields):
    """Create a draft job. Stages default to the standard template."""

    title: str = Field(..., min_length=1, max_length=255)
    owner_user_id: str | None = None
    stages: list[StageTemplateRequest] | None = None

    def stage_templates(self) -> list[StageTemplate] | None:
        """Requested stages in position order."""
        if not self.stages:
            return None
        ordered = sorted(self.stages, key=lambda stage: stage.position)
        return [StageTemplate(name=s.name, color=s.color) for s in ordered]

    def job_fields(self) -> dict[str, Any]:
        return self.model_dump(
            exclude={"title", "stages"}, exclude_unset=True, mode="python"
        )


class UpdateJobRequest(JobFields):
    title: str | None = Field(default=None, max_length=255)


class UpdateJobTitleRequest(BaseModel):
    title: str = Field(..., max_length=255)


class UpdateJobStatusRequest(BaseModel):
    status: JobStatus
    archive_reason: str | None = Field(default=None, max_length=255)
    archive_notes: str | None = None


class CreateStageRequest(BaseModel):
    name: str = Field(..., max_length=100)
    color: str | None = Field(default=None, pattern=r"^#[0-9a-fA-F]{6}$")
    position: int | None = Field(default=None, ge=0)


class StageResponse(BaseModel):
    id: str
    name: str
    color: str
    position: int

    @classmethod
    def from_domain(cls, stage: PipelineStage) -> StageResponse:
        return cls(
            id=stage.id.value,
            name=stage.name,
            color=stage.color,
            position=stage.position,
        )


class JobResponse(BaseModel):
    """Response model for a job posting."""

    id: str
    title: str
    job_type: JobType
    status: JobStatus
    step: int
    is_published: bool
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
    salary_currency: str
    publish_salary: bool
    publish_company: bool
    archive_reason: str | None = None
    public_url: str
    stages: list[StageResponse] | None = None

    @classmethod
    def from_domain(
        cls,
        job: Job,
        tenant_slug: str,
        stages: list[PipelineStage] | None = None,
    ) -> JobResponse:
        return cls(
            id=job.id.value,
            title=job.title,
            job_type=job.job_type,
            status=job.status,
            step=job.step,
            is_published=job.is_published,
            published_at=job.published_at,
            owner_user_id=job.owner_user_id,
            sector=job.sector,
            company_id=job.company_id,
            seniority=job.seniority,
            city=job.city,
            country=job.country,
            work_model=job.work_model,
            contract_type=job.contract_type,
            hiring_deadline=job.hiring_deadline,
            description=job.description,
            activities=job.activities,
            requirements=job.requirements,
            benefits=job.benefits,
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            salary_currency=job.salary_currency,
            publish_salary=job.publish_salary,
            publish_company=job.publish_company,
            archive_reason=job.archive_reason,
            public_url=generate_public_job_url(tenant_slug, job.id.value, job.title),
            stages=(
                [StageResponse.from_domain(s) for s in stages]
                if stages is not None
                else None
            ),
        )


class PublicJobResponse(BaseModel):
    """What anonymous visitors see of a published job."""

    id: str
    title: str
    city: str | None = None
    country: str | None = None
    work_model: str | None = None
    contract_type: str | None = None
    description: str | None = None
    activities: str | None = None
    requirements: str | None = None
    benefits: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    published_at: datetime | None = None

    @classmethod
    def from_domain(cls, job: Job) -> PublicJobResponse:
        salary = (
            {
                "salary_min": job.salary_min,
                "salary_max": job.salary_max,
                "salary_currency": job.salary_currency,
            }
            if job.publish_salary
            else {}
        )
        return cls(
            id=job.id.value,
            title=job.title,
            city=job.city,
            country=job.country,
            work_model=job.work_model,
            contract_type=job.contract_type,
            description=job.description,
            activities=job.activities,
            requirements=job.requirements,
            benefits=job.benefits,
            published_at=job.published_at,
            **salary,
        )


class LanguageEntry(BaseModel):
    language: str
    proficiency: Literal[
        "básico", "intermediário", "avançado", "fluente", "nativo"
    ]


class SalaryExpectation(BaseModel):
    min: float | None = None
    max: float | None = None
    currency: str | None = None
    periodicity: str | None = None
    notes: str | None = None


class MemberFields(BaseModel):
    role: str | None = None
    seniority: str | None = None
    city: str | None = None
    country: str | None = None
    availability: str | None = None
    linkedin_url: str | None = None
    job_type: str | None = None
    languages_with_proficiency: list[LanguageEntry] | None = None
    salary_by_type: dict[str, SalaryExpectation] | None = None

    def changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class CreateMemberRequest(MemberFields):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=320)


class UpdateMemberRequest(MemberFields):
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)


class AppendNoteRequest(BaseModel):
    content: str = Field(..., max_length=10_000)
    author_name: str = Field(..., min_length=1, max_length=255)


class NoteResponse(BaseModel):
    content: str
    author: str
    author_id: str
    created_at: datetime

    @classmethod
    def from_domain(cls, note: MemberNote) -> NoteResponse:
        return cls(
            content=note.content,
            author=note.author,
            author_id=note.author_id,
            created_at=note.created_at,
        )


class MemberResponse(BaseModel):
    id: str
    name: str
    email: str | None = None
    role: str | None = None
    seniority: str | None = None
    city: str | None = None
    country: str | None = None
    availability: str | None = None
    linkedin_url: str | None = None
    job_type: str | None = None
    custom_fields: dict[str, Any]

    @classmethod
    def from_domain(cls, member: Member) -> MemberResponse:
        return cls(
            id=member.id.value,
            name=member.name,
            email=member.email,
            role=member.role,
            seniority=member.seniority,
            city=member.city,
            country=member.country,
            availability=member.availability,
            linkedin_url=member.linkedin_url,
            job_type=member.job_type,
            custom_fields=member.custom_fields,
        )
