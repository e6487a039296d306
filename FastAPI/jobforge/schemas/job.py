from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from jobforge.core.constants import BENEFITS, EMPLOYMENT_TYPES
from jobforge.core.pricing import JOB_LISTING_PRICING, get_tier
from jobforge.models.job_post import JobPostStatus
from jobforge.services.rich_text import parse_document


class JobPostForm(BaseModel):
    """Fields submitted when creating or editing a job post."""

    job_title: str = Field(min_length=2, max_length=200)
    employment_type: str
    location: str = Field(min_length=1, max_length=200)
    # salary_from <= salary_to is not enforced
    salary_from: int = Field(ge=1)
    salary_to: int = Field(ge=1)
    job_description: str = Field(min_length=1, max_length=100000)
    listing_duration: int = Field(ge=1)
    benefits: list[str] = Field(default_factory=list)

    @field_validator("employment_type")
    @classmethod
    def known_employment_type(cls, v: str) -> str:
        if v not in EMPLOYMENT_TYPES:
            raise ValueError(f"Employment type must be one of: {', '.join(EMPLOYMENT_TYPES)}")
        return v

    @field_validator("job_description")
    @classmethod
    def description_is_document(cls, v: str) -> str:
        parse_document(v)
        return v

    @field_validator("listing_duration")
    @classmethod
    def duration_has_price(cls, v: int) -> int:
        if get_tier(v) is None:
            days = ", ".join(str(t.days) for t in JOB_LISTING_PRICING)
            raise ValueError(f"Listing duration must be one of: {days} days")
        return v

    @field_validator("benefits")
    @classmethod
    def known_benefits(cls, v: list[str]) -> list[str]:
        unknown = [b for b in v if b not in BENEFITS]
        if unknown:
            raise ValueError(f"Unknown benefits: {', '.join(unknown)}")
        # Benefits are a set; keep first occurrence order.
        return list(dict.fromkeys(v))


class CompanyCard(BaseModel):
    name: str
    logo: str
    location: str | None = None
    about: str | None = None

    class Config:
        from_attributes = True


class JobSummary(BaseModel):
    id: str
    job_title: str
    employment_type: str
    location: str
    salary_from: int
    salary_to: int
    created_at: datetime | None = None
    company: CompanyCard

    class Config:
        from_attributes = True


class ListingPage(BaseModel):
    jobs: list[JobSummary]
    page: int
    total_pages: int


class JobDetail(BaseModel):
    id: str
    job_title: str
    job_description: str
    employment_type: str
    location: str
    salary_from: int
    salary_to: int
    benefits: list[str]
    listing_duration: int
    created_at: datetime | None = None
    company: CompanyCard
    saved_job_id: str | None = None


class OwnedJobRow(BaseModel):
    id: str
    job_title: str
    status: JobPostStatus
    created_at: datetime | None = None
    company_name: str
    company_logo: str


class OwnedJob(BaseModel):
    id: str
    job_title: str
    employment_type: str
    location: str
    salary_from: int
    salary_to: int
    job_description: str
    listing_duration: int
    benefits: list[str]
    status: JobPostStatus
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class SavedJobItem(BaseModel):
    id: str
    job: JobSummary


class SaveJobResponse(BaseModel):
    saved_job_id: str
    job_id: str
