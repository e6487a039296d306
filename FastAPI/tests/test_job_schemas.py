import pytest
from pydantic import ValidationError

from conftest import job_form
from jobforge.core.pricing import JOB_LISTING_PRICING, get_tier
from jobforge.schemas.job import JobPostForm
from jobforge.schemas.onboarding import CompanyForm, JobSeekerForm


def test_job_post_form_accepts_valid_body():
    form = JobPostForm(**job_form())
    assert form.listing_duration == 30
    assert form.benefits == ["pto", "equity"]


def test_job_post_form_dedupes_benefits_in_order():
    form = JobPostForm(**job_form(benefits=["equity", "pto", "equity"]))
    assert form.benefits == ["equity", "pto"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"employment_type": "freelance"},
        {"listing_duration": 45},
        {"benefits": ["pto", "free_yacht"]},
        {"job_description": "plain text, not a document"},
        {"job_description": "[1, 2, 3]"},
        {"salary_from": 0},
        {"job_title": "x"},
        {"location": ""},
    ],
)
def test_job_post_form_rejects_invalid_fields(overrides):
    with pytest.raises(ValidationError):
        JobPostForm(**job_form(**overrides))


def test_job_post_form_does_not_order_salaries():
    form = JobPostForm(**job_form(salary_from=90000, salary_to=60000))
    assert form.salary_from > form.salary_to


def test_pricing_tiers():
    assert [t.days for t in JOB_LISTING_PRICING] == [30, 60, 90]
    assert get_tier(60).price == 179
    assert get_tier(7) is None


def test_company_form_normalizes_fields():
    form = CompanyForm(
        name="ACME",
        location="Berlin",
        about="We make everything you need.",
        logo="https://cdn.example.com/acme.png",
        website="https://acme.example.com",
        x_account="   ",
    )
    record = form.to_record()
    assert record["x_account"] is None
    assert isinstance(record["website"], str)
    assert record["website"].startswith("https://acme.example.com")


def test_company_form_rejects_bad_website_and_short_about():
    with pytest.raises(ValidationError):
        CompanyForm(name="ACME", location="Berlin", about="short", logo="l", website="not a url")


def test_job_seeker_form():
    record = JobSeekerForm(name="Ada", about="Engineer with ten years.", resume="https://cdn/r.pdf").to_record()
    assert record == {"name": "Ada", "about": "Engineer with ten years.", "resume": "https://cdn/r.pdf"}
    with pytest.raises(ValidationError):
        JobSeekerForm(name="Ada", about="Engineer with ten years.", resume="")
