"""
Public job listing: filtered, paginated ACTIVE job posts, and the job detail view.
"""
import logging
import math
import sys
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from jobforge.config import settings
from jobforge.repos import job_post_repo, saved_job_repo
from jobforge.schemas.job import CompanyCard, JobDetail, JobSummary, ListingPage
from jobforge.services.view_cache import job_path, view_cache

logger = logging.getLogger(__name__)

PAGE_SIZE = 2
# Largest page whose offset still fits a signed 64-bit column.
MAX_PAGE = sys.maxsize // PAGE_SIZE


def parse_page(raw: str | None) -> int:
    """Page numbers are 1-based; anything missing or invalid means page 1."""
    try:
        page = int(raw) if raw is not None else 1
    except (TypeError, ValueError):
        return 1
    if page < 1:
        return 1
    return min(page, MAX_PAGE)


def parse_job_types(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def fetch_listing_page(
    db: Session,
    page: int = 1,
    job_types: list[str] | None = None,
    location: str = "",
    page_size: int = PAGE_SIZE,
) -> ListingPage:
    """
    One page of ACTIVE job posts matching the filters, newest first.
    total_pages counts every ACTIVE post unless listing_count_uses_filters is set,
    so it can overstate the page count of a filtered listing.
    """
    job_types = job_types or []
    offset = (page - 1) * page_size
    if settings.listing_count_uses_filters:
        total = job_post_repo.count_active(db, job_types=job_types, location=location)
    else:
        total = job_post_repo.count_active(db)
    # total never undercounts the filtered rows, so nothing lies past it.
    if offset >= total:
        jobs = []
    else:
        jobs = job_post_repo.list_active(
            db,
            job_types=job_types,
            location=location,
            offset=offset,
            limit=page_size,
        )
    total_pages = math.ceil(total / page_size) if page_size > 0 else 0
    logger.debug(
        "Listing page=%d types=%s location=%r -> %d rows, total_pages=%d",
        page, job_types, location, len(jobs), total_pages,
    )
    return ListingPage(
        jobs=[JobSummary.model_validate(j) for j in jobs],
        page=page,
        total_pages=total_pages,
    )


def listing_ended(detail: JobDetail, now: datetime | None = None) -> bool:
    created_at = detail.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return created_at + timedelta(days=detail.listing_duration) <= now


def get_job_detail(db: Session, job_id: str, user_id: str | None = None) -> JobDetail | None:
    """ACTIVE job post with the viewer's saved state, or None."""
    path = job_path(job_id)
    viewer = user_id or "anonymous"
    cached = view_cache.get(path, viewer)
    if cached is not None:
        if not listing_ended(cached):
            return cached
        # Expired in the worker; this process still holds the ACTIVE view.
        view_cache.revalidate_path(path)

    job = job_post_repo.get_active(db, job_id)
    if not job:
        return None
    saved = saved_job_repo.get_for_user_and_job(db, user_id, job_id) if user_id else None

    detail = JobDetail(
        id=job.id,
        job_title=job.job_title,
        job_description=job.job_description,
        employment_type=job.employment_type,
        location=job.location,
        salary_from=job.salary_from,
        salary_to=job.salary_to,
        benefits=list(job.benefits or []),
        listing_duration=job.listing_duration,
        created_at=job.created_at,
        company=CompanyCard.model_validate(job.company),
        saved_job_id=saved.id if saved else None,
    )
    view_cache.set(path, viewer, detail)
    return detail
