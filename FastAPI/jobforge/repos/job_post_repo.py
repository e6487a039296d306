import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from jobforge.core.constants import WORLDWIDE
from jobforge.core.security import generate_id
from jobforge.models.company import Company
from jobforge.models.job_post import JobPost, JobPostStatus

logger = logging.getLogger(__name__)

# Fields an owner may replace on edit; status is never among them.
EDITABLE_FIELDS = (
    "job_title",
    "employment_type",
    "location",
    "salary_from",
    "salary_to",
    "job_description",
    "listing_duration",
    "benefits",
)


def _owned_by(user_id: str):
    """Filter clause: job belongs to the company owned by user_id."""
    return JobPost.company_id.in_(select(Company.id).where(Company.user_id == user_id))


def _listing_filters(job_types: list[str] | None, location: str | None) -> list:
    filters = [JobPost.status == JobPostStatus.ACTIVE]
    if job_types:
        filters.append(JobPost.employment_type.in_(job_types))
    if location and location != WORLDWIDE:
        filters.append(JobPost.location == location)
    return filters


def create(db: Session, company_id: str, data: dict) -> JobPost:
    job = JobPost(
        id=generate_id(),
        company_id=company_id,
        status=JobPostStatus.DRAFT,
        **{k: data[k] for k in EDITABLE_FIELDS},
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def list_active(
    db: Session,
    *,
    job_types: list[str] | None = None,
    location: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> list[JobPost]:
    """ACTIVE job posts matching the filters, newest first, with their company loaded."""
    return (
        db.query(JobPost)
        .options(joinedload(JobPost.company))
        .filter(*_listing_filters(job_types, location))
        .order_by(JobPost.created_at.desc(), JobPost.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_active(
    db: Session,
    *,
    job_types: list[str] | None = None,
    location: str | None = None,
) -> int:
    return db.query(JobPost).filter(*_listing_filters(job_types, location)).count()


def get_active(db: Session, job_id: str) -> JobPost | None:
    return (
        db.query(JobPost)
        .options(joinedload(JobPost.company))
        .filter(JobPost.id == job_id, JobPost.status == JobPostStatus.ACTIVE)
        .first()
    )


def get_by_id(db: Session, job_id: str) -> JobPost | None:
    return db.query(JobPost).filter(JobPost.id == job_id).first()


def list_for_owner(db: Session, user_id: str) -> list[JobPost]:
    return (
        db.query(JobPost)
        .options(joinedload(JobPost.company))
        .filter(_owned_by(user_id))
        .order_by(JobPost.created_at.desc(), JobPost.id.desc())
        .all()
    )


def get_for_owner(db: Session, job_id: str, user_id: str) -> JobPost | None:
    return (
        db.query(JobPost)
        .options(joinedload(JobPost.company))
        .filter(JobPost.id == job_id, _owned_by(user_id))
        .first()
    )


def update_for_owner(db: Session, job_id: str, user_id: str, data: dict) -> int:
    """
    Replace the editable fields of an owned job post in one statement.
    Returns matched row count; 0 means missing or not owned.
    """
    values = {getattr(JobPost, k): data[k] for k in EDITABLE_FIELDS}
    count = (
        db.query(JobPost)
        .filter(JobPost.id == job_id, _owned_by(user_id))
        .update(values, synchronize_session=False)
    )
    db.commit()
    return count


def delete_for_owner(db: Session, job_id: str, user_id: str) -> int:
    """Delete an owned job post. Returns deleted row count; 0 means missing or not owned."""
    count = (
        db.query(JobPost)
        .filter(JobPost.id == job_id, _owned_by(user_id))
        .delete(synchronize_session=False)
    )
    db.commit()
    return count


def activate_for_company(db: Session, job_id: str, company_id: str) -> int:
    count = (
        db.query(JobPost)
        .filter(JobPost.id == job_id, JobPost.company_id == company_id)
        .update({JobPost.status: JobPostStatus.ACTIVE}, synchronize_session=False)
    )
    db.commit()
    return count


def mark_expired(db: Session, job_id: str) -> int:
    count = (
        db.query(JobPost)
        .filter(JobPost.id == job_id)
        .update({JobPost.status: JobPostStatus.EXPIRE}, synchronize_session=False)
    )
    db.commit()
    return count


def expire_overdue(db: Session, now: datetime | None = None) -> int:
    """
    Mark ACTIVE posts whose listing window has passed as EXPIRE.
    Returns count expired.
    """
    now = now or datetime.now(timezone.utc)
    active = db.query(JobPost).filter(JobPost.status == JobPostStatus.ACTIVE).all()
    count = 0
    for job in active:
        if not job.created_at:
            continue
        created_at = job.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        if created_at + timedelta(days=job.listing_duration) <= now:
            job.status = JobPostStatus.EXPIRE
            count += 1
    if count > 0:
        db.commit()
        logger.info("Expired %d overdue job posts", count)
    return count
