"""Job post expiration, fired after the listing duration has elapsed."""

import logging

from jobforge.database import SessionLocal
from jobforge.repos.job_post_repo import mark_expired
from jobforge.services.view_cache import revalidate_job
from jobforge.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(name="jobforge.tasks.expiration_tasks.expire_job_post")
def expire_job_post(job_id: str, expiration_days: int | None = None):
    """Set a job post to EXPIRE. A deleted post is a no-op."""
    db = SessionLocal()
    try:
        count = mark_expired(db, job_id)
        if count:
            revalidate_job(job_id)
            logger.info("Job post expired: job=%s after %s days", job_id, expiration_days)
        else:
            logger.info("Expiration skipped, job post gone: job=%s", job_id)
        return {"expired": count}
    finally:
        db.close()
