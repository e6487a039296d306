import logging

from sqlalchemy.orm import Session

from jobforge.models.saved_job_post import SavedJobPost
from jobforge.repos import saved_job_repo
from jobforge.services.view_cache import revalidate_job

logger = logging.getLogger(__name__)


def save_job(db: Session, user_id: str, job_post_id: str) -> SavedJobPost:
    """Save a job for the user. Saving the same job twice raises IntegrityError."""
    saved = saved_job_repo.create(db, user_id, job_post_id)
    revalidate_job(job_post_id)
    logger.info("Job saved: user=%s job=%s", user_id, job_post_id)
    return saved


def unsave_job(db: Session, user_id: str, saved_job_post_id: str) -> str | None:
    """Remove one of the user's saved records. Returns the job id, or None if not found."""
    job_post_id = saved_job_repo.delete_for_user(db, saved_job_post_id, user_id)
    if job_post_id is None:
        return None
    revalidate_job(job_post_id)
    logger.info("Job unsaved: user=%s job=%s", user_id, job_post_id)
    return job_post_id
