from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobforge.core.security import generate_id
from jobforge.models.job_post import JobPost
from jobforge.models.saved_job_post import SavedJobPost


def get_for_user_and_job(db: Session, user_id: str, job_post_id: str) -> SavedJobPost | None:
    return (
        db.query(SavedJobPost)
        .filter(
            SavedJobPost.user_id == user_id,
            SavedJobPost.job_post_id == job_post_id,
        )
        .first()
    )


def create(db: Session, user_id: str, job_post_id: str) -> SavedJobPost:
    """Insert a saved record. A duplicate (user, job) pair raises IntegrityError."""
    saved = SavedJobPost(
        id=generate_id(),
        user_id=user_id,
        job_post_id=job_post_id,
    )
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(saved)
    return saved


def delete_for_user(db: Session, saved_job_post_id: str, user_id: str) -> str | None:
    """Delete the user's saved record. Returns the job post id it pointed at, or None."""
    saved = (
        db.query(SavedJobPost)
        .filter(
            SavedJobPost.id == saved_job_post_id,
            SavedJobPost.user_id == user_id,
        )
        .first()
    )
    if not saved:
        return None
    job_post_id = saved.job_post_id
    db.delete(saved)
    db.commit()
    return job_post_id


def list_for_user(db: Session, user_id: str) -> list[SavedJobPost]:
    return (
        db.query(SavedJobPost)
        .options(joinedload(SavedJobPost.job_post).joinedload(JobPost.company))
        .filter(SavedJobPost.user_id == user_id)
        .order_by(SavedJobPost.created_at.desc(), SavedJobPost.id.desc())
        .all()
    )
