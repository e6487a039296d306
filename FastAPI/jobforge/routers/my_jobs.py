import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobforge.core.context import RequestContext
from jobforge.core.protection import protect_action
from jobforge.database import get_db
from jobforge.dependencies import get_request_context
from jobforge.repos.job_post_repo import get_for_owner, list_for_owner
from jobforge.schemas.job import JobPostForm, OwnedJob, OwnedJobRow
from jobforge.services.job_lifecycle import delete_job_post, edit_job_post

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/my-jobs", tags=["my-jobs"])


def _job_to_row(job) -> OwnedJobRow:
    return OwnedJobRow(
        id=job.id,
        job_title=job.job_title,
        status=job.status,
        created_at=job.created_at,
        company_name=job.company.name if job.company else "",
        company_logo=job.company.logo if job.company else "",
    )


@router.get("", response_model=list[OwnedJobRow])
def list_my_jobs(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """All job posts of the caller's company, any status, newest first."""
    return [_job_to_row(j) for j in list_for_owner(db, ctx.user_id)]


@router.get("/{job_id}", response_model=OwnedJob)
def get_my_job(
    job_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    job = get_for_owner(db, job_id, ctx.user_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job post not found")
    return OwnedJob.model_validate(job)


@router.put("/{job_id}")
def update_my_job(
    job_id: str,
    body: JobPostForm,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    """Replace the job post's fields. Status is unchanged."""
    if edit_job_post(db, ctx, job_id, body):
        return {"updated": True}
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job post not found")


@router.delete("/{job_id}")
def delete_my_job(
    job_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    """Delete the job post and cancel its scheduled expiration."""
    try:
        deleted = delete_job_post(db, ctx, job_id)
    except Exception as e:
        logger.exception("Job delete failed: job=%s user=%s: %s", job_id, ctx.user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not delete the job post. Please try again.",
        ) from e
    if deleted:
        return {"deleted": True}
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job post not found")
