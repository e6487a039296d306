import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobforge.core.context import RequestContext
from jobforge.core.protection import protect_action
from jobforge.database import get_db
from jobforge.dependencies import get_request_context
from jobforge.repos.saved_job_repo import list_for_user
from jobforge.schemas.job import JobSummary, SavedJobItem
from jobforge.services.favorites_service import unsave_job

logger = logging.getLogger(__name__)
router = APIRouter(tags=["favorites"])


@router.get("/favorites", response_model=list[SavedJobItem])
def list_favorites(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Jobs the caller saved, newest save first."""
    saved = list_for_user(db, ctx.user_id)
    return [
        SavedJobItem(id=s.id, job=JobSummary.model_validate(s.job_post))
        for s in saved
        if s.job_post
    ]


@router.delete("/saved-jobs/{saved_job_id}")
def delete_saved_job(
    saved_job_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    job_id = unsave_job(db, ctx.user_id, saved_job_id)
    if job_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved job not found")
    return {"deleted": True, "job_id": job_id}
