import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobforge.core.context import RequestContext
from jobforge.core.protection import protect_action, protect_job_view
from jobforge.database import get_db
from jobforge.dependencies import get_optional_context, get_request_context
from jobforge.repos.job_post_repo import get_by_id as get_job_post
from jobforge.schemas.job import JobDetail, JobPostForm, ListingPage, SaveJobResponse
from jobforge.services.favorites_service import save_job
from jobforge.services.job_lifecycle import create_job_post
from jobforge.services.listing_service import (
    fetch_listing_page,
    get_job_detail,
    parse_job_types,
    parse_page,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=ListingPage)
def list_jobs(
    page: str | None = None,
    job_types: str | None = Query(default=None, alias="jobTypes"),
    location: str = "",
    db: Session = Depends(get_db),
):
    """
    Public listing of ACTIVE job posts.
    page: 1-based; jobTypes: comma-separated employment types; location: exact match or "worldwide".
    """
    return fetch_listing_page(
        db,
        page=parse_page(page),
        job_types=parse_job_types(job_types),
        location=location or "",
    )


@router.post("")
def create_job(
    body: JobPostForm,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    """Create a DRAFT job post and redirect to checkout. Users without a company go home."""
    try:
        checkout_url = create_job_post(db, ctx, body)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Job creation failed for user=%s: %s", ctx.user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create the job post. Please try again.",
        ) from e
    if checkout_url is None:
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    return RedirectResponse(url=checkout_url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{job_id}", response_model=JobDetail)
def get_job(
    job_id: str,
    request: Request,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_optional_context),
):
    """ACTIVE job post detail, with the viewer's saved state when signed in."""
    protect_job_view(request, signed_in=ctx.is_authenticated)
    detail = get_job_detail(db, job_id, ctx.user_id)
    if not detail:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job post not found")
    return detail


@router.post("/{job_id}/save", response_model=SaveJobResponse)
def save_job_post(
    job_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    if not get_job_post(db, job_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job post not found")
    try:
        saved = save_job(db, ctx.user_id, job_id)
    except IntegrityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Job already saved") from e
    return SaveJobResponse(saved_job_id=saved.id, job_id=job_id)
