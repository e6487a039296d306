import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from jobforge.core.context import RequestContext
from jobforge.core.protection import protect_action
from jobforge.database import get_db
from jobforge.dependencies import get_request_context
from jobforge.repos.user_repo import complete_company_onboarding, complete_job_seeker_onboarding
from jobforge.schemas.onboarding import CompanyForm, JobSeekerForm, OnboardingState

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/onboarding", tags=["onboarding"])


def _user_type(ctx: RequestContext) -> str | None:
    return ctx.user.user_type.value if ctx.user.user_type else None


def _already_onboarded(ctx: RequestContext) -> bool:
    # A finished onboarding, or any existing profile, blocks a second profile.
    return bool(ctx.user.onboarding_completed) or ctx.profile.kind != "unset"


@router.get("")
def get_onboarding(ctx: RequestContext = Depends(get_request_context)):
    if ctx.user.onboarding_completed:
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    return OnboardingState(
        onboarding_completed=False,
        user_type=_user_type(ctx),
        profile=ctx.profile.kind,
    )


@router.post("/company")
def create_company(
    body: CompanyForm,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    """Create the caller's company profile and finish onboarding as a COMPANY user."""
    if _already_onboarded(ctx):
        logger.info("Company onboarding skipped, already onboarded: user=%s", ctx.user_id)
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    try:
        company = complete_company_onboarding(db, ctx.user, body.to_record())
    except Exception as e:
        logger.exception("Company onboarding failed for user=%s: %s", ctx.user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create the company profile. Please try again.",
        ) from e
    logger.info("Company onboarded: user=%s company=%s", ctx.user_id, company.id)
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/job-seeker")
def create_job_seeker(
    body: JobSeekerForm,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    """Create the caller's job seeker profile and finish onboarding as a JOB_SEEKER user."""
    if _already_onboarded(ctx):
        logger.info("Job seeker onboarding skipped, already onboarded: user=%s", ctx.user_id)
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    try:
        job_seeker = complete_job_seeker_onboarding(db, ctx.user, body.to_record())
    except Exception as e:
        logger.exception("Job seeker onboarding failed for user=%s: %s", ctx.user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create the job seeker profile. Please try again.",
        ) from e
    logger.info("Job seeker onboarded: user=%s job_seeker=%s", ctx.user_id, job_seeker.id)
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
