"""
Job post lifecycle: DRAFT on creation (pending payment), ACTIVE once the
checkout completes, EXPIRE when the scheduled task fires. Owners may edit or
delete their posts; ownership is part of the mutating statement, so a post
that is missing and a post owned by someone else look the same.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from jobforge.core.context import RequestContext
from jobforge.core.pricing import get_tier
from jobforge.repos import company_repo, job_post_repo
from jobforge.schemas.job import JobPostForm
from jobforge.services import payments
from jobforge.services.expiration_scheduler import cancel_expiration, schedule_expiration
from jobforge.services.view_cache import revalidate_job

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivationResult:
    ok: bool
    reason: str = ""


def create_job_post(db: Session, ctx: RequestContext, form: JobPostForm) -> str | None:
    """
    Create a DRAFT job post, schedule its expiration and open a checkout session.
    Returns the checkout URL, or None when the caller has no company profile.
    """
    company = ctx.company or company_repo.get_by_user_id(db, ctx.user.id)
    if not company:
        logger.info("Job creation rejected, no company profile: user=%s", ctx.user.id)
        return None

    tier = get_tier(form.listing_duration)
    if tier is None:
        raise ValueError("Invalid listing duration selected")

    customer_id = payments.ensure_customer(db, ctx.user)
    job = job_post_repo.create(db, company.id, form.model_dump())
    logger.info("Job post created: job=%s company=%s days=%d", job.id, company.id, form.listing_duration)

    schedule_expiration(job.id, form.listing_duration)
    return payments.create_checkout_session(customer_id, job.id, tier)


def edit_job_post(db: Session, ctx: RequestContext, job_id: str, form: JobPostForm) -> bool:
    """Replace an owned job post's fields. False when nothing matched."""
    count = job_post_repo.update_for_owner(db, job_id, ctx.user.id, form.model_dump())
    if not count:
        logger.info("Job edit matched no rows: job=%s user=%s", job_id, ctx.user.id)
        return False
    revalidate_job(job_id)
    logger.info("Job post edited: job=%s user=%s", job_id, ctx.user.id)
    return True


def delete_job_post(db: Session, ctx: RequestContext, job_id: str) -> bool:
    """Delete an owned job post and cancel its scheduled expiration. False when nothing matched."""
    count = job_post_repo.delete_for_owner(db, job_id, ctx.user.id)
    if not count:
        logger.info("Job delete matched no rows: job=%s user=%s", job_id, ctx.user.id)
        return False
    cancel_expiration(job_id)
    revalidate_job(job_id)
    logger.info("Job post deleted: job=%s user=%s", job_id, ctx.user.id)
    return True


def activate_from_checkout(db: Session, session: dict) -> ActivationResult:
    """Activate the job post referenced by a completed checkout session."""
    job_id = (session.get("metadata") or {}).get("jobId")
    if not job_id:
        return ActivationResult(False, "no job id found")

    customer_id = session.get("customer")
    company = company_repo.get_by_stripe_customer(db, customer_id) if customer_id else None
    if not company:
        return ActivationResult(False, "no company found for the user")

    count = job_post_repo.activate_for_company(db, job_id, company.id)
    if not count:
        return ActivationResult(False, "no job found for the company")
    revalidate_job(job_id)
    logger.info("Job post activated: job=%s company=%s", job_id, company.id)
    return ActivationResult(True)
