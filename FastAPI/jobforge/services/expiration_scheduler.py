"""
Submits and cancels the delayed task that expires a job post.
Both calls are fire-and-forget: they publish to the broker and return.
"""
import logging

from jobforge.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)

EXPIRE_TASK = "jobforge.tasks.expiration_tasks.expire_job_post"
SECONDS_PER_DAY = 24 * 3600


def expiration_task_id(job_id: str) -> str:
    return f"expire-job-{job_id}"


def schedule_expiration(job_id: str, expiration_days: int) -> str:
    task_id = expiration_task_id(job_id)
    celery_app.send_task(
        EXPIRE_TASK,
        args=[job_id],
        kwargs={"expiration_days": expiration_days},
        countdown=expiration_days * SECONDS_PER_DAY,
        task_id=task_id,
    )
    logger.info("Scheduled expiration: job=%s days=%d task=%s", job_id, expiration_days, task_id)
    return task_id


def cancel_expiration(job_id: str) -> str:
    task_id = expiration_task_id(job_id)
    celery_app.control.revoke(task_id)
    logger.info("Cancelled expiration: job=%s task=%s", job_id, task_id)
    return task_id
