"""Celery application for delayed job-post expiration."""

from celery import Celery

from jobforge.config import settings
from jobforge.core.pricing import JOB_LISTING_PRICING

# Redis redelivers unacked messages after this; expirations wait out the longest listing.
VISIBILITY_TIMEOUT_SECONDS = (max(t.days for t in JOB_LISTING_PRICING) + 1) * 24 * 3600

celery_app = Celery(
    "jobforge",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "jobforge.tasks.expiration_tasks",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    task_track_started=True,
    task_time_limit=120,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    broker_transport_options={"visibility_timeout": VISIBILITY_TIMEOUT_SECONDS},
    # Revoked ids must survive worker restarts for long countdowns.
    worker_state_db=settings.celery_worker_state_db,
)
