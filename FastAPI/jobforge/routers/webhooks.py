import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from jobforge.database import get_db
from jobforge.services.job_lifecycle import activate_from_checkout
from jobforge.services.payments import CHECKOUT_COMPLETED, WebhookSignatureError, verify_webhook

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/webhook", tags=["webhooks"])


@router.post("/stripe")
async def stripe_webhook(request: Request, db: Session = Depends(get_db)):
    """
    Payment notifications. A completed checkout activates the job post named
    in its metadata, scoped to the company of the paying customer.
    """
    payload = await request.body()
    try:
        event = verify_webhook(payload, request.headers.get("stripe-signature"))
    except WebhookSignatureError as e:
        logger.warning("Stripe webhook rejected: %s", e)
        return PlainTextResponse("Webhook Error", status_code=400)

    event_type = event.get("type")
    if event_type == CHECKOUT_COMPLETED:
        session = (event.get("data") or {}).get("object") or {}
        result = await run_in_threadpool(activate_from_checkout, db, session)
        if not result.ok:
            logger.info("Checkout webhook not applied: event=%s reason=%s", event.get("id"), result.reason)
            return PlainTextResponse(result.reason, status_code=400)
    else:
        logger.debug("Ignoring Stripe event type=%s", event_type)

    return Response(status_code=200)
