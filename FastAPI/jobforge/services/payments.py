"""
Stripe integration: payment customers, checkout sessions for job listings,
and webhook signature verification.
"""
import json
import logging
from typing import Any

import stripe
from sqlalchemy.orm import Session

from jobforge.config import settings
from jobforge.core.pricing import PricingTier
from jobforge.models.user import User
from jobforge.repos.user_repo import set_stripe_customer_id

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class WebhookSignatureError(Exception):
    """Webhook payload could not be verified against the signing secret."""


def ensure_customer(db: Session, user: User) -> str:
    """Return the user's Stripe customer id, creating and storing it on first use."""
    if user.stripe_customer_id:
        return user.stripe_customer_id
    customer = stripe.Customer.create(
        email=user.email,
        name=user.name or None,
        api_key=settings.stripe_secret_key,
    )
    set_stripe_customer_id(db, user.id, customer.id)
    user.stripe_customer_id = customer.id
    logger.info("Created Stripe customer for user=%s", user.id)
    return customer.id


def build_checkout_params(customer_id: str, job_id: str, tier: PricingTier) -> dict[str, Any]:
    product_data: dict[str, Any] = {
        "name": f"Job Posting - {tier.days} Days",
        "description": tier.description,
    }
    if settings.checkout_product_image:
        product_data["images"] = [settings.checkout_product_image]
    base = settings.public_url.rstrip("/")
    return {
        "customer": customer_id,
        "line_items": [
            {
                "price_data": {
                    "product_data": product_data,
                    "currency": "usd",
                    "unit_amount": tier.price * 100,
                },
                "quantity": 1,
            }
        ],
        "mode": "payment",
        "metadata": {"jobId": job_id},
        "success_url": f"{base}/payment/success",
        "cancel_url": f"{base}/payment/cancel",
    }


def create_checkout_session(customer_id: str, job_id: str, tier: PricingTier) -> str:
    """Create a checkout session for a job listing and return its hosted payment URL."""
    session = stripe.checkout.Session.create(
        api_key=settings.stripe_secret_key,
        **build_checkout_params(customer_id, job_id, tier),
    )
    logger.info("Checkout session created: job=%s days=%d", job_id, tier.days)
    return session.url


def verify_webhook(payload: bytes, sig_header: str | None) -> dict[str, Any]:
    """Verify the Stripe-Signature header and return the decoded event."""
    if not sig_header:
        raise WebhookSignatureError("Missing Stripe-Signature header")
    try:
        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            body,
            sig_header,
            settings.stripe_webhook_secret,
            settings.stripe_webhook_tolerance_seconds,
        )
        event = json.loads(body)
    except (stripe.SignatureVerificationError, UnicodeDecodeError, ValueError) as e:
        raise WebhookSignatureError(str(e)) from e
    if not isinstance(event, dict):
        raise WebhookSignatureError("Event payload is not an object")
    return event
