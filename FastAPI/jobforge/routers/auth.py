import logging

from fastapi import APIRouter, Depends

from jobforge.core.context import RequestContext
from jobforge.dependencies import get_request_context
from jobforge.schemas.auth import MeResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _context_to_response(ctx: RequestContext) -> MeResponse:
    user = ctx.user
    return MeResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        onboarding_completed=bool(user.onboarding_completed),
        user_type=user.user_type.value if user.user_type else None,
        profile=ctx.profile.kind,
        has_payment_customer=bool(user.stripe_customer_id),
    )


@router.get("/me", response_model=MeResponse)
def get_me(ctx: RequestContext = Depends(get_request_context)):
    """The signed-in caller: identity, onboarding state and profile kind."""
    return _context_to_response(ctx)
