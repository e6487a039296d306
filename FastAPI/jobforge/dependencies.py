import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from jobforge.core.context import LoginRequired, RequestContext, Unset, resolve_profile
from jobforge.core.security import decode_identity_token
from jobforge.database import get_db
from jobforge.repos.user_repo import get_or_create_from_identity

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_optional_context(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> RequestContext:
    """Resolve the caller's identity. Anonymous callers get an empty context."""
    if not credentials:
        return RequestContext(user=None, profile=Unset())
    claims = decode_identity_token(credentials.credentials)
    if not claims:
        logger.info("Session token rejected: invalid or expired")
        return RequestContext(user=None, profile=Unset())
    user, created = get_or_create_from_identity(db, claims)
    if created:
        logger.info("User created on first sign-in: %s", user.id)
    return RequestContext(user=user, profile=resolve_profile(user))


def get_request_context(
    ctx: RequestContext = Depends(get_optional_context),
) -> RequestContext:
    """Require a signed-in caller; anonymous callers are redirected to login."""
    if not ctx.is_authenticated:
        raise LoginRequired()
    return ctx
