from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import JWTError, jwt

from jobforge.config import settings


@dataclass(frozen=True)
class IdentityClaims:
    """Identity asserted by the external sign-in provider."""

    subject: str
    email: str
    name: str | None = None


def create_identity_token(subject: str, email: str, name: str | None = None) -> str:
    """Issue a session token the way the identity provider does (dev scripts and tests)."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": subject, "email": email, "exp": expire}
    if name:
        to_encode["name"] = name
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_identity_token(token: str) -> IdentityClaims | None:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    email = payload.get("email")
    if not subject or not email:
        return None
    return IdentityClaims(subject=subject, email=email, name=payload.get("name"))


def generate_id() -> str:
    return str(uuid4())
