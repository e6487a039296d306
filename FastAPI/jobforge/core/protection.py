"""
Request protection for actions and job detail views.

Bot detection classifies the User-Agent header; rate limiting uses the
in-memory limiter. A denial is a plain 403 "Forbidden" with no retry hint.
"""
import logging
import re

from fastapi import HTTPException, Request, status

from jobforge.config import settings
from jobforge.core.rate_limiter import rate_limiter

logger = logging.getLogger(__name__)

SEARCH_ENGINE = "SEARCH_ENGINE"
PREVIEW = "PREVIEW"
AUTOMATED = "AUTOMATED"

_BOT_PATTERNS: list[tuple[str, re.Pattern]] = [
    (SEARCH_ENGINE, re.compile(r"googlebot|bingbot|duckduckbot|baiduspider|yandex(bot)?|applebot|slurp", re.I)),
    (PREVIEW, re.compile(r"facebookexternalhit|twitterbot|slackbot|linkedinbot|discordbot|whatsapp|telegrambot", re.I)),
    (AUTOMATED, re.compile(r"bot\b|crawler|spider|scrapy|curl/|wget/|python-requests|headlesschrome|phantomjs", re.I)),
]


def detect_bot(user_agent: str | None) -> str | None:
    """Return the bot category for a user agent, or None for a regular browser."""
    if not user_agent or not user_agent.strip():
        return AUTOMATED
    for category, pattern in _BOT_PATTERNS:
        if pattern.search(user_agent):
            return category
    return None


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def protect_action(request: Request) -> None:
    """Dependency for state-changing actions: no bots allowed."""
    category = detect_bot(request.headers.get("user-agent"))
    if category is not None:
        logger.info("Action denied: bot=%s path=%s ip=%s", category, request.url.path, client_key(request))
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def protect_job_view(request: Request, signed_in: bool) -> None:
    """Job detail views allow search engines and link previews, and rate limit by viewer kind."""
    category = detect_bot(request.headers.get("user-agent"))
    if category == AUTOMATED:
        logger.info("Job view denied: bot=%s path=%s", category, request.url.path)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    if signed_in:
        limit = settings.rate_limit_job_view_signed_in_per_min
    else:
        limit = settings.rate_limit_job_view_anonymous_per_min
    if limit <= 0:
        return
    key = f"view:{client_key(request)}:{'user' if signed_in else 'anon'}"
    allowed, retry_after = rate_limiter.allow(key, limit=limit)
    if allowed:
        return
    if settings.job_view_rate_limit_dry_run:
        logger.info("Job view over rate limit (dry run): key=%s", key)
        return
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Too many requests. Please retry shortly.",
        headers={"Retry-After": str(retry_after)},
    )
