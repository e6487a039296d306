import logging

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import text

from jobforge.config import settings
from jobforge.core.context import LoginRequired
from jobforge.core.rate_limiter import rate_limiter
from jobforge.database import init_db, engine
from jobforge.logging_config import setup_logging
from jobforge.routers import auth, favorites, jobs, my_jobs, onboarding, uploads, webhooks

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"
ACTION_METHODS = {"POST", "PUT", "PATCH", "DELETE"}
WEBHOOK_PREFIX = "/api/webhook/"

app = FastAPI(
    title="Job Forge API",
    description="Job board: company job posts, paid listings, job seeker favorites.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(onboarding.router)
app.include_router(jobs.router)
app.include_router(my_jobs.router)
app.include_router(favorites.router)
app.include_router(uploads.router)
app.include_router(webhooks.router)


@app.exception_handler(LoginRequired)
async def login_required_handler(request, exc):
    logger.debug("Login required for %s %s", request.method, request.url.path)
    return RedirectResponse(url=settings.login_url, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method not in ACTION_METHODS or path.startswith(WEBHOOK_PREFIX):
        return await call_next(request)

    limit = settings.rate_limit_action_per_min
    if limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        key = f"action:{client_ip}"
        allowed, retry_after = rate_limiter.allow(key, limit=limit, window_seconds=60)
        if not allowed:
            logger.info("Action rate limit hit: ip=%s path=%s", client_ip, path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting Job Forge API")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
        if not settings.stripe_secret_key or not settings.stripe_webhook_secret:
            raise RuntimeError("STRIPE_SECRET_KEY and STRIPE_WEBHOOK_SECRET are required in production")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
        if not settings.stripe_webhook_secret:
            logger.warning("STRIPE_WEBHOOK_SECRET is not set; payment webhooks will be rejected.")
    init_db()


@app.get("/")
def root():
    return {"message": "Job Forge API. Browse active job posts at /jobs."}
