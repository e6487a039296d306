from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    # Shared with the identity provider; session tokens are signed with it.
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days
    app_env: str = "development"  # development, staging, production

    # Where unauthenticated users are sent
    login_url: str = "/login"
    # Public base URL of the front end (payment success/cancel pages)
    public_url: str = "http://localhost:3000"

    # CORS origins as comma-separated values
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_webhook_tolerance_seconds: int = 300
    checkout_product_image: str = ""

    # Celery broker for scheduled job expiration
    redis_url: str = "redis://localhost:6379/0"
    # Revoked task ids persist here across worker restarts
    celery_worker_state_db: str = "/tmp/jobforge-celery-state"

    # S3 uploads for company logos and resumes
    aws_region: str = "us-east-1"
    upload_bucket: str = "jobforge-uploads"
    upload_url_expire_seconds: int = 600
    max_logo_upload_mb: int = 4
    max_resume_upload_mb: int = 8

    # Request guards
    rate_limit_action_per_min: int = 30
    rate_limit_job_view_signed_in_per_min: int = 30
    rate_limit_job_view_anonymous_per_min: int = 10
    job_view_rate_limit_dry_run: bool = True

    # Job detail view cache, seconds (0 disables)
    job_view_cache_seconds: int = 60
    job_view_cache_max_entries: int = 10000

    # Historical listing behavior counts all active jobs for total_pages.
    listing_count_uses_filters: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
