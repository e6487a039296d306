import hashlib
import hmac
import os
import time

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobforge.core.context import CompanyProfile, RequestContext, Unset
from jobforge.core.rate_limiter import rate_limiter
from jobforge.core.security import create_identity_token
from jobforge.database import Base, get_db
from jobforge.dependencies import get_optional_context, get_request_context
from jobforge.main import app
from jobforge.models import Company, JobPost, JobPostStatus, User
from jobforge.services.view_cache import view_cache

RICH_TEXT = '{"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Build things."}]}]}'
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "user@example.com"
    name: str | None = "Test User"
    onboarding_completed: bool = False
    user_type: object | None = None
    stripe_customer_id: str | None = None


@dataclass
class StubCompany:
    id: str = "company-1"
    user_id: str = "user-1"
    name: str = "ACME"
    logo: str = "https://cdn.example.com/acme.png"


@pytest.fixture(autouse=True)
def _reset_process_state():
    rate_limiter.reset()
    view_cache.clear()
    yield
    rate_limiter.reset()
    view_cache.clear()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def stub_context(stub_user: StubUser) -> RequestContext:
    return RequestContext(user=stub_user, profile=Unset())


@pytest.fixture
def company_context() -> RequestContext:
    user = StubUser(onboarding_completed=True)
    return RequestContext(user=user, profile=CompanyProfile(company=StubCompany()))


def _override_db():
    yield object()


@pytest.fixture
def client(stub_context: RequestContext):
    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_optional_context] = lambda: stub_context
    app.dependency_overrides[get_request_context] = lambda: stub_context
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


@pytest.fixture
def company_client(company_context: RequestContext):
    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_optional_context] = lambda: company_context
    app.dependency_overrides[get_request_context] = lambda: company_context
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    app.dependency_overrides[get_db] = _override_db
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_client(db_session):
    """Client against a real SQLite schema; identity comes from bearer tokens."""

    def _db():
        yield db_session

    app.dependency_overrides[get_db] = _db
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


def auth_headers(user_id: str, email: str | None = None, name: str | None = None) -> dict:
    token = create_identity_token(user_id, email or f"{user_id}@example.com", name)
    return {"Authorization": f"Bearer {token}"}


def make_user(db, user_id: str, **kwargs) -> User:
    user = User(id=user_id, email=kwargs.pop("email", f"{user_id}@example.com"), **kwargs)
    db.add(user)
    db.commit()
    return user


def make_company(db, user_id: str, company_id: str | None = None, **kwargs) -> Company:
    if db.get(User, user_id) is None:
        make_user(db, user_id, onboarding_completed=True)
    values = {
        "name": "ACME",
        "location": "Berlin",
        "about": "We make everything.",
        "logo": "https://cdn.example.com/acme.png",
        "website": "https://acme.example.com",
    }
    values.update(kwargs)
    company = Company(id=company_id or f"co-{user_id}", user_id=user_id, **values)
    db.add(company)
    db.commit()
    return company


def make_job(db, company_id: str, job_id: str, minutes: int = 0, **kwargs) -> JobPost:
    values = {
        "job_title": "Backend Engineer",
        "employment_type": "full-time",
        "location": "Berlin",
        "salary_from": 50000,
        "salary_to": 80000,
        "job_description": RICH_TEXT,
        "listing_duration": 30,
        "benefits": ["pto"],
        "status": JobPostStatus.ACTIVE,
        "created_at": BASE_TIME + timedelta(minutes=minutes),
    }
    values.update(kwargs)
    job = JobPost(id=job_id, company_id=company_id, **values)
    db.add(job)
    db.commit()
    return job


def job_form(**overrides) -> dict:
    body = {
        "job_title": "Backend Engineer",
        "employment_type": "full-time",
        "location": "Berlin",
        "salary_from": 50000,
        "salary_to": 80000,
        "job_description": RICH_TEXT,
        "listing_duration": 30,
        "benefits": ["pto", "equity"],
    }
    body.update(overrides)
    return body


def sign_payload(payload: str, secret: str, timestamp: int | None = None) -> str:
    """Stripe-Signature header value for a payload, as Stripe computes it."""
    ts = int(time.time()) if timestamp is None else timestamp
    digest = hmac.new(secret.encode("utf-8"), f"{ts}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"
