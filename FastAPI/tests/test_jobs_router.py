from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

import jobforge.routers.jobs as jobs_mod
from conftest import job_form
from jobforge.schemas.job import CompanyCard, JobDetail, ListingPage


def _detail(job_id="j1", saved_job_id=None):
    return JobDetail(
        id=job_id,
        job_title="Backend Engineer",
        job_description='{"type": "doc"}',
        employment_type="full-time",
        location="Berlin",
        salary_from=1,
        salary_to=2,
        benefits=["pto"],
        listing_duration=30,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        company=CompanyCard(name="ACME", logo="l"),
        saved_job_id=saved_job_id,
    )


def test_list_jobs_parses_query(monkeypatch, anon_client):
    seen = {}

    def _fetch(db, page, job_types, location):
        seen.update(page=page, job_types=job_types, location=location)
        return ListingPage(jobs=[], page=page, total_pages=0)

    monkeypatch.setattr(jobs_mod, "fetch_listing_page", _fetch)
    resp = anon_client.get("/jobs", params={"page": "2", "jobTypes": "full-time,contract", "location": "Paris"})
    assert resp.status_code == 200
    assert resp.json() == {"jobs": [], "page": 2, "total_pages": 0}
    assert seen == {"page": 2, "job_types": ["full-time", "contract"], "location": "Paris"}


def test_list_jobs_defaults_for_bad_page(monkeypatch, anon_client):
    monkeypatch.setattr(jobs_mod, "fetch_listing_page", lambda db, page, job_types, location: ListingPage(jobs=[], page=page, total_pages=0))
    resp = anon_client.get("/jobs", params={"page": "zero"})
    assert resp.status_code == 200
    assert resp.json()["page"] == 1


def test_create_job_redirects_to_checkout(monkeypatch, company_client):
    monkeypatch.setattr(jobs_mod, "create_job_post", lambda db, ctx, form: "https://checkout.stripe.test/s1")
    resp = company_client.post("/jobs", json=job_form())
    assert resp.status_code == 303
    assert resp.headers["location"] == "https://checkout.stripe.test/s1"


def test_create_job_without_company_goes_home(monkeypatch, client):
    monkeypatch.setattr(jobs_mod, "create_job_post", lambda db, ctx, form: None)
    resp = client.post("/jobs", json=job_form())
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"


def test_create_job_validation_error(client):
    resp = client.post("/jobs", json=job_form(listing_duration=7))
    assert resp.status_code == 422


def test_create_job_failure_is_sanitized(monkeypatch, company_client):
    def _boom(db, ctx, form):
        raise RuntimeError("stripe api key invalid: sk_live_...")

    monkeypatch.setattr(jobs_mod, "create_job_post", _boom)
    resp = company_client.post("/jobs", json=job_form())
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Could not create the job post. Please try again."


def test_create_job_requires_sign_in(anon_client):
    resp = anon_client.post("/jobs", json=job_form())
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"


def test_create_job_rejects_bots(company_client):
    resp = company_client.post("/jobs", json=job_form(), headers={"User-Agent": "curl/8.0"})
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Forbidden"


def test_get_job_detail_and_not_found(monkeypatch, client):
    monkeypatch.setattr(jobs_mod, "get_job_detail", lambda db, job_id, user_id: _detail(job_id, "s1") if job_id == "j1" else None)
    ok = client.get("/jobs/j1")
    assert ok.status_code == 200
    assert ok.json()["saved_job_id"] == "s1"
    assert ok.json()["company"]["name"] == "ACME"

    missing = client.get("/jobs/nope")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Job post not found"


def test_get_job_detail_anonymous_viewer(monkeypatch, anon_client):
    seen = {}

    def _get(db, job_id, user_id):
        seen["user_id"] = user_id
        return _detail(job_id)

    monkeypatch.setattr(jobs_mod, "get_job_detail", _get)
    assert anon_client.get("/jobs/j1").status_code == 200
    assert seen["user_id"] is None


def test_get_job_detail_blocks_scrapers(monkeypatch, anon_client):
    monkeypatch.setattr(jobs_mod, "get_job_detail", lambda db, job_id, user_id: _detail(job_id))
    assert anon_client.get("/jobs/j1", headers={"User-Agent": "python-requests/2.31"}).status_code == 403
    assert anon_client.get("/jobs/j1", headers={"User-Agent": "Googlebot/2.1"}).status_code == 200


def test_save_job_paths(monkeypatch, client):
    monkeypatch.setattr(jobs_mod, "get_job_post", lambda db, job_id: None)
    assert client.post("/jobs/j1/save").status_code == 404

    monkeypatch.setattr(jobs_mod, "get_job_post", lambda db, job_id: object())
    monkeypatch.setattr(jobs_mod, "save_job", lambda db, uid, job_id: type("S", (), {"id": "s1"})())
    ok = client.post("/jobs/j1/save")
    assert ok.status_code == 200
    assert ok.json() == {"saved_job_id": "s1", "job_id": "j1"}

    def _dup(db, uid, job_id):
        raise IntegrityError("INSERT", {}, Exception("unique"))

    monkeypatch.setattr(jobs_mod, "save_job", _dup)
    dup = client.post("/jobs/j1/save")
    assert dup.status_code == 409
    assert dup.json()["detail"] == "Job already saved"


def test_list_jobs_far_page_is_empty(db_client):
    resp = db_client.get("/jobs", params={"page": str(10**19)})
    assert resp.status_code == 200
    assert resp.json()["jobs"] == []
