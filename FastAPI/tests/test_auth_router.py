from conftest import auth_headers, make_company


def test_me_returns_stub_context(client):
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == "user-1"
    assert data["profile"] == "unset"
    assert data["onboarding_completed"] is False
    assert data["has_payment_customer"] is False


def test_me_requires_sign_in(anon_client):
    resp = anon_client.get("/auth/me")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"


def test_me_with_invalid_token_is_anonymous(db_client):
    resp = db_client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 303


def test_first_sign_in_creates_user_then_reuses_it(db_client, db_session):
    headers = auth_headers("idp-42", "ada@example.com", "Ada")
    first = db_client.get("/auth/me", headers=headers)
    second = db_client.get("/auth/me", headers=headers)
    assert first.status_code == second.status_code == 200
    assert first.json()["id"] == "idp-42"
    assert first.json()["name"] == "Ada"
    assert first.json()["user_type"] is None


def test_me_reports_company_profile(db_client, db_session):
    make_company(db_session, "owner")
    data = db_client.get("/auth/me", headers=auth_headers("owner")).json()
    assert data["profile"] == "company"
    assert data["onboarding_completed"] is True
