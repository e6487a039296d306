import pytest
from fastapi.testclient import TestClient

import jobforge.main as main_mod


class _ConnOK:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, _query):
        return 1


class _EngineOK:
    def connect(self):
        return _ConnOK()


class _EngineFail:
    def connect(self):
        raise RuntimeError("db down")


def test_health_live(client):
    resp = client.get("/health/live")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_health_ready_ok(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineOK())
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"


def test_health_ready_not_ready(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineFail())
    resp = client.get("/health/ready")
    assert resp.status_code == 503
    assert resp.json()["status"] == "not_ready"


def test_root(anon_client):
    resp = anon_client.get("/")
    assert resp.status_code == 200
    assert "/jobs" in resp.json()["message"]


def test_login_redirect_uses_configured_url(monkeypatch, anon_client):
    monkeypatch.setattr(main_mod.settings, "login_url", "https://auth.example.com/sign-in")
    resp = anon_client.get("/favorites")
    assert resp.status_code == 303
    assert resp.headers["location"] == "https://auth.example.com/sign-in"


def test_unhandled_errors_are_sanitized(monkeypatch, client):
    import jobforge.routers.favorites as fav_mod

    def _boom(db, uid):
        raise RuntimeError("connection string with password")

    monkeypatch.setattr(fav_mod, "list_for_user", _boom)
    resp = TestClient(main_mod.app, raise_server_exceptions=False).get("/favorites")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}


def test_startup_rejects_placeholder_secret_in_production(monkeypatch):
    monkeypatch.setattr(main_mod.settings, "app_env", "production")
    monkeypatch.setattr(main_mod.settings, "secret_key", main_mod.PLACEHOLDER_SECRET)
    monkeypatch.setattr(main_mod, "init_db", lambda: None)
    with pytest.raises(RuntimeError):
        main_mod.on_startup()


def test_startup_requires_stripe_secrets_in_production(monkeypatch):
    monkeypatch.setattr(main_mod.settings, "app_env", "production")
    monkeypatch.setattr(main_mod.settings, "stripe_webhook_secret", "")
    monkeypatch.setattr(main_mod, "init_db", lambda: None)
    with pytest.raises(RuntimeError):
        main_mod.on_startup()


def test_startup_development_warns_and_initializes(monkeypatch):
    calls = []
    monkeypatch.setattr(main_mod.settings, "app_env", "development")
    monkeypatch.setattr(main_mod.settings, "secret_key", main_mod.PLACEHOLDER_SECRET)
    monkeypatch.setattr(main_mod.settings, "stripe_webhook_secret", "")
    monkeypatch.setattr(main_mod, "init_db", lambda: calls.append("init"))
    main_mod.on_startup()
    assert calls == ["init"]
