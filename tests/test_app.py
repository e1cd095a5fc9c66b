import pytest
from fastapi.testclient import TestClient

from main import create_app
from shared.config.settings import Settings
from tests.conftest import register


def test_health(client):
    assert client.get("/health").json() == {"service": "storefront", "status": "running"}


def test_settings_require_database_url_and_secret(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("JWT_SECRET_KEY", "s")
    with pytest.raises(ValueError, match="DATABASE_URL"):
        Settings.from_env()

    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///x.db")
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        Settings.from_env()


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///x.db")
    monkeypatch.setenv("JWT_SECRET_KEY", "s")
    for name in ("PORT", "ACCESS_TOKEN_EXPIRE_MINUTES", "RATE_LIMIT_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.port == 5000
    assert settings.access_token_expire_minutes == 24 * 60
    assert settings.rate_limit_enabled is True


def login_statuses(app, attempts=3):
    with TestClient(app) as client:
        register(client, "zoe")
        body = {"username": "zoe", "password": "secret"}
        return [client.post("/auth/login", json=body).status_code for _ in range(attempts)]


def test_login_is_rate_limited(settings):
    limited = Settings(**{**settings.__dict__, "rate_limit_enabled": True, "auth_rate_limit": "2/minute"})

    assert login_statuses(create_app(limited)) == [200, 200, 429]


def test_rate_limit_settings_are_per_app(settings, tmp_path):
    limited = Settings(**{**settings.__dict__, "rate_limit_enabled": True, "auth_rate_limit": "2/minute"})
    unlimited = Settings(
        **{**settings.__dict__, "database_url": f"sqlite+aiosqlite:///{tmp_path / 'other.db'}"}
    )

    limited_app = create_app(limited)
    unlimited_app = create_app(unlimited)

    assert limited_app.state.limiter is not unlimited_app.state.limiter
    assert login_statuses(limited_app) == [200, 200, 429]
    assert login_statuses(unlimited_app) == [200, 200, 200]
