import pytest
from fastapi.testclient import TestClient

from main import create_app
from shared.config.settings import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}",
        jwt_secret_key="test-secret",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        metrics_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def register(client, username, password="secret", role=None):
    body = {"username": username, "password": password}
    if role:
        body["role"] = role
    return client.post("/auth/register", json=body)


def login_headers(client, username, password="secret", role=None):
    register(client, username, password, role)
    resp = client.post("/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return login_headers(client, "admin", role="admin")


@pytest.fixture
def customer_headers(client):
    return login_headers(client, "alice")


@pytest.fixture
def make_product(client, admin_headers):
    def _make(name="Widget", price=10, **fields):
        body = {"name": name, "price": price, "description": f"A {name}", "category": "misc", **fields}
        resp = client.post("/products", json=body, headers=admin_headers)
        assert resp.status_code == 200, resp.text
        return resp.json()["id"]

    return _make
