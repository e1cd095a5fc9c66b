from datetime import timedelta

from shared.security.jwt_handler import create_access_token, verify_access_token
from tests.conftest import login_headers, register


def test_register_then_login_token_carries_user_id_and_role(client, settings):
    assert register(client, "bob", "pw1", role="admin").json() == {"msg": "User registered"}

    resp = client.post("/auth/login", json={"username": "bob", "password": "pw1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "admin"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"}).json()
    claims = verify_access_token(body["token"], settings)
    assert claims["sub"] == str(me["id"])
    assert claims["role"] == me["role"] == "admin"


def test_register_defaults_to_customer(client):
    headers = login_headers(client, "carol")
    assert client.get("/auth/me", headers=headers).json()["role"] == "customer"


def test_register_rejects_duplicate_username(client):
    assert register(client, "dave").status_code == 200

    resp = register(client, "dave", "other")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "User exists", "error": "Conflict"}


def test_register_rejects_missing_fields_and_unknown_role(client):
    assert client.post("/auth/register", json={"username": "erin"}).status_code == 400
    assert client.post("/auth/register", json={"username": " ", "password": "x"}).status_code == 400
    assert register(client, "erin", role="superuser").status_code == 400


def test_login_with_bad_credentials(client):
    register(client, "frank", "right")

    wrong = client.post("/auth/login", json={"username": "frank", "password": "wrong"})
    unknown = client.post("/auth/login", json={"username": "nobody", "password": "right"})

    for resp in (wrong, unknown):
        assert resp.status_code == 400
        assert resp.json()["msg"] == "Invalid credentials"


def test_protected_route_requires_valid_token(client, settings):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401

    expired = create_access_token({"sub": "1", "role": "customer"}, settings, expires_delta=timedelta(seconds=-5))
    resp = client.get("/cart", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_token_signed_with_other_secret_is_rejected(client, settings):
    forged_settings = settings.__class__(database_url=settings.database_url, jwt_secret_key="other")
    forged = create_access_token({"sub": "1", "role": "admin"}, forged_settings)

    resp = client.get("/cart", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401
