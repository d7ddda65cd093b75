from datetime import datetime, timedelta, timezone

import jwt

from confmaster.core.config import settings
from tests.factories import PASSWORD, auth_header, make_admin, make_user


def test_register_returns_token_and_plain_user(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "Nina@Uni.org", "password": "hunter22", "name": "Nina"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["role"] == "user"
    assert body["user"]["email"] == "nina@uni.org"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Nina"


def test_register_duplicate_email_conflicts(client):
    payload = {"email": "nina@uni.org", "password": "hunter22", "name": "Nina"}
    assert client.post("/api/auth/register", json=payload).status_code == 200

    resp = client.post("/api/auth/register", json={**payload, "email": "NINA@uni.org"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "conflict"


def test_register_rejects_malformed_payload(client):
    resp = client.post("/api/auth/register", json={"email": "not-an-email", "password": "hunter22", "name": "N"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "validation"


def test_login(client, db):
    make_user(db, email="alice@uni.org", name="Alice")

    ok = client.post("/api/auth/login", json={"email": "alice@uni.org", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["user"]["name"] == "Alice"

    bad = client.post("/api/auth/login", json={"email": "alice@uni.org", "password": "wrong-password"})
    assert bad.status_code == 401
    assert bad.json()["error"]["code"] == "unauthorized"

    unknown = client.post("/api/auth/login", json={"email": "ghost@uni.org", "password": PASSWORD})
    assert unknown.status_code == 401


def test_token_carries_identity_claims(client, db):
    make_admin(db)
    token = client.post("/api/auth/login", json={"email": "admin@confmaster.org", "password": PASSWORD}).json()["token"]

    claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert claims["role"] == "admin"
    assert claims["name"] == "Ada Admin"
    assert claims["email"] == "admin@confmaster.org"


def test_missing_bearer_is_unauthorized(client):
    resp = client.get("/api/submissions")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "unauthorized"


def test_garbage_and_expired_tokens_are_unauthorized(client, db):
    user = make_user(db, email="alice@uni.org", name="Alice")
    assert client.get("/api/documents", headers={"Authorization": "Bearer not.a.jwt"}).status_code == 401

    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    expired = jwt.encode(
        {"sub": str(user.id), "role": "user", "exp": int(past.timestamp())},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    resp = client.get("/api/documents", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "token expired"

    forged = jwt.encode({"sub": str(user.id), "role": "admin", "exp": int(past.timestamp()) + 3600}, "an-entirely-different-signing-key-value")
    assert client.get("/api/documents", headers={"Authorization": f"Bearer {forged}"}).status_code == 401


def test_me_for_deleted_account(client, db):
    user = make_user(db, email="alice@uni.org", name="Alice")
    headers = auth_header(user)
    db.delete(user)
    db.commit()

    assert client.get("/api/auth/me", headers=headers).status_code == 401


def test_register_measures_password_in_bytes(client):
    too_long = client.post(
        "/api/auth/register",
        json={"email": "ivan@uni.org", "password": "п" * 40, "name": "Ivan"},
    )
    assert too_long.status_code == 422
    assert too_long.json()["error"]["code"] == "validation"

    fits = client.post(
        "/api/auth/register",
        json={"email": "ivan@uni.org", "password": "п" * 30, "name": "Ivan"},
    )
    assert fits.status_code == 200
    login = client.post("/api/auth/login", json={"email": "ivan@uni.org", "password": "п" * 30})
    assert login.status_code == 200
