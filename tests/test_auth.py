"""Tests for registration, login and health endpoints."""

import pytest
from httpx import AsyncClient

from usergate.api.v1.endpoints.auth import limiter
from usergate.core.config import Settings, settings
from usergate.core.security import decode_access_token
from usergate.db.store import UserStore
from usergate.main import seed_first_admin

ALICE = {"name": "A", "email": "a@x.com", "password": "p", "role": "user"}


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_register_creates_user(async_client: AsyncClient, store: UserStore):
    resp = await async_client.post("/api/register", json=ALICE)
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "success"
    assert body["message"] == "User registered successfully"
    assert body["data"] == {"id": 1, "name": "A", "email": "a@x.com", "role": "user"}
    assert "password" not in body["data"]
    assert len(store) == 1
    assert store.get_user(1).email == "a@x.com"


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(async_client: AsyncClient, store: UserStore):
    await async_client.post("/api/register", json=ALICE)
    resp = await async_client.post("/api/register", json={**ALICE, "name": "Other"})
    assert resp.status_code == 409
    assert resp.json() == {"status": "error", "message": "User with this email already exists"}
    assert len(store) == 1


@pytest.mark.asyncio
async def test_register_missing_field(async_client: AsyncClient):
    resp = await async_client.post("/api/register", json={"name": "A", "email": "a@x.com"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "All fields are required"


@pytest.mark.asyncio
async def test_register_invalid_role(async_client: AsyncClient):
    resp = await async_client.post("/api/register", json={**ALICE, "role": "owner"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Role must be 'admin' or 'user'"


@pytest.mark.asyncio
async def test_register_malformed_body(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/register",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"status": "error", "message": "Invalid request body"}


@pytest.mark.asyncio
async def test_login_returns_token_with_user_claims(async_client: AsyncClient):
    await async_client.post("/api/register", json=ALICE)
    resp = await async_client.post("/api/login", json={"email": "a@x.com", "password": "p"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "success"
    claims = decode_access_token(body["token"])
    assert (claims.user_id, claims.email, claims.role) == (1, "a@x.com", "user")


@pytest.mark.asyncio
async def test_login_bad_credentials(async_client: AsyncClient):
    await async_client.post("/api/register", json=ALICE)
    resp = await async_client.post("/api/login", json={"email": "a@x.com", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_signing_failure_is_server_error(
    async_client: AsyncClient, store: UserStore, monkeypatch
):
    store.create_user("A", "a@x.com", "p", "user")
    monkeypatch.setattr(settings, "ALGORITHM", "XX999")
    resp = await async_client.post("/api/login", json={"email": "a@x.com", "password": "p"})
    assert resp.status_code == 500
    assert resp.json() == {"status": "error", "message": "Failed to generate token"}


@pytest.mark.asyncio
async def test_login_malformed_body(async_client: AsyncClient):
    resp = await async_client.post("/api/login", json=["a@x.com", "p"])
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_login_rate_limited(async_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    try:
        statuses = [
            (await async_client.post("/api/login", json={"email": "x", "password": "y"})).status_code
            for _ in range(21)
        ]
    finally:
        limiter.reset()
    assert statuses[:20] == [401] * 20
    assert statuses[20] == 429


@pytest.mark.asyncio
async def test_cors_headers_present(async_client: AsyncClient):
    resp = await async_client.get("/health", headers={"Origin": "http://example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_seed_first_admin(store: UserStore):
    config = Settings(FIRST_ADMIN_EMAIL="root@x.com", FIRST_ADMIN_PASSWORD="pw")
    seed_first_admin(store, config)
    seed_first_admin(store, config)
    assert len(store) == 1
    assert store.verify_credentials("root@x.com", "pw").role == "admin"


def test_seed_first_admin_disabled_by_default(store: UserStore):
    seed_first_admin(store, Settings())
    assert len(store) == 0
