"""
Shared test fixtures for the usergate test suite.

Each test gets a fresh application with its own empty ``UserStore``.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from usergate.core.security import create_access_token
from usergate.db.store import UserStore
from usergate.main import create_app


@pytest.fixture
def store() -> UserStore:
    return UserStore()


@pytest.fixture
def app(store: UserStore) -> FastAPI:
    return create_app(store)


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ── Auth helpers ────────────────────────────────────────────────────
@pytest.fixture
def admin_headers(store: UserStore) -> dict[str, str]:
    """Seed an admin directly in the store and return its bearer header."""
    admin = store.create_user("Admin", "admin@x.com", "secret", "admin")
    token = create_access_token(admin.id, admin.email, admin.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(store: UserStore) -> dict[str, str]:
    user = store.create_user("Plain", "plain@x.com", "secret", "user")
    token = create_access_token(user.id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}
