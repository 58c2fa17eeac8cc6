"""
FastAPI dependencies: user store access, auth guards and gated bodies.
"""

from __future__ import annotations

from typing import Optional, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError

from usergate.core.exceptions import InvalidInput
from usergate.core.permissions import Gate, check_access
from usergate.core.security import decode_access_token, extract_bearer_token
from usergate.db.store import UserStore
from usergate.schemas.token import SessionClaims
from usergate.schemas.user import UserCreate, UserUpdate

# Declared for the OpenAPI security scheme; the header itself is parsed
# by extract_bearer_token, which keeps the "Bearer " prefix case-sensitive.
bearer_scheme = HTTPBearer(auto_error=False)

_Body = TypeVar("_Body", bound=BaseModel)


# ── User store ──────────────────────────────────────────────────────
def get_store(request: Request) -> UserStore:
    return request.app.state.store


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_claims(
    request: Request,
    _credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> SessionClaims:
    """Validate the bearer token and return its claims (401 on failure)."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    return decode_access_token(token)


async def require_authenticated(
    claims: SessionClaims = Depends(get_current_claims),
) -> SessionClaims:
    return check_access(claims, Gate.AUTHENTICATED)


async def require_admin(
    claims: SessionClaims = Depends(get_current_claims),
) -> SessionClaims:
    """Only allow the admin role to proceed (403 otherwise)."""
    return check_access(claims, Gate.ADMIN_ONLY)


# ── Gated request bodies ────────────────────────────────────────────
# The body is read only after require_admin has passed, so a caller
# without a valid admin token never reaches body validation.
async def _read_body(request: Request, model: type[_Body]) -> _Body:
    try:
        return model.model_validate(await request.json())
    except (ValueError, ValidationError) as exc:
        raise InvalidInput("Invalid request body") from exc


async def admin_user_create(
    request: Request,
    _admin: SessionClaims = Depends(require_admin),
) -> UserCreate:
    return await _read_body(request, UserCreate)


async def admin_user_update(
    request: Request,
    _admin: SessionClaims = Depends(require_admin),
) -> UserUpdate:
    return await _read_body(request, UserUpdate)
