"""
JWT session token creation / verification.

Tokens are stateless HS256 JWTs carrying ``user_id``, ``email``, ``role``
and ``exp``. There is no session table and no revocation list: a token is
valid while its signature checks out and ``exp`` lies in the future.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import jwt
from jose.exceptions import JOSEError
from pydantic import ValidationError

from usergate.core.config import settings
from usergate.core.exceptions import ServerError, Unauthorized
from usergate.schemas.token import SessionClaims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


# ── Issue ───────────────────────────────────────────────────────────
def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    )
    try:
        return jwt.encode(
            {"user_id": user_id, "email": email, "role": role, "exp": expire},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
    except JOSEError as exc:
        logger.error("Token signing failed: %s", exc)
        raise ServerError("Failed to generate token") from exc


# ── Validate ────────────────────────────────────────────────────────
def extract_bearer_token(authorization: str | None) -> str:
    """Return the raw token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("Missing or invalid Authorization header")
    return authorization[len(BEARER_PREFIX):]


def decode_access_token(token: str) -> SessionClaims:
    """Verify signature and expiry; return the embedded claims.

    Raises ``Unauthorized`` for malformed, forged or expired tokens and for
    payloads missing any of the identity claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True},
        )
    except JOSEError as exc:
        logger.warning("Rejected token: %s", exc)
        raise Unauthorized("Invalid or expired token") from exc

    try:
        return SessionClaims.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Rejected token with malformed claims")
        raise Unauthorized("Invalid token claims") from exc
