"""
Access policy: maps (claims-or-absent, gate) onto allow / deny.

Pure decision logic; it never touches the user store.
"""

from __future__ import annotations

from enum import Enum

from usergate.core.exceptions import Forbidden, Unauthorized
from usergate.models.user import ROLE_ADMIN
from usergate.schemas.token import SessionClaims


class Gate(str, Enum):
    AUTHENTICATED = "authenticated"
    ADMIN_ONLY = "admin_only"


def check_access(claims: SessionClaims | None, gate: Gate) -> SessionClaims:
    """Return *claims* if they satisfy *gate*, otherwise raise.

    Missing claims are ``Unauthorized`` (401); a valid token with the wrong
    role is ``Forbidden`` (403).
    """
    if claims is None:
        raise Unauthorized("Missing or invalid Authorization header")
    if gate is Gate.ADMIN_ONLY and claims.role != ROLE_ADMIN:
        raise Forbidden("Admin access required")
    return claims
