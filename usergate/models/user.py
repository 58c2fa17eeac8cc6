"""
User model: identity record & role-based access control.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_USER = "user"
VALID_ROLES = frozenset({ROLE_ADMIN, ROLE_USER})


@dataclass
class User:
    id: int
    name: str
    email: str  # unique, case-sensitive as stored
    password: str  # plaintext, compared verbatim (no hashing)
    role: str  # admin | user
