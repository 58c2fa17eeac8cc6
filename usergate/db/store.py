"""
In-memory user store.

A single ``UserStore`` instance is owned by the application
(``app.state.store``) and handed to endpoints through the ``get_store``
dependency. Each public method runs its whole scan-then-mutate sequence
under one lock, so concurrent registrations cannot both pass the email
uniqueness check and a delete cannot interleave with an update.

Records are returned as copies; callers never hold references into the
store's own list.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from usergate.core.exceptions import Conflict, InvalidInput, NotFound, Unauthorized
from usergate.models.user import VALID_ROLES, User

logger = logging.getLogger(__name__)


def _check_role(role: str) -> None:
    if role not in VALID_ROLES:
        raise InvalidInput("Role must be 'admin' or 'user'")


class UserStore:
    def __init__(self) -> None:
        self._users: list[User] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def count(self) -> int:
        return len(self)

    # ── Internal helpers (caller must hold the lock) ────────────────
    def _find(self, user_id: int) -> User:
        for user in self._users:
            if user.id == user_id:
                return user
        raise NotFound("User not found")

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        return any(u.email == email and u.id != exclude_id for u in self._users)

    # ── Reads ───────────────────────────────────────────────────────
    def list_users(self) -> list[User]:
        """All records in insertion order."""
        with self._lock:
            return [replace(u) for u in self._users]

    def get_user(self, user_id: int) -> User:
        with self._lock:
            return replace(self._find(user_id))

    def verify_credentials(self, email: str, password: str) -> User:
        """Return the first record whose email and password match exactly."""
        with self._lock:
            for user in self._users:
                if user.email == email and user.password == password:
                    return replace(user)
        raise Unauthorized("Invalid email or password")

    # ── Writes ──────────────────────────────────────────────────────
    def create_user(self, name: str, email: str, password: str, role: str) -> User:
        if not (name and email and password and role):
            raise InvalidInput("All fields are required")
        _check_role(role)

        with self._lock:
            if self._email_taken(email):
                raise Conflict("User with this email already exists")
            user = User(id=self._next_id, name=name, email=email, password=password, role=role)
            self._next_id += 1
            self._users.append(user)
            logger.info("Created user %d (%s, role=%s)", user.id, user.email, user.role)
            return replace(user)

    def update_user(
        self,
        user_id: int,
        *,
        name: str = "",
        email: str = "",
        password: str = "",
        role: str = "",
    ) -> User:
        """Overwrite every non-empty field; all checks run before any write."""
        if role:
            _check_role(role)

        with self._lock:
            user = self._find(user_id)
            if email and email != user.email and self._email_taken(email, exclude_id=user_id):
                raise Conflict("Email already taken by another user")

            if name:
                user.name = name
            if email:
                user.email = email
            if password:
                user.password = password
            if role:
                user.role = role
            logger.info("Updated user %d", user_id)
            return replace(user)

    def delete_user(self, user_id: int) -> None:
        """Remove a record; the id allocator is never rewound."""
        with self._lock:
            user = self._find(user_id)
            self._users.remove(user)
            logger.info("Deleted user %d (%s)", user_id, user.email)
