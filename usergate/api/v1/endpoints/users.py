"""
User CRUD endpoints.

- GET operations require any authenticated user.
- POST / PUT / DELETE operations require admin role.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from usergate.api.v1.deps import (
    admin_user_create,
    admin_user_update,
    get_store,
    require_admin,
    require_authenticated,
)
from usergate.db.store import UserStore
from usergate.schemas.token import SessionClaims
from usergate.schemas.user import (
    MessageResponse,
    UserCreate,
    UserListResponse,
    UserRead,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("", response_model=UserListResponse)
async def list_users(
    store: UserStore = Depends(get_store),
    _claims: SessionClaims = Depends(require_authenticated),
) -> UserListResponse:
    users = store.list_users()
    return UserListResponse(
        data=[UserRead.model_validate(u) for u in users],
        count=len(users),
    )


@router.get("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def get_user(
    user_id: int,
    store: UserStore = Depends(get_store),
    _claims: SessionClaims = Depends(require_authenticated),
) -> UserResponse:
    return UserResponse(data=UserRead.model_validate(store.get_user(user_id)))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate = Depends(admin_user_create),
    store: UserStore = Depends(get_store),
    admin: SessionClaims = Depends(require_admin),
) -> UserResponse:
    """Create a user account (admin only). Same validation as registration."""
    user = store.create_user(body.name, body.email, body.password, body.role)
    logger.info("Admin %d created user %d", admin.user_id, user.id)
    return UserResponse(
        data=UserRead.model_validate(user),
        message="User created successfully",
    )


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserUpdate = Depends(admin_user_update),
    store: UserStore = Depends(get_store),
    admin: SessionClaims = Depends(require_admin),
) -> UserResponse:
    """Patch name, email, password and/or role; empty fields are ignored."""
    user = store.update_user(
        user_id,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    logger.info("Admin %d updated user %d", admin.user_id, user_id)
    return UserResponse(
        data=UserRead.model_validate(user),
        message="User updated successfully",
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    store: UserStore = Depends(get_store),
    admin: SessionClaims = Depends(require_admin),
) -> MessageResponse:
    store.delete_user(user_id)
    logger.info("Admin %d deleted user %d", admin.user_id, user_id)
    return MessageResponse(message="User deleted successfully")
