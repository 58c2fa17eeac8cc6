"""Pydantic schemas for User CRUD.

Request fields default to empty strings: presence and role checks are
enforced by the store so registration and admin creation share one rule set.
"""

from __future__ import annotations

from pydantic import BaseModel


class UserCreate(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    role: str = ""


class UserUpdate(BaseModel):
    """Partial update; empty fields are left untouched."""

    name: str = ""
    email: str = ""
    password: str = ""
    role: str = ""


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    status: str = "success"
    data: UserRead
    message: str | None = None


class UserListResponse(BaseModel):
    status: str = "success"
    data: list[UserRead]
    count: int


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
