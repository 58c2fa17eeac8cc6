"""Pydantic schemas for login and JWT session claims."""

from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    status: str = "success"
    token: str


class SessionClaims(BaseModel):
    user_id: int
    email: str
    role: str
    exp: int
