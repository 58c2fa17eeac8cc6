"""Liveness probe: unauthenticated, mounted outside the API prefix."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "message": "Server is running"}
