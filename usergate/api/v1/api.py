"""
API router aggregator: wires all endpoint modules together.
"""

from fastapi import APIRouter

from usergate.api.v1.endpoints import auth, users

api_router = APIRouter()

# Registration & login (public)
api_router.include_router(auth.router)

# User CRUD (gated)
api_router.include_router(users.router)
