"""
Auth endpoints: self-service registration & login (JWT issuance).
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from usergate.api.v1.deps import get_store
from usergate.core.config import settings
from usergate.core.exceptions import Unauthorized
from usergate.core.security import create_access_token
from usergate.db.store import UserStore
from usergate.schemas.token import LoginRequest, TokenResponse
from usergate.schemas.user import UserCreate, UserRead, UserResponse

# Rate limiter, keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register_user(
    request: Request,
    body: UserCreate,
    store: UserStore = Depends(get_store),
) -> UserResponse:
    """Register a new account. Any caller may choose either role."""
    user = store.create_user(body.name, body.email, body.password, body.role)
    logger.info("Registered user %d (%s)", user.id, user.email)
    return UserResponse(
        data=UserRead.model_validate(user),
        message="User registered successfully",
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login_for_access_token(
    request: Request,
    body: LoginRequest,
    store: UserStore = Depends(get_store),
) -> TokenResponse:
    """Check email/password and return a signed session token."""
    try:
        user = store.verify_credentials(body.email, body.password)
    except Unauthorized:
        logger.warning("Failed login for %r", body.email)
        raise

    return TokenResponse(token=create_access_token(user.id, user.email, user.role))
