"""
usergate: Application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `db/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usergate.api.v1.api import api_router
from usergate.api.v1.endpoints import health
from usergate.api.v1.endpoints.auth import limiter
from usergate.core.config import Settings, settings
from usergate.core.exceptions import Conflict, register_exception_handlers
from usergate.db.store import UserStore
from usergate.models.user import ROLE_ADMIN

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def seed_first_admin(store: UserStore, config: Settings) -> None:
    """Create the configured admin account if both email and password are set."""
    if not (config.FIRST_ADMIN_EMAIL and config.FIRST_ADMIN_PASSWORD):
        return
    try:
        store.create_user(
            config.FIRST_ADMIN_NAME,
            config.FIRST_ADMIN_EMAIL,
            config.FIRST_ADMIN_PASSWORD,
            ROLE_ADMIN,
        )
    except Conflict:
        logger.info("Admin %s already present", config.FIRST_ADMIN_EMAIL)
        return
    logger.info(
        "Default admin created: %s (password: <redacted>)",
        config.FIRST_ADMIN_EMAIL,
    )


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    seed_first_admin(application.state.store, settings)
    logger.info("%s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app(store: UserStore | None = None) -> FastAPI:
    application = FastAPI(
        title="usergate",
        description="User registration, JWT authentication and role-gated user CRUD",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    application.state.store = store if store is not None else UserStore()
    application.state.limiter = limiter

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(health.router)
    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
