"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# Static signing secret kept for compatibility with existing clients.
# INSECURE: override SECRET_KEY in any real deployment.
DEFAULT_SECRET_KEY = "mysecretkey"


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "usergate"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # ── Server ───────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ── JWT ──────────────────────────────────────────────────────────
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str) and v.lstrip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    # ── Rate limiting (register / login) ────────────────────────────
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "20/minute"

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── Optional admin seeded on startup ────────────────────────────
    FIRST_ADMIN_EMAIL: str | None = None
    FIRST_ADMIN_PASSWORD: str | None = None
    FIRST_ADMIN_NAME: str = "Administrator"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()

if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
    logging.getLogger("usergate.core.config").warning(
        "WARNING: running with the default static SECRET_KEY. "
        "Tokens can be forged by anyone who knows it; set SECRET_KEY in .env."
    )
