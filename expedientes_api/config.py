# expedientes_api/config.py

"""
Configuration for the Expedientes HTTP API.

All tunables are read from environment variables (or a local ``.env``
file) through pydantic-settings. Defaults are suitable for local
development against a SQLite database.

Typical usage
=============

    from expedientes_api.config import get_settings

    settings = get_settings()
    engine = create_engine(settings.DATABASE_URL)

Tests can swap the active configuration with ``set_settings()`` without
touching the process environment.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-for-production"


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "expedientes-api"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- HTTP ---
    API_PREFIX: str = "/api"
    DOCS_ENABLED: bool = True
    CORS_ORIGINS: str = "http://localhost:4200"

    # --- Persistence ---
    DATABASE_URL: str = "sqlite:///./expedientes.db"
    DATABASE_ECHO: bool = False
    AUTO_CREATE_SCHEMA: bool = True

    # --- Security ---
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60
    JWT_ISSUER: str = "expedientes-api"
    PASSWORD_HASH_ITERATIONS: int = 260_000

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("API_PREFIX")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        # "" or "/" means no prefix; otherwise leading slash, no trailing slash.
        value = (value or "").strip()
        if value in ("", "/"):
            return ""
        if not value.startswith("/"):
            value = "/" + value
        return value.rstrip("/")

    @field_validator("LOG_FORMAT")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return value

    @property
    def cors_origin_list(self) -> List[str]:
        """
        Parse the comma-separated CORS_ORIGINS value; "*" allows all origins.
        """
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == AppEnv.PRODUCTION

    def check_production_safety(self) -> None:
        """
        Fail closed when running in production with an unsafe configuration.
        """
        if self.is_production and self.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
            raise RuntimeError(
                "Server misconfiguration: JWT_SECRET_KEY must be set in production"
            )


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Return the global Settings instance, creating it from environment
    variables on first use.
    """
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings()
    return _SETTINGS


def set_settings(settings: Optional[Settings]) -> None:
    """
    Replace the global Settings instance.

    Mainly useful for tests. Passing ``None`` forces a reload from the
    environment on the next ``get_settings()`` call.
    """
    global _SETTINGS
    _SETTINGS = settings


__all__ = ["AppEnv", "Settings", "DEFAULT_JWT_SECRET", "get_settings", "set_settings"]
