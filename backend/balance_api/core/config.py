"""Flask configuration classes, selected through ``APP_ENV``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Values from a local .env file, if any, become environment variables
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) is true, unset gives ``default``."""
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Read an integer; unset, blank or malformed values give ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


class BaseConfig:
    """Settings common to every environment.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Prefix shared by every blueprint (``/api``).
    SECRET_KEY: str
        Flask secret; the placeholder must be replaced outside development.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` for signing access and refresh tokens.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Access token lifetime (``JWT_ACCESS_MINUTES``, default 30 minutes).
    JWT_REFRESH_TOKEN_EXPIRES: timedelta
        Refresh token lifetime (``JWT_REFRESH_DAYS``, default 14 days). The
        same lifetime is stored on the persisted refresh-token row.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    RATELIMIT_STORAGE_URI: str
        Storage backend for rate-limit counters (``memory://`` by default).
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT_SECRET_AT_LEAST_32_BYTES")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("JWT_ACCESS_MINUTES", 30))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("JWT_REFRESH_DAYS", 14))
    JWT_TOKEN_LOCATION = ["headers"]

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Rate limiting
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on unless ``FLASK_DEBUG`` says otherwise."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Test runs: in-memory SQLite (or ``TEST_DATABASE_URL``), no rate limits, no ProxyFix."""

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    RATELIMIT_ENABLED = False
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Production: debug and SQL echo forced off."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Config class named by ``APP_ENV``; unknown or unset means development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
