"""Application configuration for the provisioning admin console."""

from __future__ import annotations

import os
from typing import Dict, Optional, Type

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _env_timeout(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if not raw:
        # No client-side timeout; the transport's own timeout applies.
        return None
    return float(raw)


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")

    # Remote provisioning API (auth + subscribers + audit share one base URL)
    AUTH_API_URL = os.environ.get("AUTH_API_URL", os.environ.get("API_URL", "http://localhost:8000"))
    AUTH_HTTP_TIMEOUT_SECONDS = _env_timeout("AUTH_HTTP_TIMEOUT_SECONDS")

    # Credential cookies. Must only be false for plain-HTTP development.
    COOKIES_SECURE = _env_flag("COOKIES_SECURE")

    LANDING_PATH = "/dashboard"
    LOGIN_PATH = "/login"

    # Flask's own session cookie only carries the CSRF token.
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = COOKIES_SECURE
    WTF_CSRF_ENABLED = True

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", "true")

    AUDIT_PAGE_SIZE = int(os.environ.get("AUDIT_PAGE_SIZE", "25"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    AUTH_API_URL = "http://provisioning.test"
    COOKIES_SECURE = False
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False


class ProductionConfig(BaseConfig):
    ENV = "production"
    COOKIES_SECURE = True
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = "Lax"


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
