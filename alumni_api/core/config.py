"""
Configuration helpers for the alumni backend.

Exposes a frozen Settings object that reads environment variables (public API
URL, database, JWT secrets, SMTP, storage paths) so that routers/services do
not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    api_url: str
    database_url: str
    jwt_access_secret: str
    jwt_refresh_secret: str
    access_token_ttl_seconds: int
    refresh_token_ttl_seconds: int
    password_hash_time_cost: int
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    images_dir: str
    log_level: str


_DEFAULT_IMAGES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "images")


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        api_url=os.getenv("API_URL", "http://localhost:5000").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", ""),
        jwt_access_secret=os.getenv("JWT_ACCESS_SECRET", ""),
        jwt_refresh_secret=os.getenv("JWT_REFRESH_SECRET", ""),
        access_token_ttl_seconds=_int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "1800"), 1800),
        refresh_token_ttl_seconds=_int(os.getenv("REFRESH_TOKEN_TTL_SECONDS", "2592000"), 2592000),
        password_hash_time_cost=max(0, _int(os.getenv("PASSWORD_HASH_TIME_COST", "0"), 0)),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        images_dir=os.getenv("IMAGES_DIR", _DEFAULT_IMAGES_DIR),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
