"""
Application configuration using environment variables.
"""
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List, Optional

from .logging_config import config_logger


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "SocialFeed API"
    debug: bool = False
    environment: str = "development"

    # Security
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7

    # Database
    database_url: str = "sqlite:///./socialfeed.db"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Uploads
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 50

    # Rate limiting
    signup_rate_limit: str = "10/minute"
    login_rate_limit: str = "5/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


def ensure_signing_key(settings: Settings) -> Settings:
    """Make sure a JWT signing key exists before any token is issued."""
    if settings.jwt_secret:
        return settings

    if settings.environment == "production":
        raise RuntimeError(
            "JWT_SECRET must be set in production! "
            "Generate one with: python -c \"import secrets; print(secrets.token_hex(64))\""
        )

    settings.jwt_secret = secrets.token_hex(64)
    config_logger.warning(
        "JWT_SECRET not set, generated an ephemeral signing key. "
        "Tokens will not survive a restart; add JWT_SECRET to your .env file.",
        environment=settings.environment,
    )
    return settings


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return ensure_signing_key(Settings())
