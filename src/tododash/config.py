"""Configuration management for TodoDash."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="TODODASH_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Application
    app_name: str = "TodoDash"
    debug: bool = False
    log_level: str = "INFO"
    locale: str = "en"  # Language for user-facing suggestion errors ("en" or "id")

    # Paths
    data_dir: Path = Path("data")

    # Database
    database_url: str = "sqlite+aiosqlite:///data/tododash.db"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Identity provider (GoTrue-compatible REST API)
    auth_url: str = "http://localhost:54321/auth/v1"
    auth_api_key: str = ""
    password_reset_redirect: str | None = None

    # Object storage
    storage_url: str = "http://localhost:54321/storage/v1"
    storage_api_key: str = ""
    avatar_bucket: str = "avatars"

    # Text completion provider (OpenAI-compatible chat completions)
    completion_url: str = "https://api.openai.com/v1"
    completion_api_key: str | None = None
    completion_model: str = "gpt-4o-mini"
    completion_max_tokens: int = 300
    completion_temperature: float = 0.7

    # Outbound HTTP
    http_timeout_seconds: float = 15.0

    # Avatar upload validation
    max_avatar_size_bytes: int = 5 * 1024 * 1024  # 5 MB
    allowed_avatar_types: set[str] = {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
    }

    # Rate limiting (requests per minute)
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"  # Default rate limit for mutations
    rate_limit_uploads: str = "10/minute"  # Stricter limit for avatar uploads
    rate_limit_auth: str = "5/minute"  # Very strict for auth-related endpoints

    # CORS (Cross-Origin Resource Sharing)
    cors_enabled: bool = True
    cors_allow_origins: list[str] = []  # Empty = same-origin only; use ["*"] for any origin
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_max_age: int = 600  # Preflight cache duration in seconds

    def setup_directories(self) -> None:
        """Ensure required directories exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.setup_directories()
    return settings


def configure_logging(settings: Settings) -> None:
    """Set up root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # SQL echo is controlled by settings.debug on the engine
    logging.getLogger("tododash").setLevel(settings.log_level.upper())
