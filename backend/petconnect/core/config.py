"""Module: config."""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # SQLAlchemy connection string for the hosted PostgreSQL store.
    database_url: str
    # Base URL of the hosted backend (identity + object storage APIs).
    supabase_url: str
    # Public (anon) API key sent with every hosted backend request.
    supabase_anon_key: str
    # Object storage bucket holding pet photos.
    photo_bucket: str = "pet-photos"
    # Origin used when building public profile URLs; request origin when unset.
    public_base_url: str | None = None
    # Secret used to sign the session cookie.
    session_secret: str = "change-me"
    # Transport timeout (seconds) for hosted backend calls.
    http_timeout: float = 10.0
    max_photo_bytes: int = 5 * 1024 * 1024
    cors_origins: list[str] = [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
    # Create missing tables at startup (local dev); production uses alembic.
    create_tables: bool = True
    log_level: str = "INFO"

    # Configure pydantic-settings to also load values from local .env file.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance imported by app modules at runtime.
settings = Settings()
