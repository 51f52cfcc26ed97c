"""
Configuration management for Cozy Cloud.
Values come from environment variables or a local .env file.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Hosted backend
    backend_url: str = "http://localhost:54321"
    backend_anon_key: str = ""
    request_timeout_seconds: float = 10.0

    # Document storage
    documents_bucket: str = "trip-docs"
    max_upload_bytes: int = 50 * 1024 * 1024
    allowed_upload_types: list[str] = [
        "application/pdf",
        "image/jpeg",
        "image/png",
        "image/webp",
    ]
    signed_url_ttl_seconds: int = 60

    # Widgets
    desktop_min_width: int = 768
    alert_exit_delay_ms: int = 300

    # Itinerary
    persist_activity_order: bool = False

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_backend_config() -> dict:
    """Get connection settings for the backend client."""
    return {
        "base_url": settings.backend_url.rstrip("/"),
        "api_key": settings.backend_anon_key,
        "timeout": settings.request_timeout_seconds,
    }
