"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOCKDASH_",
        case_sensitive=False,
    )

    # Dashboard backend
    api_base_url: str = Field(
        default="http://localhost:5000",
        description="Dashboard backend base URL",
    )
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Push transport
    ws_url: str = Field(
        default="http://localhost:3060",
        description="Socket.IO websocket service URL",
    )
    push_enabled: bool = Field(default=True, description="Connect to the push service")

    # Local state
    storage_path: str = Field(
        default=".dockdash/storage.json",
        description="File holding cached permissions and role",
    )

    # Permission policy
    default_when_unloaded: bool = Field(
        default=True,
        description="Answer for permission checks before permissions are loaded",
    )
    fallback_full_access: bool = Field(
        default=True,
        description="Grant full access when the permission fetch fails or is empty",
    )

    # Notification feed
    feed_limit: int = Field(default=10, ge=1, description="Live feed length")
    action_suppression_seconds: float = Field(
        default=60.0,
        gt=0,
        description="How long own container actions suppress their echo",
    )

    # Application
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma-separated allowed origins for the local API",
    )
    host: str = Field(default="127.0.0.1", description="Local API bind host")
    port: int = Field(default=8000, description="Local API port")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
