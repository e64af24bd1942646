# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the feed URL, album provider credentials and runtime toggles

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="ALBUM_ARCHIVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Feed Configuration
    feed_url: str = Field(default="", description="Saved-links RSS feed URL (including its private feed token)")
    start_cursor: str = Field(default="", description="Pagination cursor to start from; empty means most recent")
    single_batch: bool = Field(default=False, description="Process only the first batch instead of walking backward")
    batch_delay_seconds: float = Field(
        default=2.0, ge=0.0, description="Pause between feed batches to respect upstream rate limits"
    )

    # Album Provider Configuration
    imgur_client_id: str = Field(default="", description="Client ID sent to the Imgur album API")
    album_api_base: str = Field(default="https://api.imgur.com/3", description="Base URL of the album API")

    # Download Configuration
    destination_root: Path = Field(default=Path("albums"), description="Root directory for downloaded albums")
    max_sockets: int = Field(default=10, ge=1, description="Maximum concurrent connections in the shared pool")
    request_timeout: float = Field(default=30.0, gt=0.0, description="Per-request timeout in seconds")
    user_agent: str = Field(
        default="album-archiver/0.1 (personal archive)", description="User-Agent header for every request"
    )

    # Logging Configuration
    verbose: bool = Field(default=False, description="Log every feed entry and its extracted links")
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
