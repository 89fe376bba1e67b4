from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Redirect Shortener"
    app_version: str = "1.0.0"

    # Server (loopback only by default)
    host: str = "127.0.0.1"
    port: int = 3000

    # Logging
    log_level: str = "INFO"

    # Storage settings
    storage_backend: str = "memory"  # Options: "memory"
    storage_lock_timeout: Optional[float] = 5.0  # Seconds; None waits forever

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
