"""Configuration settings for the ERP document counter engine."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = Field(default="ERP Counter", env="APP_NAME")
    debug: bool = Field(default=False, env="DEBUG")
    app_env: str = Field(default="development", env="APP_ENV")

    # Database
    database_url: str = Field(
        default="sqlite:///./erp_counter.db", env="DATABASE_URL"
    )

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: Optional[str] = Field(default="erp_counter.log", env="LOG_FILE")

    # Counter transactions
    counter_lock_wait_ms: int = Field(default=5000, env="COUNTER_LOCK_WAIT_MS")
    counter_transaction_timeout_ms: int = Field(
        default=10000, env="COUNTER_TRANSACTION_TIMEOUT_MS"
    )
    counter_default_site: str = Field(default="", env="COUNTER_DEFAULT_SITE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Create global settings instance
settings = Settings()
