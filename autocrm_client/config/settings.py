"""
Application settings and configuration.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "AutoCRM Client"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # CRM API
    api_base_url: str = Field(
        default="http://localhost:3007",
        validation_alias="AUTOCRM_API_BASE",
    )
    api_token: Optional[str] = Field(default=None, validation_alias="AUTOCRM_API_TOKEN")
    request_timeout: float = Field(default=15.0, validation_alias="AUTOCRM_REQUEST_TIMEOUT")

    # Booking wizard
    slot_fetch_timeout: float = Field(default=15.0, validation_alias="SLOT_FETCH_TIMEOUT")

    # Timezone used to decide what "today" is for date selection
    timezone: str = Field(default="Europe/Istanbul", validation_alias="TIMEZONE")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
