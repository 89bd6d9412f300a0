"""Application configuration."""

import os
from datetime import date, datetime
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    timezone: str = "UTC"
    default_water_target_ml: int = Field(default=2500, gt=0)
    activity_grid_days: int = Field(default=100, gt=0)
    catalog_ttl_seconds: int = 300
    water_write_retries: int = Field(default=3, ge=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def local_today(timezone_name: str) -> date:
    """Return the calendar date in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
