from datetime import timezone, tzinfo
from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    app_env: Literal["development", "production", "test"] = Field(default="development", validation_alias="APP_ENV")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    database_url: str = Field(validation_alias="DATABASE_URL")

    timezone: str = Field(default="UTC", validation_alias="APP_TIMEZONE")
    scheduling_horizon_days: int = Field(default=14, ge=1, validation_alias="SCHEDULING_HORIZON_DAYS")
    default_task_duration_minutes: int = Field(default=30, gt=0, validation_alias="DEFAULT_TASK_DURATION_MINUTES")
    travel_time_minutes: int = Field(default=15, ge=0, validation_alias="TRAVEL_TIME_MINUTES")

    def local_zone(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


@lru_cache(1)
def get_settings() -> Settings:
    """Return cached settings instance to avoid reparsing env variables."""

    return Settings()  # type: ignore[call-arg]
