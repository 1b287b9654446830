"""Planner configuration."""

import re
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_CLOCK_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


class Settings(BaseSettings):
    """Planner configuration from environment variables."""

    model_config = SettingsConfigDict(env_file=".env")

    # Application
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"
    timezone: str = "UTC"

    # Daily planner
    default_start_time: str = "08:00"
    default_day_length_hours: int = Field(default=9, ge=1, le=23)
    use_12_hour_clock: bool = False

    # Follow-up reminders
    follow_up_days_after_application: int = Field(default=7, ge=0)
    follow_up_days_after_interview: int = Field(default=2, ge=0)
    follow_up_days_between_follow_ups: int = Field(default=2, ge=0)
    thank_you_days_after_interview: int = Field(default=1, ge=0)
    home_follow_up_reminders_count: int = Field(default=3, ge=0)

    @property
    def zone(self) -> ZoneInfo:
        """Configured planner time zone."""
        return ZoneInfo(self.timezone)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log renderer name."""
        value = v.strip().lower()
        if value not in ("console", "json"):
            raise ValueError("LOG_FORMAT must be 'console' or 'json'")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA key."""
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"TIMEZONE is not a known IANA zone: {v!r}") from e
        return v.strip()

    @field_validator("default_start_time")
    @classmethod
    def validate_default_start_time(cls, v: str) -> str:
        """Validate default start time is a 24-hour HH:MM string."""
        if not _CLOCK_PATTERN.match(v.strip()):
            raise ValueError("DEFAULT_START_TIME must be a 24-hour HH:MM time")
        return v.strip()


settings = Settings()
