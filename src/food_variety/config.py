"""Application configuration."""

import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_START_DAY = 0
LAST_WEEKDAY = 6

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_csv_url: str
    storage_backend: str = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "key_values"
    weekly_goal: int = 20
    timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_start_day(raw: str | None) -> int:
    """Parse a stored start-of-week value, falling back to Sunday."""
    if raw is None:
        return DEFAULT_START_DAY
    cleaned = raw.strip()
    if not cleaned:
        return DEFAULT_START_DAY
    try:
        value = int(cleaned)
    except ValueError:
        logger.warning("Ignoring malformed start day of week %r", raw)
        return DEFAULT_START_DAY
    if not DEFAULT_START_DAY <= value <= LAST_WEEKDAY:
        logger.warning("Ignoring out of range start day of week %r", raw)
        return DEFAULT_START_DAY
    return value
