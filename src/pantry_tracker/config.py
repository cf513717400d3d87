"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from pantry_tracker.domain.lifecycle import RelativeTo

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "json"
    inventory_path: str = "data/ingredients.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "app_storage"
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    timezone: str = "UTC"
    expiring_soon_days: int = 7
    recently_added_limit: int = 5
    needs_check_days: int = 3
    relative_to: str = "baseline"
    lookup_retry_attempts: int = 1
    edit_session_ttl_seconds: int = 3600
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_relative_to(raw: str | None) -> RelativeTo:
    """Parse the date reference used for shortening expirations."""
    cleaned = (raw or "").strip().lower()
    for option in RelativeTo:
        if option.value == cleaned:
            return option
    return RelativeTo.BASELINE
