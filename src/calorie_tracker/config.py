"""Application configuration."""

import os
from enum import StrEnum

from pydantic_settings import BaseSettings, SettingsConfigDict

from calorie_tracker.domain.nutrition import EdamamCredentials

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class SearchStrategy(StrEnum):
    """Which Edamam parser variant(s) the food search uses."""

    PARSER = "parser"
    ACCOUNT_PARSER = "account_parser"
    PARSER_WITH_FALLBACK = "parser_with_fallback"


class StorageBackend(StrEnum):
    """Where collection blobs are persisted."""

    FILE = "file"
    SUPABASE = "supabase"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    edamam_app_id: str | None = None
    edamam_app_key: str | None = None
    edamam_user_id: str | None = None
    edamam_base_url: str = "https://api.edamam.com"
    edamam_search_strategy: SearchStrategy = SearchStrategy.PARSER
    edamam_nutrition_type: str | None = None
    edamam_category: str | None = None
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    storage_backend: StorageBackend = StorageBackend.FILE
    data_dir: str = ".calorie_tracker"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    http_timeout_seconds: float = 15
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def edamam_credentials(self) -> EdamamCredentials:
        """Return Edamam credentials, blank values treated as missing."""
        return EdamamCredentials(
            app_id=_blank_to_none(self.edamam_app_id),
            app_key=_blank_to_none(self.edamam_app_key),
            user_id=_blank_to_none(self.edamam_user_id),
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
