"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    default_locale: str = "fr"
    default_unit_system: str = "metric"
    selection_seed: int | None = None
    recipes_table: str = "recipes"
    meal_plans_table: str = "meal_plans"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def preference_defaults(self) -> dict[str, object]:
        """Preference values applied when a payload leaves them out."""
        return {
            "locale": self.default_locale,
            "unit_system": self.default_unit_system,
        }
