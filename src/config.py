"""Application settings read from the environment or a .env file."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Supabase project
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_access_token: Optional[str] = None  # user JWT; falls back to the anon key

    # HTTP
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = "INFO"

    @property
    def is_configured(self) -> bool:
        """Check if the store connection details are present."""
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST API."""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
