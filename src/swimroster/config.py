"""Application configuration with environment validation.

Usage:
    from swimroster.config import get_settings

    settings = get_settings()
    limits = settings.limits

Values come from environment variables or a .env file in the working
directory or project root. Supabase credentials are only required once a
Supabase-backed store is actually used.
"""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from swimroster.models.lineup import LineupLimits


def _find_env_file() -> Path | None:
    """Find .env file, checking both current dir and project root."""
    if Path(".env").exists():
        return Path(".env")
    # config.py -> swimroster -> src -> project_root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        return env_file
    return None


class Environment(StrEnum):
    """Application environment."""

    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class LogFormat(StrEnum):
    """Log output format."""

    CONSOLE = "console"
    JSON = "json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Environment.LOCAL

    # Supabase
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_key: SecretStr | None = Field(default=None, description="Supabase anon/service key")

    # Lineup limits (per swimmer, per meet)
    max_individual_events: int = Field(default=2, ge=0, description="Max individual events")
    max_relay_events: int = Field(default=2, ge=0, description="Max relay events")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: LogFormat = Field(default=LogFormat.CONSOLE, description="Log output format")

    @property
    def limits(self) -> LineupLimits:
        """Event-count limits handed to the lineup checker."""
        return LineupLimits(
            max_individual=self.max_individual_events,
            max_relay=self.max_relay_events,
        )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    To reload after changing the environment:
        get_settings.cache_clear()
    """
    return Settings()
