"""
Low Roller - Engine Settings

Loads configuration from environment variables using Pydantic Settings.
Every field has a default so the engine runs without any environment.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Engine settings loaded from LOWROLLER_* environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Sessions
    turn_deadline_ms: int | None = Field(default=None, ge=0)
    min_players: int = Field(default=2, ge=1)
    max_players: int = Field(default=8, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="LOWROLLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {value!r}.")
        return level

    @model_validator(mode="after")
    def _player_bounds(self) -> "Settings":
        if self.min_players > self.max_players:
            raise ValueError(
                f"min_players ({self.min_players}) exceeds max_players ({self.max_players})."
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the ``lowroller`` logger tree."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("lowroller").setLevel(level)
