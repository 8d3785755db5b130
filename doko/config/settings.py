"""
Doko Tally - Application Settings

Loads configuration from environment variables using Pydantic Settings and
applies the configured log level.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

from doko.engine.base import Configuration
from doko.engine.rules import Ruleset, get_ruleset
from doko.engine.validators import validate_value_pair

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (archive only)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Scoring defaults for new sessions
    default_value_pair: str = "10/20"
    default_solo_value: str = "50"
    ruleset: str = "standard"
    decimal_separator: str = ","

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("default_value_pair")
    @classmethod
    def _check_value_pair(cls, value: str) -> str:
        return validate_value_pair(value)

    @field_validator("ruleset")
    @classmethod
    def _check_ruleset(cls, value: str) -> str:
        get_ruleset(value)
        return value

    @property
    def archive_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    def default_configuration(self) -> Configuration:
        """Base values for a new session."""
        return Configuration(
            value_pair=self.default_value_pair,
            solo_value=self.default_solo_value,
        )

    def rules(self) -> Ruleset:
        return get_ruleset(self.ruleset)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
