"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) - single instance per process
    - Defaults provided for every setting: the library works without a .env file

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bizflow.core.domain_types import Locale, MessageStorageType


class Settings(BaseSettings):
    """Library settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Transactions
    database_url: str = "sqlite:///./bizflow.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Bare postgresql:// URLs are pointed at the psycopg driver."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Messages
    message_storage: MessageStorageType = MessageStorageType.FILE
    message_bundle_dir: str = "resources/messages"
    config_dir: str = "resources/config"
    default_locale: str = "en_US"

    # SQL fragments
    sql_batch_size: int = 500

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def locale(self) -> Locale:
        return Locale.parse(self.default_locale)


@lru_cache
def get_settings() -> Settings:
    return Settings()
