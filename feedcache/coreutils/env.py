from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, PositiveFloat, PositiveInt, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

load_dotenv()  # take environment variables from .env

STORE_KINDS = ("json", "parquet", "memory")

DEFAULT_STORE = "json"
DEFAULT_CACHE_PATHS = {
    "json": "output/feed_cache.json",
    "parquet": "output/feed_cache.parquet",
    "memory": "",
}
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_REFRESH_MINUTES = 60


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)


class Settings(BaseSettings):
    """Runtime configuration, read from FEED_* environment variables"""

    url: Optional[str] = None  # FEED_URL
    store: Literal["json", "parquet", "memory"] = DEFAULT_STORE
    cache_path: Optional[str] = None  # defaults per store kind
    http_timeout: PositiveFloat = DEFAULT_HTTP_TIMEOUT
    refresh_minutes: PositiveInt = DEFAULT_REFRESH_MINUTES
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_prefix="FEED_", extra="ignore", populate_by_name=True
    )

    @field_validator("store", mode="before")
    @classmethod
    def lowercase_store(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def default_cache_path(self):
        if self.cache_path is None:
            self.cache_path = DEFAULT_CACHE_PATHS[self.store]
        return self

    def require_feed_url(self) -> str:
        if not self.url:
            raise ValueError("FEED_URL environment variable is not set")
        return self.url


def load_settings(**overrides) -> Settings:
    """
    Build Settings from environment variables

    Args:
        **overrides: Explicit values (e.g. from CLI flags) that win over the
            environment when not None

    Returns:
        Settings: Validated configuration

    Raises:
        pydantic.ValidationError: (a ValueError) on unknown store kinds or
            non-positive numbers
    """
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
