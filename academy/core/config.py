"""Application settings loaded from environment."""

import logging
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Academy"
    app_env: str = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    bulk_operation_max_items: int = Field(default=200, ge=1, le=10_000)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Normalize log level token and reject unknown names."""
        if isinstance(value, str):
            value = value.strip().upper()
            if value not in logging.getLevelNamesMapping():
                raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return value

    @model_validator(mode="after")
    def validate_for_environment(self) -> "Settings":
        """Block unsafe flags in production-like environments."""
        env_name = self.app_env.strip().lower()
        if env_name not in {"production", "prod"}:
            return self

        if self.debug:
            raise ValueError("DEBUG must be false in production environment")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
