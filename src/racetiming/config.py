"""Analysis tunables and environment-driven settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisConfig(BaseModel):
    """Tunables for one analysis run, all in seconds.

    No cross-field checks are made: a minimum above the maximum simply
    classifies every finished attempt as invalid.

    ``pairing_tolerance`` is part of the configuration contract but neither
    pairing strategy reads it.
    """

    model_config = ConfigDict(frozen=True)

    max_reasonable_race_time: float = 300.0
    min_reasonable_race_time: float = 1.0
    session_gap_threshold: float = 600.0
    pairing_tolerance: float = 10.0
    duplicate_threshold: float = 0.5


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()


class LoggingSettings(BaseSettings):
    """Logging settings read from ``RACETIMING_LOG_*`` environment variables.

    The analysis pipeline reads only these; runner store values live in
    :class:`Settings`.
    """

    model_config = SettingsConfigDict(
        env_prefix="RACETIMING_",
        env_file=".env",
        extra="ignore",
    )

    log_dir: str | None = Field(default=None, description="Directory for racetiming.log; unset disables file logging")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown logging level {value!r}")
        return level


class Settings(BaseSettings):
    """Runner store settings read from ``RACETIMING_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RACETIMING_",
        env_file=".env",
        extra="ignore",
    )

    runner_store_url: str | None = Field(default=None, description="Base URL of the realtime JSON store")
    runner_store_collection: str = Field(default="runners")
    runner_store_auth: str | None = Field(default=None, description="Auth token sent as the 'auth' query parameter")
    request_timeout: float = Field(default=30.0)


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Return the cached logging settings instance."""
    return LoggingSettings()


@lru_cache
def get_settings() -> Settings:
    """Return the cached runner store settings instance."""
    return Settings()
