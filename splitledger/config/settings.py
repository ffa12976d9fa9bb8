"""
Configuration Management for Split Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Configuration is read in exactly one place, the
composition root (see splitledger.orchestrator). Engine classes never call
get_settings() themselves; they receive the values they need as explicit
constructor arguments. This keeps the settlement core free of global state.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settlement engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    money_scale: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Fractional digits kept when rounding aggregate amounts"
    )
    default_currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="Currency used when a session's code is not in the catalog"
    )

    @field_validator('default_currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR)"
    )
    render_json: bool = Field(
        default=True,
        description="Render log lines as JSON (False uses the console renderer)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.strip().upper()
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level


class StorageSettings(BaseSettings):
    """Session storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    path: str = Field(
        default="sessions.json",
        description="Path of the JSON document holding saved sessions"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed write is attempted"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for each section that failed to load.
    """
    results = {}

    settings = get_settings()

    for name in ("engine", "logging", "storage"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
