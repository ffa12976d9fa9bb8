"""Configuration package."""

from splitledger.config.settings import (
    EngineSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "EngineSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
