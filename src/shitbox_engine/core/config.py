"""Configuration management for the Shitbox simulation engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides. Game balance lives in the economy data
supplied by the data collaborator; these settings only tune how the engine
runs a session.

Example:
    >>> from shitbox_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.engine.history_limit
    100

Environment Variables:
    SHITBOX_DEBUG: Enable debug mode
    SHITBOX_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SHITBOX_ENGINE_DEFAULT_FUEL_EFFICIENCY: Car fuel use in L/100km
    SHITBOX_ENGINE_HISTORY_LIMIT: Action log capacity
    SHITBOX_ENGINE_SEED_DAY_STRIDE: Seed space reserved per day
    SHITBOX_ENGINE_PROCESS_DAYS_ON_TRAVEL: Run daily economics after travel
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shitbox_engine.core.constants import (
    DEFAULT_FUEL_EFFICIENCY,
    DEFAULT_SEED_DAY_STRIDE,
    DEFAULT_START_HOUR,
    HOURS_PER_DAY,
    MAX_HISTORY_ENTRIES,
)
from shitbox_engine.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Configuration for simulation engine behavior.

    Attributes:
        default_fuel_efficiency: Fuel burned by any car, in L/100km.
        history_limit: Capacity of the action log ring buffer.
        seed_day_stride: Seed space reserved per simulated day.
        start_hour: Hour of day a new game starts.
        starting_money: Money a new player starts with.
        process_days_on_travel: Run daily economics when travel crosses midnight.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHITBOX_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_fuel_efficiency: float = Field(
        default=DEFAULT_FUEL_EFFICIENCY,
        gt=0,
        description="Fuel consumption in liters per 100 km",
    )
    history_limit: int = Field(
        default=MAX_HISTORY_ENTRIES,
        ge=1,
        description="Maximum action log entries kept",
    )
    seed_day_stride: int = Field(
        default=DEFAULT_SEED_DAY_STRIDE,
        ge=1,
        description="Seed space reserved per day for per-action RNG",
    )
    start_hour: int = Field(
        default=DEFAULT_START_HOUR,
        ge=0,
        lt=HOURS_PER_DAY,
        description="Hour of day a new game begins",
    )
    starting_money: float = Field(
        default=0,
        ge=0,
        description="Money a new player starts with",
    )
    process_days_on_travel: bool = Field(
        default=False,
        description="Run food/hunger processing when travel crosses a day boundary",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        engine: Simulation engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHITBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Shitbox Simulation Engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
