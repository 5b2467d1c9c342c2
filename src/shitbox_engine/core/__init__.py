"""Core module providing configuration, constants, logging, and exceptions.

Exports:
    Exceptions:
        ShitboxEngineError: Base exception for all engine errors.
        DataNotLoadedError: Static game data has not been supplied.
        EmptyInputError: Random selection from an empty sequence.

    Configuration:
        Settings: Main application settings class.
        EngineSettings: Session/engine tuning.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from shitbox_engine.core.config import (
    EngineSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from shitbox_engine.core.exceptions import (
    ConfigurationError,
    DataNotLoadedError,
    EconomyNotLoadedError,
    EmptyInputError,
    GameEngineError,
    InvalidGameStateError,
    LocationNotFoundError,
    MapNotLoadedError,
    ShitboxEngineError,
    ValidationError,
)
from shitbox_engine.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "ShitboxEngineError",
    # Game engine exceptions
    "GameEngineError",
    "EmptyInputError",
    "DataNotLoadedError",
    "EconomyNotLoadedError",
    "MapNotLoadedError",
    "LocationNotFoundError",
    "InvalidGameStateError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "EngineSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
