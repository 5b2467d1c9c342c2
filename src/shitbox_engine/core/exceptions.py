"""Custom exception hierarchy for the Shitbox simulation engine.

Expected, player-facing failures (not enough money, no car here) are never
raised; they travel as result objects. The exceptions below cover the
remaining cases: missing game data, programming errors and invalid input
at the session boundary. All exceptions inherit from ShitboxEngineError,
enabling unified error handling at the application boundary while
preserving domain-specific context.

Example:
    >>> from shitbox_engine.core.exceptions import EconomyNotLoadedError
    >>> raise EconomyNotLoadedError("Economy data not loaded.")
"""

from __future__ import annotations

from typing import Any


class ShitboxEngineError(Exception):
    """Base exception for all simulation engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(ShitboxEngineError):
    """Base exception for all game engine errors."""


class EmptyInputError(GameEngineError):
    """Raised when a random selection is asked to choose from nothing.

    No valid game data should ever produce this; it signals a programming
    error in the caller.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize empty input error with operation context.

        Args:
            message: Human-readable error description.
            operation: Name of the RNG operation that was called.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if operation:
            combined_details["operation"] = operation
        super().__init__(message, details=combined_details)


class DataNotLoadedError(GameEngineError):
    """Raised when static game data has not been supplied yet.

    This is a precondition failure, distinct from a player being unable to
    afford something, and is typically fatal at startup.
    """

    def __init__(
        self,
        message: str,
        *,
        data_kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize data-not-loaded error with the missing data kind.

        Args:
            message: Human-readable error description.
            data_kind: Which data set is missing ('economy', 'map').
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if data_kind:
            combined_details["data_kind"] = data_kind
        super().__init__(message, details=combined_details)


class EconomyNotLoadedError(DataNotLoadedError):
    """Raised when the economy configuration is missing."""

    def __init__(self, message: str = "Economy data not loaded.") -> None:
        super().__init__(message, data_kind="economy")


class MapNotLoadedError(DataNotLoadedError):
    """Raised when the town map is missing."""

    def __init__(self, message: str = "Map data not loaded.") -> None:
        super().__init__(message, data_kind="map")


class LocationNotFoundError(GameEngineError):
    """Raised when a named location is required but absent from the map."""

    def __init__(
        self,
        message: str,
        *,
        location_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize location error with the missing location id.

        Args:
            message: Human-readable error description.
            location_id: Identifier of the location that was looked up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if location_id:
            combined_details["location_id"] = location_id
        super().__init__(message, details=combined_details)


class InvalidGameStateError(GameEngineError):
    """Raised when the game enters an invalid or inconsistent state.

    This typically occurs when a snapshot cannot be restored or state
    transitions violate engine invariants.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current invalid state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(ShitboxEngineError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(ShitboxEngineError):
    """Raised when caller-supplied input fails validation.

    Used for new-game input such as a blank player name or a stat
    allocation that does not spend exactly the starting points.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


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
]
