"""Transient value objects passed between engine layers.

Nothing here is persisted. Deltas are produced by the activity and travel
engines and consumed immediately by the reducer; results and events are
handed to the presentation layer for one turn and then discarded.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shitbox_engine.models.enums import EventType, FailureKind, StatName, TravelMode
from shitbox_engine.models.game_state import GameState, GameTime, GridPosition


class ResultModel(BaseModel):
    """Base class for immutable per-call results."""

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Inputs
# =============================================================================


class ActivityParams(ResultModel):
    """Caller-chosen parameters for an activity.

    Attributes:
        hours: Requested duration for variable-time activities.
        target_car_id: Car instance the activity acts on.
        amount: Free-form amount (deposits, negotiated prices).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    hours: float | None = None
    target_car_id: str | None = None
    amount: float | None = None

    def to_log(self) -> dict[str, Any]:
        """Compact mapping stored in the action log."""
        return self.model_dump(exclude_none=True)


# =============================================================================
# Events and Deltas
# =============================================================================


class GameEvent(ResultModel):
    """An immutable notification for the presentation layer."""

    type: EventType
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class PlayerDelta(ResultModel):
    """Proposed changes to the player.

    Energy and money are whole numbers by the time they get here; stat
    gains stay fractional until the reducer applies them.
    """

    energy: int = 0
    money: float = 0
    days_without_food: int = 0
    stats: dict[StatName, float] = Field(default_factory=dict)


class InventoryDelta(ResultModel):
    engine_parts: int = 0
    body_parts: int = 0


class TimeDelta(ResultModel):
    hours: float = 0


class StateDelta(ResultModel):
    """A proposed, not-yet-applied change to game state."""

    player: PlayerDelta = Field(default_factory=PlayerDelta)
    inventory: InventoryDelta = Field(default_factory=InventoryDelta)
    time: TimeDelta = Field(default_factory=TimeDelta)
    events: tuple[GameEvent, ...] = ()


# =============================================================================
# Validation
# =============================================================================


class ValidationResult(ResultModel):
    """Outcome of a single predicate check."""

    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> Self:
        return cls(valid=True)

    @classmethod
    def fail(cls, reason: str) -> Self:
        return cls(valid=False, reason=reason)


class ActionCheck(ResultModel):
    """Read-only answer to "can the player do this right now?"."""

    allowed: bool
    reason: str | None = None


# =============================================================================
# Activity and Travel Results
# =============================================================================


class ActivityResult(ResultModel):
    """Outcome of executing one activity.

    Attributes:
        success: Whether the activity may be committed.
        error: Human-readable rejection reason when unsuccessful.
        failure: Failure category when unsuccessful.
        delta: Proposed state change when successful.
        narrative: Text describing what happened.
    """

    success: bool
    error: str | None = None
    failure: FailureKind | None = None
    delta: StateDelta | None = None
    narrative: str = ""

    @classmethod
    def failed(cls, error: str, kind: FailureKind = FailureKind.VALIDATION) -> Self:
        """Build a rejected result."""
        return cls(success=False, error=error, failure=kind)


class TravelCost(ResultModel):
    """Estimated cost of a trip.

    Attributes:
        mode: Walk or drive.
        distance_tiles: Manhattan distance in tiles.
        distance_meters: Distance in meters.
        time_hours: Travel time in hours.
        energy_cost: Energy spent walking.
        fuel_cost: Liters burned driving.
    """

    mode: TravelMode
    distance_tiles: int
    distance_meters: float
    time_hours: float
    energy_cost: int = 0
    fuel_cost: float = 0


class TravelResult(ResultModel):
    """Outcome of a walk or drive.

    Fuel is reported out-of-band through ``car_instance_id`` and
    ``fuel_used`` because it belongs to one car in the inventory, not to
    scalar player state.
    """

    success: bool
    error: str | None = None
    failure: FailureKind | None = None
    mode: TravelMode | None = None
    new_position: GridPosition | None = None
    delta: StateDelta | None = None
    narrative: str = ""
    car_instance_id: str | None = None
    fuel_used: float = 0
    cost: TravelCost | None = None

    @classmethod
    def failed(cls, error: str, kind: FailureKind = FailureKind.VALIDATION) -> Self:
        """Build a rejected result."""
        return cls(success=False, error=error, failure=kind)


# =============================================================================
# Time System Results
# =============================================================================


class TimeAdvanceResult(ResultModel):
    new_time: GameTime
    day_changed: bool
    days_advanced: int


class NewDayResult(ResultModel):
    """Daily survival economics for one crossed day boundary.

    Attributes:
        money_change: Change in money (negative when food was bought).
        days_without_food: The new hunger counter value.
        events: Notifications raised by the rollover.
    """

    money_change: float
    days_without_food: int
    events: tuple[GameEvent, ...] = ()


class DeathCheckResult(ResultModel):
    is_dead: bool
    death_reason: str | None = None


# =============================================================================
# Session Results
# =============================================================================


class TurnResult(ResultModel):
    """Outcome of one committed (or rejected) session turn.

    Attributes:
        success: Whether the action was committed.
        error: Rejection reason when unsuccessful.
        failure: Failure category when unsuccessful.
        state: The authoritative state after the turn.
        events: Notifications raised during the turn, in order.
        narrative: Text describing what happened.
        game_over: Whether the player is dead.
        death_reason: Why the player died.
        days_advanced: Day boundaries crossed by the turn.
    """

    success: bool
    error: str | None = None
    failure: FailureKind | None = None
    state: GameState
    events: tuple[GameEvent, ...] = ()
    narrative: str = ""
    game_over: bool = False
    death_reason: str | None = None
    days_advanced: int = 0


__all__ = [
    "ActivityParams",
    "GameEvent",
    "PlayerDelta",
    "InventoryDelta",
    "TimeDelta",
    "StateDelta",
    "ValidationResult",
    "ActionCheck",
    "ActivityResult",
    "TravelCost",
    "TravelResult",
    "TimeAdvanceResult",
    "NewDayResult",
    "DeathCheckResult",
    "TurnResult",
]
