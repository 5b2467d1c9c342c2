"""Game state models for the Shitbox simulation engine.

GameState is the complete, serializable snapshot of one game. It is a tree
of frozen pydantic models: nothing in the engine mutates a state in place,
every transition builds a new instance with ``model_copy``. Only ``time``,
``player``, ``inventory``, ``history`` and ``meta`` are written by the core;
the remaining sub-states belong to later systems and must survive a
save/load round trip untouched.

Models:
    GameTime: Day/hour/minute clock.
    Player: The player's money, energy, stats and survival counter.
    Inventory: Owned cars and spare parts.
    GameState: The root snapshot.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shitbox_engine.core.constants import (
    ENGINE_VERSION,
    HOURS_PER_DAY,
    MAX_ENERGY,
    MAX_STAT_LEVEL,
    MIN_STAT_LEVEL,
)
from shitbox_engine.models.enums import ActionOutcome, HousingType, StatName


StatLevel = Annotated[
    float,
    Field(ge=MIN_STAT_LEVEL, le=MAX_STAT_LEVEL, description="Stat level (0-20, may be fractional)"),
]
Condition = Annotated[float, Field(ge=0, le=100, description="Condition percentage (0-100)")]


class StateModel(BaseModel):
    """Base class for all persisted state models."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Time and Position
# =============================================================================


class GameTime(StateModel):
    """Simulated clock.

    Attributes:
        current_day: Day number, starting at 1.
        current_hour: Hour of day (0-23).
        current_minute: Minute of hour (0-59); not advanced by the engine yet.
    """

    current_day: Annotated[int, Field(ge=1)] = Field(default=1, description="Day number")
    current_hour: Annotated[int, Field(ge=0, lt=HOURS_PER_DAY)] = Field(
        default=6,
        description="Hour of day",
    )
    current_minute: Annotated[int, Field(ge=0, le=59)] = Field(
        default=0,
        description="Minute of hour",
    )


class GridPosition(StateModel):
    """Integer tile coordinate on the town map."""

    x: int = Field(description="Column")
    y: int = Field(description="Row")


# =============================================================================
# Player
# =============================================================================


class PlayerStats(StateModel):
    """The five player stats.

    Levels accumulate fractional gains; display code rounds them.
    """

    charisma: StatLevel = 0
    mechanical: StatLevel = 0
    fitness: StatLevel = 0
    knowledge: StatLevel = 0
    driving: StatLevel = 0

    def get(self, stat: StatName | str) -> float:
        """Get a stat level by name.

        Args:
            stat: Stat to read.

        Returns:
            The current level.
        """
        return float(getattr(self, StatName(stat).value))

    def as_dict(self) -> dict[StatName, float]:
        """Return every stat keyed by StatName."""
        return {stat: self.get(stat) for stat in StatName}

    @property
    def total(self) -> float:
        """Sum of all five stats."""
        return sum(self.as_dict().values())


class Housing(StateModel):
    """Where the player lives."""

    type: HousingType = Field(default=HousingType.SHITBOX, description="Housing tier")
    property_id: str | None = Field(default=None, description="Owned or rented property")


class Player(StateModel):
    """The player character.

    Attributes:
        name: Display name.
        money: Cash on hand; may be fractional.
        energy: Current energy (0 to MAX_ENERGY).
        position: Current map tile.
        stats: Stat levels.
        licenses: Licenses held, in acquisition order.
        completed_courses: Courses finished.
        housing: Current housing.
        days_without_food: Consecutive day boundaries crossed without eating.
    """

    name: str = Field(min_length=1, description="Player name")
    money: float = Field(default=0, description="Cash on hand")
    energy: Annotated[int, Field(ge=0, le=MAX_ENERGY)] = Field(
        default=MAX_ENERGY,
        description="Current energy",
    )
    position: GridPosition = Field(
        default_factory=lambda: GridPosition(x=0, y=0),
        description="Current tile",
    )
    stats: PlayerStats = Field(default_factory=PlayerStats)
    licenses: tuple[str, ...] = Field(default=(), description="Licenses held")
    completed_courses: tuple[str, ...] = Field(default=(), description="Courses completed")
    housing: Housing = Field(default_factory=Housing)
    days_without_food: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Days since last meal",
    )

    def has_license(self, license_id: str) -> bool:
        """Check whether the player holds a license."""
        return license_id in self.licenses


# =============================================================================
# Inventory
# =============================================================================


class OwnedCar(StateModel):
    """A car instance the player owns.

    Attributes:
        instance_id: Unique id of this instance.
        car_id: Reference into static car data.
        engine_condition: Engine health; 0 means the car will not start.
        body_condition: Bodywork health.
        fuel: Liters in the tank.
        fuel_capacity: Tank size in liters.
        position: Where the car is parked.
        acquired_day: Day the car was acquired.
        acquired_price: Price paid.
    """

    instance_id: str = Field(min_length=1, description="Unique car instance id")
    car_id: str = Field(description="Static car model id")
    engine_condition: Condition = 100
    body_condition: Condition = 100
    fuel: Annotated[float, Field(ge=0)] = Field(default=0, description="Fuel in liters")
    fuel_capacity: Annotated[float, Field(gt=0)] = Field(default=40, description="Tank size")
    position: GridPosition = Field(description="Parking tile")
    acquired_day: Annotated[int, Field(ge=1)] = Field(default=1, description="Day acquired")
    acquired_price: float = Field(default=0, description="Price paid")

    @model_validator(mode="after")
    def validate_fuel_level(self) -> "OwnedCar":
        """Ensure the tank is not over-full."""
        if self.fuel > self.fuel_capacity:
            raise ValueError(
                f"fuel ({self.fuel}) exceeds fuel_capacity ({self.fuel_capacity})"
            )
        return self

    @property
    def is_working(self) -> bool:
        """A car works while its engine condition is above zero."""
        return self.engine_condition > 0


class Inventory(StateModel):
    """Owned cars and consumable parts."""

    cars: tuple[OwnedCar, ...] = Field(default=(), description="Owned cars, in acquisition order")
    engine_parts: Annotated[int, Field(ge=0)] = 0
    body_parts: Annotated[int, Field(ge=0)] = 0

    def get_car(self, instance_id: str) -> OwnedCar | None:
        """Find a car by instance id."""
        for car in self.cars:
            if car.instance_id == instance_id:
                return car
        return None


# =============================================================================
# Placeholder Sub-states (owned by future systems)
# =============================================================================


class OwnedGarage(StateModel):
    id: str
    capacity: int = 1
    value: float = 0


class OwnedWorkshop(StateModel):
    id: str
    equipment_level: int = 1
    value: float = 0


class OwnedProperty(StateModel):
    id: str
    property_id: str
    current_value: float = 0
    acquired_price: float = 0
    acquired_day: int = 1


class OwnedDealership(StateModel):
    id: str
    name: str
    reputation: float = 0
    inventory: tuple[str, ...] = ()


class Assets(StateModel):
    """Property and business holdings."""

    garage: OwnedGarage | None = None
    workshop: OwnedWorkshop | None = None
    properties: tuple[OwnedProperty, ...] = ()
    dealership: OwnedDealership | None = None


class IndexFund(StateModel):
    invested: float = 0
    pending_withdrawal: float = 0
    withdrawal_available_day: int = 0


class Loan(StateModel):
    id: str
    type: Literal["personal", "auto", "mortgage", "business"]
    principal: float
    remaining_balance: float
    apr: float
    monthly_payment: float
    missed_payments: int = 0
    collateral_id: str | None = None
    start_day: int = 1


class Finance(StateModel):
    """Bank accounts, investments and loans."""

    savings: float = 0
    index_fund: IndexFund = Field(default_factory=IndexFund)
    loans: tuple[Loan, ...] = ()


class Market(StateModel):
    """Car market listings; entries are opaque to the core."""

    current_listings: tuple[dict[str, Any], ...] = ()
    player_listings: tuple[dict[str, Any], ...] = ()
    auction_schedule: tuple[dict[str, Any], ...] = ()
    market_trends: tuple[dict[str, Any], ...] = ()


class NpcState(StateModel):
    """NPC relationships; entries are opaque to the core."""

    active_negotiations: tuple[dict[str, Any], ...] = ()
    renters: tuple[dict[str, Any], ...] = ()
    employees: tuple[dict[str, Any], ...] = ()


class NewspaperState(StateModel):
    current_day: int = 0
    content: dict[str, Any] | None = None
    purchased: bool = False


class Progression(StateModel):
    """Long-term goals and lifetime counters."""

    total_earnings: float = 0
    cars_flipped: int = 0
    road_trips_completed: int = 0
    total_engagement: int = 0
    subscribers: int = 0
    highest_car_value: float = 0
    gto_acquired: bool = False
    gto_acquired_day: int | None = None


# =============================================================================
# History and Metadata
# =============================================================================


class ActionLog(StateModel):
    """One committed player action.

    Attributes:
        timestamp: Wall-clock time in epoch milliseconds.
        day: Simulated day after the action completed.
        action: Activity id.
        params: Parameters the action was called with.
        result: Outcome tag.
    """

    timestamp: int = Field(description="Epoch milliseconds")
    day: Annotated[int, Field(ge=1)]
    action: str
    params: dict[str, Any] = Field(default_factory=dict)
    result: ActionOutcome = ActionOutcome.SUCCESS


class History(StateModel):
    """Action log ring buffer plus an uncapped action counter."""

    actions: tuple[ActionLog, ...] = Field(default=(), description="Most recent actions")
    total_actions: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Actions ever committed, including ones dropped from the buffer",
    )


class GameMeta(StateModel):
    """Save metadata.

    Attributes:
        save_id: Identifier the persistence layer keys the save by.
        version: Engine version that created the save.
        created_at: Creation time in epoch milliseconds.
        last_saved_at: Last snapshot time in epoch milliseconds.
        rng_seed: Session seed (32-bit unsigned).
        is_game_over: Set once the player has died.
        death_reason: Why the player died.
    """

    save_id: str
    version: str = ENGINE_VERSION
    created_at: int = 0
    last_saved_at: int = 0
    rng_seed: Annotated[int, Field(ge=0, le=0xFFFFFFFF)]
    is_game_over: bool = False
    death_reason: str | None = None


class GameState(StateModel):
    """The complete game state.

    This is the single source of truth for one game. The session
    orchestrator holds exactly one current instance and replaces it on
    every committed transition.
    """

    meta: GameMeta
    time: GameTime = Field(default_factory=GameTime)
    player: Player
    inventory: Inventory = Field(default_factory=Inventory)
    assets: Assets = Field(default_factory=Assets)
    finance: Finance = Field(default_factory=Finance)
    market: Market = Field(default_factory=Market)
    npcs: NpcState = Field(default_factory=NpcState)
    newspaper: NewspaperState = Field(default_factory=NewspaperState)
    progression: Progression = Field(default_factory=Progression)
    history: History = Field(default_factory=History)


__all__ = [
    "StatLevel",
    "GameTime",
    "GridPosition",
    "PlayerStats",
    "Housing",
    "Player",
    "OwnedCar",
    "Inventory",
    "OwnedGarage",
    "OwnedWorkshop",
    "OwnedProperty",
    "OwnedDealership",
    "Assets",
    "IndexFund",
    "Loan",
    "Finance",
    "Market",
    "NpcState",
    "NewspaperState",
    "Progression",
    "ActionLog",
    "History",
    "GameMeta",
    "GameState",
]
