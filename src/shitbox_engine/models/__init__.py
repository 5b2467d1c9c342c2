"""Pydantic V2 schemas for the Shitbox simulation engine.

Submodules:
    enums: Enumeration types (StatName, EventType, OutcomeType, etc.)
    game_state: Persisted game state (GameState, Player, Inventory, History)
    definitions: Read-only static data (ActivityDefinition, EconomyConfig, MapData)
    results: Transient per-call values (StateDelta, ActivityResult, TurnResult)

Example:
    >>> from shitbox_engine.models import GameState, GameMeta, Player
    >>> state = GameState(
    ...     meta=GameMeta(save_id="demo", rng_seed=42),
    ...     player=Player(name="Rusty"),
    ... )
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from shitbox_engine.models.enums import (
    ActionOutcome,
    EnergyType,
    EventType,
    FailureKind,
    HousingType,
    LocationCategory,
    MoneyMode,
    MoneyType,
    OutcomeType,
    PrerequisiteType,
    Region,
    StatEffect,
    StatGainPer,
    StatName,
    TimeOfDay,
    TimeType,
    TravelMode,
)

# =============================================================================
# Game State
# =============================================================================
from shitbox_engine.models.game_state import (
    ActionLog,
    Assets,
    Finance,
    GameMeta,
    GameState,
    GameTime,
    GridPosition,
    History,
    Housing,
    Inventory,
    Market,
    NewspaperState,
    NpcState,
    OwnedCar,
    Player,
    PlayerStats,
    Progression,
)

# =============================================================================
# Static Definitions
# =============================================================================
from shitbox_engine.models.definitions import (
    ActivityDefinition,
    ActivityFile,
    EconomyConfig,
    EnergyDefinition,
    LocationDefinition,
    MapData,
    MoneyDefinition,
    Outcome,
    Prerequisite,
    Risk,
    StatGain,
    StatModifier,
    TimeDefinition,
)

# =============================================================================
# Results
# =============================================================================
from shitbox_engine.models.results import (
    ActionCheck,
    ActivityParams,
    ActivityResult,
    DeathCheckResult,
    GameEvent,
    InventoryDelta,
    NewDayResult,
    PlayerDelta,
    StateDelta,
    TimeAdvanceResult,
    TimeDelta,
    TravelCost,
    TravelResult,
    TurnResult,
    ValidationResult,
)


__all__ = [
    # Enums
    "ActionOutcome",
    "EnergyType",
    "EventType",
    "FailureKind",
    "HousingType",
    "LocationCategory",
    "MoneyMode",
    "MoneyType",
    "OutcomeType",
    "PrerequisiteType",
    "Region",
    "StatEffect",
    "StatGainPer",
    "StatName",
    "TimeOfDay",
    "TimeType",
    "TravelMode",
    # Game state
    "ActionLog",
    "Assets",
    "Finance",
    "GameMeta",
    "GameState",
    "GameTime",
    "GridPosition",
    "History",
    "Housing",
    "Inventory",
    "Market",
    "NewspaperState",
    "NpcState",
    "OwnedCar",
    "Player",
    "PlayerStats",
    "Progression",
    # Definitions
    "ActivityDefinition",
    "ActivityFile",
    "EconomyConfig",
    "EnergyDefinition",
    "LocationDefinition",
    "MapData",
    "MoneyDefinition",
    "Outcome",
    "Prerequisite",
    "Risk",
    "StatGain",
    "StatModifier",
    "TimeDefinition",
    # Results
    "ActionCheck",
    "ActivityParams",
    "ActivityResult",
    "DeathCheckResult",
    "GameEvent",
    "InventoryDelta",
    "NewDayResult",
    "PlayerDelta",
    "StateDelta",
    "TimeAdvanceResult",
    "TimeDelta",
    "TravelCost",
    "TravelResult",
    "TurnResult",
    "ValidationResult",
]
