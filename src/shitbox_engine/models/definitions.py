"""Static game data models: activities, economy tuning and the town map.

These describe the read-only rules the engine consumes. They are produced
by the data-access collaborator from the JSON data files, so every model
accepts the files' camelCase keys (``minHours``, ``statGain``) while
exposing snake_case attributes to Python code. Unknown keys are ignored;
schema checking of the data files happens offline.

Example:
    >>> ActivityDefinition.model_validate({
    ...     "id": "eat", "name": "Eat",
    ...     "time": {"type": "fixed", "hours": 1},
    ...     "energy": {"type": "none"},
    ...     "money": {"type": "spend", "mode": "fixed", "base": 20},
    ...     "outcomes": [{"type": "resetFoodCounter"}],
    ... })
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shitbox_engine.models.enums import (
    EnergyType,
    LocationCategory,
    MoneyMode,
    MoneyType,
    OutcomeType,
    PrerequisiteType,
    Region,
    StatEffect,
    StatGainPer,
    StatName,
    TimeType,
)
from shitbox_engine.models.game_state import GridPosition


class DefinitionModel(BaseModel):
    """Base class for read-only data-file models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# Activity Definitions
# =============================================================================


class ValueRange(DefinitionModel):
    """Inclusive numeric range."""

    min: float
    max: float


class StatModifier(DefinitionModel):
    """A stat that scales an activity's energy or money."""

    stat: StatName
    effect: StatEffect
    formula: str = ""


class TimeDefinition(DefinitionModel):
    """How long an activity takes.

    Fixed activities take ``hours``; variable ones take a caller-chosen
    duration clamped to ``[min_hours, max_hours]``.
    """

    type: TimeType
    hours: float | None = None
    min_hours: float | None = None
    max_hours: float | None = None
    unit: str | None = None


class EnergyDefinition(DefinitionModel):
    """How an activity affects energy."""

    type: EnergyType
    base: float | None = None
    mode: str | None = None
    stat_modifier: StatModifier | None = None
    housing_modifier: bool = False


class MoneyDefinition(DefinitionModel):
    """How an activity affects money."""

    type: MoneyType
    mode: MoneyMode | None = None
    base: float | None = None
    variance: float | None = None
    formula: str | None = None
    stat_modifier: StatModifier | None = None


class Prerequisite(DefinitionModel):
    """A precondition that must hold before an activity may run."""

    type: PrerequisiteType
    minimum: float | str | None = None
    stat: StatName | None = None
    requirement: str | None = None
    item_type: str | None = None


class Outcome(DefinitionModel):
    """A declared side effect of an activity."""

    type: OutcomeType
    item_type: str | None = None
    quantity: ValueRange | None = None
    stat_modifier: StatModifier | None = None
    listing_type: str | None = None
    price_range: ValueRange | None = None
    source: str | None = None
    condition: str | None = None
    cost: ValueRange | None = None
    description: str | None = None
    value: float | None = None


class StatGain(DefinitionModel):
    """Stat experience granted by an activity."""

    stat: StatName
    amount: float
    per: StatGainPer = StatGainPer.ACTIVITY


class Risk(DefinitionModel):
    type: str
    chance: Annotated[float, Field(ge=0, le=1)]
    consequence: str


class ActivityDefinition(DefinitionModel):
    """Declarative rules for one player activity.

    Attributes:
        id: Unique activity id.
        name: Display name.
        time: Duration rules.
        energy: Energy rules.
        money: Money rules.
        prerequisites: Checked in declared order; the first failure wins.
        outcomes: Side effects applied on success.
        stat_gain: Stat experience granted.
        risks: Declared risks (not simulated by the core yet).
    """

    id: str = Field(min_length=1)
    name: str = ""
    description: str = ""
    category: str = ""
    time: TimeDefinition
    energy: EnergyDefinition
    money: MoneyDefinition
    prerequisites: tuple[Prerequisite, ...] = ()
    outcomes: tuple[Outcome, ...] = ()
    stat_gain: tuple[StatGain, ...] = ()
    risks: tuple[Risk, ...] = ()
    confirmation_required: bool = False
    confirmation_message: str | None = None


class ActivityFile(DefinitionModel):
    """Contents of one ``activities/<location>.json`` data file."""

    location_id: str
    location_name: str = ""
    activities: tuple[ActivityDefinition, ...] = ()


# =============================================================================
# Economy Configuration
# =============================================================================


class ResourcesConfig(DefinitionModel):
    max_energy: int = 100
    starting_money: float = 0
    starting_stat_points: int = 10


class SurvivalConfig(DefinitionModel):
    """Daily food economics."""

    daily_food_cost: Annotated[float, Field(ge=0)]
    days_without_food_until_death: Annotated[int, Field(ge=1)]


class RestConfig(DefinitionModel):
    """Energy recovered per hour of rest, by housing tier."""

    shitbox_energy_per_hour: float
    basic_apartment_energy_per_hour: float
    nice_apartment_energy_per_hour: float = 0
    owned_home_energy_per_hour: float
    light_rest_energy_per_hour: float = 0


class FitnessEffects(DefinitionModel):
    energy_cost_reduction_per_point: float = 0.02
    rest_efficiency_bonus_per_point: float = 0.02
    labor_output_bonus_per_point: float = 0


class StatEffectsConfig(DefinitionModel):
    """Per-point stat effects. Only fitness is consumed by the core."""

    charisma: dict[str, float] = Field(default_factory=dict)
    mechanical: dict[str, float] = Field(default_factory=dict)
    fitness: FitnessEffects = Field(default_factory=FitnessEffects)
    knowledge: dict[str, float] = Field(default_factory=dict)
    driving: dict[str, float] = Field(default_factory=dict)


class EconomyConfig(DefinitionModel):
    """Global tunable constants.

    Sections the core does not read yet (housing, bank, fines...) are kept
    as plain mappings so later systems can type them.
    """

    version: str = "1.0"
    resources: ResourcesConfig = Field(default_factory=ResourcesConfig)
    survival: SurvivalConfig
    rest: RestConfig
    stat_effects: StatEffectsConfig = Field(default_factory=StatEffectsConfig)
    housing: dict[str, Any] = Field(default_factory=dict)
    parking: dict[str, Any] = Field(default_factory=dict)
    newspaper: dict[str, Any] = Field(default_factory=dict)
    ads: dict[str, Any] = Field(default_factory=dict)
    bank: dict[str, Any] = Field(default_factory=dict)
    fines: dict[str, Any] = Field(default_factory=dict)
    commissions: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Map
# =============================================================================


class LocationDefinition(DefinitionModel):
    """A named place on the town map."""

    id: str
    name: str
    description: str = ""
    summary: tuple[str, ...] = ()
    icon: str = ""
    category: LocationCategory = LocationCategory.COMMERCIAL
    region: Region = Region.CENTRAL
    position: GridPosition
    entry_point: GridPosition | None = None
    address: str = ""
    activities_file: str | None = None

    @property
    def arrival_point(self) -> GridPosition:
        """Tile a traveller arrives at; the entry point when one is declared."""
        return self.entry_point or self.position


class MapData(DefinitionModel):
    """Town geometry and travel tuning.

    Attributes:
        grid_size: The map is a grid_size x grid_size square of tiles.
        meters_per_tile: Real-world length of one tile edge.
        walk_speed: Walking speed in km/h.
        drive_speed: Driving speed in km/h.
        tow_cost: Price of a tow to the parking lot.
    """

    version: str = "1.0"
    town_name: str = ""
    grid_size: Annotated[int, Field(gt=0)]
    meters_per_tile: Annotated[float, Field(gt=0)]
    walk_speed: Annotated[float, Field(gt=0)]
    drive_speed: Annotated[float, Field(gt=0)]
    tow_cost: float = 0
    regions: tuple[Region, ...] = tuple(Region)
    locations: tuple[LocationDefinition, ...] = ()

    def contains(self, position: GridPosition) -> bool:
        """Check whether a tile lies on the map."""
        return 0 <= position.x < self.grid_size and 0 <= position.y < self.grid_size


__all__ = [
    "ValueRange",
    "StatModifier",
    "TimeDefinition",
    "EnergyDefinition",
    "MoneyDefinition",
    "Prerequisite",
    "Outcome",
    "StatGain",
    "Risk",
    "ActivityDefinition",
    "ActivityFile",
    "ResourcesConfig",
    "SurvivalConfig",
    "RestConfig",
    "FitnessEffects",
    "StatEffectsConfig",
    "EconomyConfig",
    "LocationDefinition",
    "MapData",
]
