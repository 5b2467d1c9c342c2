"""Enumeration types for the Shitbox simulation engine.

Values that appear in external data files (activity definitions, the map)
keep the exact spelling used there, so definitions validate without any
translation layer.
"""

from __future__ import annotations

from enum import StrEnum


class StatName(StrEnum):
    """The five player stats."""

    CHARISMA = "charisma"
    MECHANICAL = "mechanical"
    FITNESS = "fitness"
    KNOWLEDGE = "knowledge"
    DRIVING = "driving"

    @property
    def display_name(self) -> str:
        """Get the capitalized stat name for display."""
        return self.value.capitalize()


class HousingType(StrEnum):
    """Where the player sleeps, which drives rest recovery."""

    SHITBOX = "shitbox"
    RENTING = "renting"
    OWNING = "owning"


class EventType(StrEnum):
    """Kinds of per-turn notifications emitted to the presentation layer."""

    FOOD_EATEN = "food_eaten"
    FOOD_PURCHASED = "food_purchased"
    NEW_DAY = "new_day"
    HUNGER_WARNING = "hunger_warning"
    HUNGER_CRITICAL = "hunger_critical"
    DEATH_IMMINENT = "death_imminent"
    DEATH = "death"


# =============================================================================
# Activity Definition Enums
# =============================================================================


class PrerequisiteType(StrEnum):
    """Kinds of precondition an activity can declare."""

    MONEY = "money"
    STAT = "stat"
    ITEM = "item"
    LICENSE = "license"
    OWNERSHIP = "ownership"
    CONTEXT = "context"


class OutcomeType(StrEnum):
    """Closed set of activity outcome kinds.

    Only RESET_FOOD_COUNTER changes state today; the activity engine
    handles every member explicitly.
    """

    ITEMS = "items"
    SHOW_LISTINGS = "showListings"
    ACQUIRE_CAR = "acquireCar"
    REMOVE_CAR = "removeCar"
    CONDITIONAL_COST = "conditionalCost"
    RESET_FOOD_COUNTER = "resetFoodCounter"


class TimeType(StrEnum):
    """How an activity's duration is determined."""

    FIXED = "fixed"
    VARIABLE = "variable"


class EnergyType(StrEnum):
    """How an activity affects energy."""

    FIXED = "fixed"
    PER_HOUR = "perHour"
    RECOVER = "recover"
    NONE = "none"


class MoneyType(StrEnum):
    """Direction of an activity's money flow."""

    EARN = "earn"
    SPEND = "spend"
    NONE = "none"


class MoneyMode(StrEnum):
    """How an activity's money amount is computed."""

    FIXED = "fixed"
    PER_HOUR = "perHour"
    NEGOTIATED = "negotiated"
    CAR_SCRAP_VALUE = "carScrapValue"


class StatEffect(StrEnum):
    """Direction of a stat modifier."""

    REDUCE = "reduce"
    INCREASE = "increase"
    INCREASE_MAX = "increaseMax"


class StatGainPer(StrEnum):
    """Whether a stat gain is granted per hour or once per activity."""

    HOUR = "hour"
    ACTIVITY = "activity"


# =============================================================================
# Map Enums
# =============================================================================


class Region(StrEnum):
    """Town regions."""

    CENTRAL = "Central"
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"


class LocationCategory(StrEnum):
    """Location categories shown on the map."""

    INDUSTRIAL = "Industrial"
    COMMERCIAL = "Commercial"
    RESIDENTIAL = "Residential"
    PARKING = "Parking"


class TravelMode(StrEnum):
    """How the player moves between tiles."""

    WALK = "walk"
    DRIVE = "drive"


# =============================================================================
# Result Enums
# =============================================================================


class ActionOutcome(StrEnum):
    """Outcome tag recorded in the action log."""

    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(StrEnum):
    """Why a turn was rejected.

    VALIDATION covers everything the player can fix (money, energy,
    prerequisites, fuel); DATA_NOT_LOADED means static game data is missing.
    """

    VALIDATION = "validation"
    DATA_NOT_LOADED = "data_not_loaded"
    GAME_OVER = "game_over"


class TimeOfDay(StrEnum):
    """Coarse time-of-day buckets for narrative text."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


__all__ = [
    "StatName",
    "HousingType",
    "EventType",
    "PrerequisiteType",
    "OutcomeType",
    "TimeType",
    "EnergyType",
    "MoneyType",
    "MoneyMode",
    "StatEffect",
    "StatGainPer",
    "Region",
    "LocationCategory",
    "TravelMode",
    "ActionOutcome",
    "FailureKind",
    "TimeOfDay",
]
