"""Activity cost and reward calculations.

Pure functions computing energy, money, time and stat effects from an
activity definition, the current state and the caller's parameters.
Energy and money results are whole numbers; stat gains stay fractional
until ``apply_stat_gains`` clamps them, which itself never rounds.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from shitbox_engine.core.constants import (
    EARNINGS_STAT_BONUS_PER_POINT,
    FITNESS_ENERGY_REDUCTION_PER_POINT,
    FITNESS_REST_BONUS_PER_POINT,
    KNOWLEDGE_STAT_GAIN_BONUS_PER_POINT,
    MAX_ENERGY,
    MAX_STAT_LEVEL,
    MIN_STAT_LEVEL,
)
from shitbox_engine.core.logging import get_logger
from shitbox_engine.models.definitions import ActivityDefinition, EconomyConfig
from shitbox_engine.models.enums import (
    EnergyType,
    HousingType,
    MoneyMode,
    MoneyType,
    StatEffect,
    StatGainPer,
    StatName,
    TimeType,
)
from shitbox_engine.models.game_state import GameState, PlayerStats
from shitbox_engine.models.results import ActivityParams


logger = get_logger(__name__)

DEFAULT_ACTIVITY_HOURS = 1.0
DEFAULT_MAX_HOURS = 12.0


# =============================================================================
# Numeric Helpers
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going toward +infinity.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); game
    balance expects ``2.5 -> 3`` and ``-2.5 -> -2``.
    """
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` when it is whole."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_hours(hours: float) -> str:
    """Render a duration like ``1 hour`` or ``8 hours``."""
    return "1 hour" if hours == 1 else f"{format_number(hours)} hours"


# =============================================================================
# Time
# =============================================================================


def get_activity_hours(activity: ActivityDefinition, params: ActivityParams) -> float:
    """Get an activity's duration in hours.

    Fixed activities use their declared hours (default 1). Variable ones
    clamp the requested hours into ``[min_hours, max_hours]`` and default
    to ``min_hours`` when nothing was requested.
    """
    time_def = activity.time
    if time_def.type == TimeType.FIXED:
        return time_def.hours if time_def.hours is not None else DEFAULT_ACTIVITY_HOURS

    min_hours = time_def.min_hours if time_def.min_hours is not None else DEFAULT_ACTIVITY_HOURS
    if params.hours is None:
        return min_hours

    max_hours = time_def.max_hours if time_def.max_hours is not None else DEFAULT_MAX_HOURS
    return max(min_hours, min(max_hours, params.hours))


def calculate_time_cost(activity: ActivityDefinition, params: ActivityParams) -> float:
    return get_activity_hours(activity, params)


# =============================================================================
# Energy
# =============================================================================


def calculate_energy_cost(
    state: GameState,
    activity: ActivityDefinition,
    params: ActivityParams,
) -> int:
    """Calculate the energy an activity consumes.

    Each fitness point reduces the cost by 2%. Rest and no-energy
    activities cost nothing.

    Args:
        state: Current game state.
        activity: Activity definition.
        params: Caller parameters.

    Returns:
        Non-negative whole energy cost.
    """
    energy = activity.energy
    if energy.type in (EnergyType.NONE, EnergyType.RECOVER):
        return 0

    base_cost = energy.base or 0
    if energy.type == EnergyType.PER_HOUR:
        base_cost *= get_activity_hours(activity, params)

    fitness_reduction = state.player.stats.fitness * FITNESS_ENERGY_REDUCTION_PER_POINT
    return max(0, round_half_up(base_cost * (1 - fitness_reduction)))


def get_rest_energy_per_hour(housing: HousingType, economy: EconomyConfig) -> float:
    """Look up the rest recovery rate for a housing tier.

    Renting uses the basic apartment rate.
    """
    rest = economy.rest
    match housing:
        case HousingType.SHITBOX:
            return rest.shitbox_energy_per_hour
        case HousingType.RENTING:
            return rest.basic_apartment_energy_per_hour
        case HousingType.OWNING:
            return rest.owned_home_energy_per_hour
    return rest.shitbox_energy_per_hour


def calculate_energy_recovery(
    state: GameState,
    activity: ActivityDefinition,
    params: ActivityParams,
    economy: EconomyConfig,
) -> int:
    """Calculate the energy a rest activity restores.

    The hourly rate is the activity's base, or the housing rate when the
    activity declares a housing modifier. Each fitness point adds 2% to
    the rate. The total never pushes energy above MAX_ENERGY.

    Returns:
        Whole energy to add; 0 for non-rest activities.
    """
    energy = activity.energy
    if energy.type != EnergyType.RECOVER:
        return 0

    rate_per_hour = energy.base or 0
    if energy.housing_modifier:
        rate_per_hour = get_rest_energy_per_hour(state.player.housing.type, economy)

    fitness_bonus = state.player.stats.fitness * FITNESS_REST_BONUS_PER_POINT
    recovery = rate_per_hour * (1 + fitness_bonus) * get_activity_hours(activity, params)

    return min(round_half_up(recovery), MAX_ENERGY - state.player.energy)


# =============================================================================
# Money
# =============================================================================


def calculate_money_cost(
    state: GameState,
    activity: ActivityDefinition,
    params: ActivityParams,
) -> int:
    """Calculate what a spend activity costs.

    Negotiated and car-value prices are resolved outside the core and
    cost 0 here.
    """
    money = activity.money
    if money.type != MoneyType.SPEND:
        return 0

    base = money.base or 0
    if money.mode == MoneyMode.FIXED:
        return round_half_up(base)
    if money.mode == MoneyMode.PER_HOUR:
        return round_half_up(base * get_activity_hours(activity, params))
    return 0


def calculate_money_earned(
    state: GameState,
    activity: ActivityDefinition,
    params: ActivityParams,
) -> int:
    """Calculate what an earn activity pays, before variance.

    Variance is drawn later by the activity engine so only the variance
    draw consumes RNG state.
    """
    money = activity.money
    if money.type != MoneyType.EARN:
        return 0

    earnings = money.base or 0
    if money.mode == MoneyMode.PER_HOUR:
        earnings *= get_activity_hours(activity, params)

    modifier = money.stat_modifier
    if modifier is not None and modifier.effect == StatEffect.INCREASE:
        earnings *= 1 + state.player.stats.get(modifier.stat) * EARNINGS_STAT_BONUS_PER_POINT

    return round_half_up(earnings)


# =============================================================================
# Stats
# =============================================================================


def calculate_stat_gains(
    activity: ActivityDefinition,
    params: ActivityParams,
    knowledge_level: float,
) -> dict[StatName, float]:
    """Calculate unrounded stat gains.

    Each knowledge point adds 3% to every gain. Several entries for the
    same stat add up.

    Args:
        activity: Activity definition.
        params: Caller parameters.
        knowledge_level: The player's knowledge stat.

    Returns:
        Gain per stat; empty when the activity grants none.
    """
    gains: dict[StatName, float] = {}
    if not activity.stat_gain:
        return gains

    hours = get_activity_hours(activity, params)
    multiplier = 1 + knowledge_level * KNOWLEDGE_STAT_GAIN_BONUS_PER_POINT

    for stat_gain in activity.stat_gain:
        amount = stat_gain.amount
        if stat_gain.per == StatGainPer.HOUR:
            amount *= hours
        gains[stat_gain.stat] = gains.get(stat_gain.stat, 0.0) + amount * multiplier

    return gains


def apply_stat_gains(
    stats: PlayerStats,
    gains: Mapping[StatName, float],
    max_level: float = MAX_STAT_LEVEL,
) -> PlayerStats:
    """Add gains to stats, clamping each to ``[0, max_level]`` without rounding."""
    if not gains:
        return stats

    updates = {
        stat.value: min(max_level, max(MIN_STAT_LEVEL, stats.get(stat) + gain))
        for stat, gain in gains.items()
    }
    return stats.model_copy(update=updates)


__all__ = [
    "round_half_up",
    "format_number",
    "format_hours",
    "get_activity_hours",
    "calculate_time_cost",
    "calculate_energy_cost",
    "get_rest_energy_per_hour",
    "calculate_energy_recovery",
    "calculate_money_cost",
    "calculate_money_earned",
    "calculate_stat_gains",
    "apply_stat_gains",
]
