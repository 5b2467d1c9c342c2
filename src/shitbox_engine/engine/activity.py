"""Activity execution engine.

Turns one activity request into a proposed ``StateDelta`` and a narrative.
The engine reads state and static data but never changes either; the
session commits the delta. Player-facing failures come back as results
with ``success=False`` and are never raised past this module.
"""

from __future__ import annotations

from typing import assert_never

from shitbox_engine.core.logging import get_logger
from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.calculations import (
    calculate_energy_cost,
    calculate_energy_recovery,
    calculate_money_cost,
    calculate_money_earned,
    calculate_stat_gains,
    calculate_time_cost,
    format_hours,
    format_number,
    round_half_up,
)
from shitbox_engine.engine.rng import RNG
from shitbox_engine.engine.validators import (
    check_energy_available,
    check_money_available,
    check_prerequisites,
)
from shitbox_engine.models.definitions import Outcome
from shitbox_engine.models.enums import (
    EnergyType,
    EventType,
    FailureKind,
    MoneyType,
    OutcomeType,
)
from shitbox_engine.models.game_state import GameState
from shitbox_engine.models.results import (
    ActionCheck,
    ActivityParams,
    ActivityResult,
    GameEvent,
    PlayerDelta,
    StateDelta,
    TimeDelta,
)


logger = get_logger(__name__)


def execute_activity(
    state: GameState,
    activity_id: str,
    params: ActivityParams | None,
    rng: RNG,
    registry: DataRegistry,
) -> ActivityResult:
    """Execute an activity against a state snapshot.

    Steps run in a fixed order and the first failure wins: definition
    lookup, economy lookup, prerequisites, energy affordability, money
    affordability. The RNG is drawn only for earnings variance, and only
    when the variance is positive.

    Args:
        state: Current game state.
        activity_id: Activity to perform.
        params: Caller parameters.
        rng: Per-action generator.
        registry: Static game data.

    Returns:
        A successful result carrying the delta and narrative, or a failed
        result carrying the reason.
    """
    if params is None:
        params = ActivityParams()

    activity = registry.get_activity(activity_id)
    if activity is None:
        return ActivityResult.failed(f"Unknown activity: {activity_id}")

    economy = registry.economy
    if economy is None:
        return ActivityResult.failed("Economy data not loaded.", FailureKind.DATA_NOT_LOADED)

    prereq_result = check_prerequisites(state, activity.prerequisites, params)
    if not prereq_result.valid:
        return ActivityResult.failed(prereq_result.reason or "Prerequisites not met.")

    energy_cost = calculate_energy_cost(state, activity, params)
    money_cost = calculate_money_cost(state, activity, params)
    hours = calculate_time_cost(activity, params)

    energy_check = check_energy_available(state, energy_cost)
    if not energy_check.valid:
        return ActivityResult.failed(energy_check.reason or "Not enough energy.")

    money_check = check_money_available(state, money_cost)
    if not money_check.valid:
        return ActivityResult.failed(money_check.reason or "Not enough money.")

    energy_change = -energy_cost
    money_change = -money_cost

    if activity.energy.type == EnergyType.RECOVER:
        energy_change = calculate_energy_recovery(state, activity, params, economy)

    if activity.money.type == MoneyType.EARN:
        earnings = calculate_money_earned(state, activity, params)
        variance = activity.money.variance or 0
        drawn = rng.random_in_range(-variance, variance) if variance > 0 else 0
        money_change = round_half_up(earnings + drawn)

    stat_gains = calculate_stat_gains(activity, params, state.player.stats.knowledge)

    events: list[GameEvent] = []
    resets_food_counter = False
    for outcome in activity.outcomes:
        resets_food_counter |= _apply_outcome(outcome, events)
    food_counter_change = -state.player.days_without_food if resets_food_counter else 0

    delta = StateDelta(
        player=PlayerDelta(
            energy=energy_change,
            money=money_change,
            days_without_food=food_counter_change,
            stats=stat_gains,
        ),
        time=TimeDelta(hours=hours),
        events=tuple(events),
    )

    logger.debug(
        "Activity executed",
        activity=activity.id,
        energy=energy_change,
        money=money_change,
        hours=hours,
    )
    return ActivityResult(
        success=True,
        delta=delta,
        narrative=generate_narrative(activity.id, delta),
    )


def _apply_outcome(outcome: Outcome, events: list[GameEvent]) -> bool:
    """Handle one declared outcome.

    Returns:
        True when the outcome resets the hunger counter.
    """
    match outcome.type:
        case OutcomeType.RESET_FOOD_COUNTER:
            events.append(GameEvent(type=EventType.FOOD_EATEN, message="You had a meal."))
            return True
        case (
            OutcomeType.ITEMS
            | OutcomeType.SHOW_LISTINGS
            | OutcomeType.ACQUIRE_CAR
            | OutcomeType.REMOVE_CAR
            | OutcomeType.CONDITIONAL_COST
        ):
            # Not implemented yet: owned by the market and inventory systems.
            logger.debug("Outcome not implemented", outcome=outcome.type)
            return False
        case _:
            assert_never(outcome.type)


def generate_narrative(activity_id: str, delta: StateDelta) -> str:
    """Describe a completed activity.

    Eating, sleeping and waiting get dedicated text; everything else is
    phrased by its money flow.
    """
    money = delta.player.money
    energy = delta.player.energy
    hour_text = format_hours(delta.time.hours)

    match activity_id:
        case "eat":
            return f"You spent ${format_number(abs(money))} on food. (1 hour)"
        case "sleep":
            return f"You slept for {hour_text} and recovered {energy} energy."
        case "wait":
            return f"You waited for {hour_text} and recovered {energy} energy."

    if money > 0:
        return f"You earned ${format_number(money)}. ({hour_text})"
    if money < 0:
        return f"You spent ${format_number(abs(money))}. ({hour_text})"
    return f"Activity completed. ({hour_text})"


def can_perform_activity(
    state: GameState,
    activity_id: str,
    params: ActivityParams | None,
    registry: DataRegistry,
) -> ActionCheck:
    """Check whether an activity is currently possible.

    Read-only: runs the definition lookup, prerequisites and affordability
    checks without touching state or any RNG.
    """
    if params is None:
        params = ActivityParams()

    activity = registry.get_activity(activity_id)
    if activity is None:
        return ActionCheck(allowed=False, reason="Unknown activity")

    prereq_result = check_prerequisites(state, activity.prerequisites, params)
    if not prereq_result.valid:
        return ActionCheck(allowed=False, reason=prereq_result.reason)

    energy_cost = calculate_energy_cost(state, activity, params)
    if state.player.energy < energy_cost:
        return ActionCheck(allowed=False, reason=f"Need {energy_cost} energy")

    money_cost = calculate_money_cost(state, activity, params)
    if state.player.money < money_cost:
        return ActionCheck(allowed=False, reason=f"Need ${format_number(money_cost)}")

    return ActionCheck(allowed=True)


__all__ = [
    "execute_activity",
    "generate_narrative",
    "can_perform_activity",
]
