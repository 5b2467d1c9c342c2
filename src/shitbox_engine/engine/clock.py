"""Time advancement, daily survival economics and death checks.

Example:
    >>> result = advance_time(GameTime(current_day=1, current_hour=22), 5)
    >>> (result.new_time.current_day, result.new_time.current_hour)
    (2, 3)
"""

from __future__ import annotations

import math

from shitbox_engine.core.constants import HOURS_PER_DAY
from shitbox_engine.core.logging import get_logger
from shitbox_engine.engine.calculations import format_number
from shitbox_engine.models.definitions import EconomyConfig
from shitbox_engine.models.enums import EventType, TimeOfDay
from shitbox_engine.models.game_state import GameState, GameTime
from shitbox_engine.models.results import DeathCheckResult, GameEvent, NewDayResult, TimeAdvanceResult


logger = get_logger(__name__)


def advance_time(current: GameTime, hours: float) -> TimeAdvanceResult:
    """Advance the clock, rolling hours over into days.

    The hour is floored after normalisation; minutes pass through
    unchanged.

    Args:
        current: Clock before the action.
        hours: Hours to add (may be fractional).

    Returns:
        The new clock and how many day boundaries were crossed.
    """
    day = current.current_day
    hour = current.current_hour + hours
    days_advanced = 0
    while hour >= HOURS_PER_DAY:
        hour -= HOURS_PER_DAY
        day += 1
        days_advanced += 1

    return TimeAdvanceResult(
        new_time=GameTime(
            current_day=day,
            current_hour=math.floor(hour),
            current_minute=current.current_minute,
        ),
        day_changed=days_advanced > 0,
        days_advanced=days_advanced,
    )


def process_new_day(state: GameState, economy: EconomyConfig, *, day: int) -> NewDayResult:
    """Apply one day boundary's survival economics.

    A player who can afford food buys it automatically and the hunger
    counter resets. Otherwise the counter grows by one and a warning
    escalates as death approaches.

    Args:
        state: State at the moment the boundary is crossed.
        economy: Economy configuration.
        day: The day that is beginning.

    Returns:
        Money change, new hunger counter and events.
    """
    survival = economy.survival
    events = [GameEvent(type=EventType.NEW_DAY, message=f"Day {day} begins.")]

    if state.player.money >= survival.daily_food_cost:
        events.append(
            GameEvent(
                type=EventType.FOOD_PURCHASED,
                message=f"You bought food for ${format_number(survival.daily_food_cost)}.",
                data={"cost": survival.daily_food_cost},
            )
        )
        return NewDayResult(
            money_change=-survival.daily_food_cost,
            days_without_food=0,
            events=tuple(events),
        )

    days_without_food = state.player.days_without_food + 1
    days_until_death = survival.days_without_food_until_death - days_without_food
    data = {"days_without_food": days_without_food}

    if days_until_death <= 0:
        events.append(
            GameEvent(
                type=EventType.DEATH_IMMINENT,
                message="You are starving! You will die if you do not eat.",
                data=data,
            )
        )
    elif days_until_death == 1:
        events.append(
            GameEvent(
                type=EventType.HUNGER_CRITICAL,
                message=f"You haven't eaten in {days_without_food} day(s). Eat tomorrow or die!",
                data=data,
            )
        )
    else:
        events.append(
            GameEvent(
                type=EventType.HUNGER_WARNING,
                message=f"You need to eat. Food costs ${format_number(survival.daily_food_cost)}.",
                data=data,
            )
        )

    logger.debug("Day processed hungry", day=day, days_without_food=days_without_food)
    return NewDayResult(money_change=0, days_without_food=days_without_food, events=tuple(events))


def check_death_conditions(state: GameState, economy: EconomyConfig) -> DeathCheckResult:
    """Check whether the player has died.

    Starvation is the only cause so far.
    """
    days = state.player.days_without_food
    if days >= economy.survival.days_without_food_until_death:
        return DeathCheckResult(
            is_dead=True,
            death_reason=f"You starved to death after {days} days without food.",
        )
    return DeathCheckResult(is_dead=False)


# =============================================================================
# Display Helpers
# =============================================================================


def get_time_of_day(hour: int) -> TimeOfDay:
    if 6 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 18:
        return TimeOfDay.AFTERNOON
    if 18 <= hour < 22:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def format_time(time: GameTime) -> str:
    """Render the clock as ``HH:MM``."""
    return f"{time.current_hour:02d}:{time.current_minute:02d}"


def get_time_description(time: GameTime) -> str:
    """Render e.g. ``Day 3, 14:00 (afternoon)``."""
    return f"Day {time.current_day}, {format_time(time)} ({get_time_of_day(time.current_hour)})"


__all__ = [
    "advance_time",
    "process_new_day",
    "check_death_conditions",
    "get_time_of_day",
    "format_time",
    "get_time_description",
]
