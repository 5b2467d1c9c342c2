"""Tests for time advancement and daily survival."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.clock import (
    advance_time,
    check_death_conditions,
    format_time,
    get_time_description,
    get_time_of_day,
    process_new_day,
)
from shitbox_engine.engine.reducer import apply_new_day
from shitbox_engine.models.enums import EventType, TimeOfDay
from shitbox_engine.models.game_state import GameState, GameTime


class TestAdvanceTime:
    """Tests for clock rollover."""

    def test_same_day(self) -> None:
        """Short durations stay on the same day."""
        result = advance_time(GameTime(current_day=1, current_hour=6), 8)

        assert result.new_time == GameTime(current_day=1, current_hour=14)
        assert not result.day_changed
        assert result.days_advanced == 0

    def test_crosses_midnight(self) -> None:
        """22:00 plus five hours is 03:00 the next day."""
        result = advance_time(GameTime(current_day=1, current_hour=22), 5)

        assert result.new_time.current_day == 2
        assert result.new_time.current_hour == 3
        assert result.day_changed
        assert result.days_advanced == 1

    def test_multiple_days(self) -> None:
        """Fifty hours from midnight spans two boundaries."""
        result = advance_time(GameTime(current_day=1, current_hour=0), 50)

        assert result.new_time.current_day == 3
        assert result.new_time.current_hour == 2
        assert result.days_advanced == 2

    def test_exactly_midnight(self) -> None:
        """Landing on midnight counts as a new day."""
        result = advance_time(GameTime(current_day=4, current_hour=20), 4)

        assert result.new_time == GameTime(current_day=5, current_hour=0)
        assert result.days_advanced == 1

    def test_fractional_hours_floor(self) -> None:
        """Fractional results are floored."""
        result = advance_time(GameTime(current_day=1, current_hour=6), 0.76)

        assert result.new_time.current_hour == 6

    def test_minutes_preserved(self) -> None:
        """Minutes pass through unchanged."""
        start = GameTime(current_day=1, current_hour=6, current_minute=30)
        assert advance_time(start, 2).new_time.current_minute == 30


class TestProcessNewDay:
    """Tests for daily economics."""

    def test_food_bought_when_affordable(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Affordable food is bought automatically."""
        result = process_new_day(
            make_state(money=50, days_without_food=2), registry.require_economy(), day=2
        )

        assert result.money_change == -20
        assert result.days_without_food == 0
        assert [event.type for event in result.events] == [
            EventType.NEW_DAY,
            EventType.FOOD_PURCHASED,
        ]
        assert result.events[0].message == "Day 2 begins."
        assert result.events[1].message == "You bought food for $20."
        assert result.events[1].data == {"cost": 20}

    def test_exactly_affordable(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Money equal to the food cost is enough."""
        result = process_new_day(make_state(money=20), registry.require_economy(), day=2)
        assert result.money_change == -20

    def test_hunger_warning(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Far from death a plain warning is raised."""
        result = process_new_day(make_state(money=10), registry.require_economy(), day=2)

        assert result.money_change == 0
        assert result.days_without_food == 1
        warning = result.events[-1]
        assert warning.type == EventType.HUNGER_WARNING
        assert warning.message == "You need to eat. Food costs $20."
        assert warning.data == {"days_without_food": 1}

    def test_hunger_critical(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """One day from death the warning becomes critical."""
        result = process_new_day(
            make_state(days_without_food=3), registry.require_economy(), day=5
        )

        assert result.days_without_food == 4
        assert result.events[-1].type == EventType.HUNGER_CRITICAL
        assert result.events[-1].message == "You haven't eaten in 4 day(s). Eat tomorrow or die!"

    def test_death_imminent(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Reaching the limit raises the final warning."""
        result = process_new_day(
            make_state(days_without_food=4), registry.require_economy(), day=6
        )

        assert result.days_without_food == 5
        assert result.events[-1].type == EventType.DEATH_IMMINENT

    def test_starvation_sequence(
        self,
        state: GameState,
        registry: DataRegistry,
    ) -> None:
        """A broke player escalates through every stage and dies on day five."""
        economy = registry.require_economy()
        seen = []
        current = state
        for day in range(2, 7):
            result = process_new_day(current, economy, day=day)
            current = apply_new_day(current, result)
            seen.append(result.events[-1].type)

        assert seen == [
            EventType.HUNGER_WARNING,
            EventType.HUNGER_WARNING,
            EventType.HUNGER_WARNING,
            EventType.HUNGER_CRITICAL,
            EventType.DEATH_IMMINENT,
        ]
        assert current.player.days_without_food == 5
        assert check_death_conditions(current, economy).is_dead


class TestDeathConditions:
    """Tests for the death check."""

    def test_alive_below_limit(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """One day short of the limit is survivable."""
        result = check_death_conditions(make_state(days_without_food=4), registry.require_economy())

        assert not result.is_dead
        assert result.death_reason is None

    def test_starved(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Reaching the limit is fatal."""
        result = check_death_conditions(make_state(days_without_food=5), registry.require_economy())

        assert result.is_dead
        assert result.death_reason == "You starved to death after 5 days without food."


class TestDisplay:
    """Tests for clock display helpers."""

    @pytest.mark.parametrize(
        ("hour", "expected"),
        [
            (6, TimeOfDay.MORNING),
            (11, TimeOfDay.MORNING),
            (12, TimeOfDay.AFTERNOON),
            (17, TimeOfDay.AFTERNOON),
            (18, TimeOfDay.EVENING),
            (22, TimeOfDay.NIGHT),
            (3, TimeOfDay.NIGHT),
        ],
    )
    def test_time_of_day(self, hour: int, expected: TimeOfDay) -> None:
        """Hours map onto four periods."""
        assert get_time_of_day(hour) == expected

    def test_format_time(self) -> None:
        """Clock renders zero-padded."""
        assert format_time(GameTime(current_day=3, current_hour=7, current_minute=5)) == "07:05"

    def test_time_description(self) -> None:
        """Description combines day, clock and period."""
        time = GameTime(current_day=3, current_hour=14)
        assert get_time_description(time) == "Day 3, 14:00 (afternoon)"
