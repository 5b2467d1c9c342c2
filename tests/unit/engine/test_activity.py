"""Tests for the activity execution engine."""

from __future__ import annotations

from collections.abc import Callable

from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.activity import (
    can_perform_activity,
    execute_activity,
    generate_narrative,
)
from shitbox_engine.engine.calculations import round_half_up
from shitbox_engine.engine.rng import RNG
from shitbox_engine.models.enums import EventType, FailureKind, StatName
from shitbox_engine.models.game_state import GameState, OwnedCar
from shitbox_engine.models.results import (
    ActivityParams,
    PlayerDelta,
    StateDelta,
    TimeDelta,
)


class TestExecuteActivityFailures:
    """Tests for rejected activities."""

    def test_unknown_activity(self, state: GameState, registry: DataRegistry) -> None:
        """Unknown ids fail as validation errors."""
        result = execute_activity(state, "juggle", ActivityParams(), RNG(1), registry)

        assert not result.success
        assert result.error == "Unknown activity: juggle"
        assert result.failure == FailureKind.VALIDATION
        assert result.delta is None

    def test_economy_not_loaded(self, state: GameState, registry: DataRegistry) -> None:
        """A missing economy is reported as missing data."""
        bare = registry.with_economy(None)

        result = execute_activity(state, "eat", ActivityParams(), RNG(1), bare)

        assert not result.success
        assert result.error == "Economy data not loaded."
        assert result.failure == FailureKind.DATA_NOT_LOADED

    def test_prerequisites_checked_before_costs(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """A failed prerequisite wins over an energy shortfall."""
        exhausted = make_state(energy=0)

        result = execute_activity(exhausted, "drive_taxi", None, RNG(1), registry)

        assert result.error == "Missing license: taxi"

    def test_energy_checked_before_money(self, state: GameState, registry: DataRegistry) -> None:
        """With both short, the energy reason is reported."""
        result = execute_activity(state, "marathon", ActivityParams(), RNG(1), registry)

        assert result.error == "Not enough energy. Need 150, have 100."

    def test_money_shortfall(self, state: GameState, registry: DataRegistry) -> None:
        """Unaffordable spends are rejected."""
        result = execute_activity(state, "study", ActivityParams(), RNG(1), registry)

        assert result.error == "Not enough money. Need $30, have $0."

    def test_failure_leaves_state_untouched(self, state: GameState, registry: DataRegistry) -> None:
        """Executing never changes the input state."""
        before = state.model_dump()

        execute_activity(state, "study", ActivityParams(), RNG(1), registry)

        assert state.model_dump() == before


class TestExecuteActivitySuccess:
    """Tests for successful activities."""

    def test_eat_resets_food_counter(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Eating pays for food and zeroes the hunger counter."""
        hungry = make_state(money=50, days_without_food=3)

        result = execute_activity(hungry, "eat", ActivityParams(), RNG(1), registry)

        assert result.success
        assert result.delta is not None
        assert result.delta.player.money == -20
        assert result.delta.player.days_without_food == -3
        assert result.delta.time.hours == 1
        assert [event.type for event in result.delta.events] == [EventType.FOOD_EATEN]
        assert result.narrative == "You spent $20 on food. (1 hour)"

    def test_sleep_recovers_energy(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Sleeping recovers energy at the housing rate."""
        tired = make_state(energy=20)

        result = execute_activity(tired, "sleep", ActivityParams(hours=8), RNG(1), registry)

        assert result.delta is not None
        assert result.delta.player.energy == 64
        assert result.delta.time.hours == 8
        assert result.narrative == "You slept for 8 hours and recovered 64 energy."

    def test_wait_narrative(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Waiting has its own narrative."""
        result = execute_activity(
            make_state(energy=50), "wait", ActivityParams(hours=2), RNG(1), registry
        )

        assert result.narrative == "You waited for 2 hours and recovered 10 energy."

    def test_fixed_earnings_draw_no_rng(self, state: GameState, registry: DataRegistry) -> None:
        """Earnings without variance leave the generator untouched."""
        rng = RNG(77)

        result = execute_activity(state, "odd_job", ActivityParams(), rng, registry)

        assert rng.get_seed() == 77
        assert result.delta is not None
        assert result.delta.player.money == 40
        assert result.delta.player.energy == -15
        assert result.narrative == "You earned $40. (3 hours)"

    def test_variance_draws_once(self, state: GameState, registry: DataRegistry) -> None:
        """Variance is one draw within plus or minus the declared amount."""
        rng = RNG(77)
        twin = RNG(77)

        result = execute_activity(state, "work_warehouse", ActivityParams(hours=4), rng, registry)

        expected = round_half_up(60 + twin.random_in_range(-5, 5))
        assert result.delta is not None
        assert result.delta.player.money == expected
        assert 55 <= result.delta.player.money <= 65
        assert rng.get_seed() == twin.get_seed()

    def test_same_seed_same_result(self, state: GameState, registry: DataRegistry) -> None:
        """Execution is a pure function of its inputs."""
        first = execute_activity(state, "work_warehouse", ActivityParams(hours=6), RNG(5), registry)
        second = execute_activity(state, "work_warehouse", ActivityParams(hours=6), RNG(5), registry)

        assert first == second

    def test_stat_gains_in_delta(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Stat gains travel unrounded in the delta."""
        student = make_state(money=100, stats={"knowledge": 2})

        result = execute_activity(student, "study", ActivityParams(), RNG(1), registry)

        assert result.delta is not None
        assert set(result.delta.player.stats) == {StatName.KNOWLEDGE, StatName.MECHANICAL}
        assert result.narrative == "You spent $30. (2 hours)"

    def test_all_prerequisites_met(
        self,
        make_state: Callable[..., GameState],
        starter_car: OwnedCar,
        registry: DataRegistry,
    ) -> None:
        """Money-neutral activities describe themselves generically."""
        mechanic = make_state(cars=(starter_car,), engine_parts=1, stats={"mechanical": 3})

        result = execute_activity(mechanic, "fix_engine", ActivityParams(), RNG(1), registry)

        assert result.success
        assert result.narrative == "Activity completed. (2 hours)"

    def test_unimplemented_outcome_is_inert(
        self,
        make_state: Callable[..., GameState],
        registry: DataRegistry,
    ) -> None:
        """Outcomes owned by other systems do not change the delta."""
        buyer = make_state(money=1000)

        result = execute_activity(buyer, "buy_listing", ActivityParams(), RNG(1), registry)

        assert result.success
        assert result.delta is not None
        assert result.delta.player.money == -500
        assert result.delta.inventory.engine_parts == 0
        assert result.delta.events == ()


class TestGenerateNarrative:
    """Tests for narrative text."""

    def test_eat_always_one_hour(self) -> None:
        """The eat narrative states its fixed duration."""
        delta = StateDelta(player=PlayerDelta(money=-20), time=TimeDelta(hours=1))
        assert generate_narrative("eat", delta) == "You spent $20 on food. (1 hour)"

    def test_generic_spend(self) -> None:
        """Other activities describe their money flow."""
        delta = StateDelta(player=PlayerDelta(money=-12), time=TimeDelta(hours=1))
        assert generate_narrative("car_wash", delta) == "You spent $12. (1 hour)"


class TestCanPerformActivity:
    """Tests for the read-only affordance check."""

    def test_unknown(self, state: GameState, registry: DataRegistry) -> None:
        """Unknown ids are not allowed."""
        check = can_perform_activity(state, "juggle", None, registry)
        assert not check.allowed
        assert check.reason == "Unknown activity"

    def test_prerequisite_reason(self, state: GameState, registry: DataRegistry) -> None:
        """Prerequisite failures pass their reason through."""
        check = can_perform_activity(state, "drive_taxi", None, registry)
        assert check.reason == "Missing license: taxi"

    def test_energy_reason(self, state: GameState, registry: DataRegistry) -> None:
        """Energy shortfalls use the short form."""
        check = can_perform_activity(state, "marathon", None, registry)
        assert check.reason == "Need 150 energy"

    def test_money_reason(self, state: GameState, registry: DataRegistry) -> None:
        """Money shortfalls use the short form."""
        check = can_perform_activity(state, "study", None, registry)
        assert check.reason == "Need $30"

    def test_allowed(self, state: GameState, registry: DataRegistry) -> None:
        """Affordable activities are allowed."""
        assert can_perform_activity(state, "odd_job", ActivityParams(), registry).allowed

    def test_does_not_need_economy(self, state: GameState, registry: DataRegistry) -> None:
        """The check reads no economy data."""
        bare = registry.with_economy(None)
        assert can_perform_activity(state, "odd_job", None, bare).allowed
