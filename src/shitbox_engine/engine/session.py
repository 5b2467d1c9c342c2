"""Session orchestrator: the only owner of the authoritative GameState.

Each public action runs the full turn pipeline to completion and either
commits exactly one new state or leaves the current one untouched:

1. Derive a per-action RNG from the stored seed, the day and the action count.
2. Execute the activity; a failure ends the turn with no state change.
3. Apply the delta through the reducer.
4. Advance the clock.
5. For each crossed day boundary, in order: daily economics, then the
   death check. Death ends the turn without logging history.
6. Append the action to the history ring buffer.

Wall-clock time is only read for save metadata and log timestamps, and
for the seed of a brand-new game when the caller does not supply one.

Example:
    >>> session = GameSession.new_game(
    ...     "Rusty",
    ...     {"fitness": 4, "mechanical": 3, "charisma": 3},
    ...     registry,
    ...     seed=42,
    ... )
    >>> result = session.perform_activity("sleep", {"hours": 8})
    >>> result.narrative
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any, Self

from pydantic import ValidationError as PydanticValidationError

from shitbox_engine.core.config import EngineSettings, get_settings
from shitbox_engine.core.constants import (
    MAX_PLAYER_NAME_LENGTH,
    MAX_STAT_LEVEL,
    MIN_STAT_LEVEL,
    STARTING_STAT_POINTS,
    UINT32_MASK,
)
from shitbox_engine.core.exceptions import InvalidGameStateError, ValidationError
from shitbox_engine.core.logging import bind_context, get_logger
from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.activity import can_perform_activity, execute_activity
from shitbox_engine.engine.clock import advance_time, check_death_conditions, process_new_day
from shitbox_engine.engine.reducer import (
    append_action_log,
    apply_delta,
    apply_new_day,
    consume_fuel,
    mark_dead,
    mark_saved,
    move_player,
    set_time,
)
from shitbox_engine.engine.rng import RNG, derive_action_seed
from shitbox_engine.engine.travel import execute_drive, execute_walk
from shitbox_engine.models.enums import ActionOutcome, EventType, FailureKind, StatName
from shitbox_engine.models.game_state import (
    ActionLog,
    GameMeta,
    GameState,
    GameTime,
    GridPosition,
    Player,
    PlayerStats,
)
from shitbox_engine.models.results import (
    ActionCheck,
    ActivityParams,
    GameEvent,
    TravelResult,
    TurnResult,
)


logger = get_logger(__name__)

Clock = Callable[[], float]
"""Returns wall-clock time in seconds since the epoch."""


def validate_player_name(name: str) -> str:
    """Trim and validate a new player's name.

    Raises:
        ValidationError: If the name is blank or too long.
    """
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Player name cannot be empty", field_name="player_name")
    if len(trimmed) > MAX_PLAYER_NAME_LENGTH:
        raise ValidationError(
            f"Player name must be at most {MAX_PLAYER_NAME_LENGTH} characters",
            field_name="player_name",
            invalid_value=trimmed,
        )
    return trimmed


def validate_stat_allocation(allocation: Mapping[str, float] | PlayerStats) -> PlayerStats:
    """Validate a new player's stat allocation.

    Unlisted stats start at 0. Every stat must be within the stat range
    and the points must add up to exactly ``STARTING_STAT_POINTS``.

    Raises:
        ValidationError: If a stat is unknown or out of range, or the
            total is wrong.
    """
    raw = allocation.as_dict() if isinstance(allocation, PlayerStats) else allocation

    values: dict[str, float] = {}
    for key, value in raw.items():
        try:
            stat = StatName(key)
        except ValueError:
            raise ValidationError(
                f"Unknown stat: {key}",
                field_name="stat_allocation",
                invalid_value=key,
            ) from None
        if not MIN_STAT_LEVEL <= value <= MAX_STAT_LEVEL:
            raise ValidationError(
                f"{stat.display_name} must be between {MIN_STAT_LEVEL} and {MAX_STAT_LEVEL}",
                field_name=stat.value,
                invalid_value=value,
            )
        values[stat.value] = value

    total = sum(values.values())
    if total != STARTING_STAT_POINTS:
        raise ValidationError(
            f"Stat points must total exactly {STARTING_STAT_POINTS}",
            field_name="stat_allocation",
            invalid_value=total,
        )
    return PlayerStats(**values)


class GameSession:
    """One running game.

    The session holds the single current ``GameState`` and replaces it on
    every committed turn. Callers must not run two operations on the same
    session concurrently.

    Attributes:
        state: The authoritative state.
        registry: Static game data.
        settings: Engine tuning.
    """

    def __init__(
        self,
        state: GameState,
        registry: DataRegistry,
        *,
        settings: EngineSettings | None = None,
        clock: Clock = time.time,
    ) -> None:
        """Initialize a session around an existing state.

        Args:
            state: State to own.
            registry: Static game data.
            settings: Engine tuning; defaults to the application settings.
            clock: Wall-clock source for timestamps.
        """
        self._state = state
        self._registry = registry
        self._settings = settings if settings is not None else get_settings().engine
        self._clock = clock

        bind_context(save_id=state.meta.save_id)
        logger.info(
            "GameSession initialized",
            day=state.time.current_day,
            is_game_over=state.meta.is_game_over,
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new_game(
        cls,
        player_name: str,
        stat_allocation: Mapping[str, float] | PlayerStats,
        registry: DataRegistry,
        *,
        seed: int | None = None,
        start_position: GridPosition | None = None,
        settings: EngineSettings | None = None,
        clock: Clock = time.time,
    ) -> Self:
        """Start a new game.

        Args:
            player_name: Player name; surrounding whitespace is dropped.
            stat_allocation: Points per stat.
            registry: Static game data.
            seed: Session seed; drawn from the wall clock when omitted.
            start_position: Starting tile; the map origin when omitted.
            settings: Engine tuning.
            clock: Wall-clock source for timestamps.

        Returns:
            A session owning the initial state.

        Raises:
            ValidationError: If the name or allocation is invalid.
        """
        name = validate_player_name(player_name)
        stats = validate_stat_allocation(stat_allocation)
        if settings is None:
            settings = get_settings().engine

        rng = RNG.from_time() if seed is None else RNG(seed)
        session_seed = rng.get_seed() & UINT32_MASK
        now = int(clock() * 1000)

        player_fields: dict[str, Any] = {
            "name": name,
            "money": settings.starting_money,
            "stats": stats,
        }
        if start_position is not None:
            player_fields["position"] = start_position

        state = GameState(
            meta=GameMeta(
                save_id=rng.uuid(),
                created_at=now,
                last_saved_at=now,
                rng_seed=session_seed,
            ),
            time=GameTime(current_day=1, current_hour=settings.start_hour),
            player=Player(**player_fields),
        )
        logger.info("New game created", player=name, seed=session_seed)
        return cls(state, registry, settings=settings, clock=clock)

    @classmethod
    def restore(
        cls,
        payload: str | bytes | Mapping[str, Any],
        registry: DataRegistry,
        *,
        settings: EngineSettings | None = None,
        clock: Clock = time.time,
    ) -> Self:
        """Rebuild a session from a snapshot.

        Args:
            payload: JSON text from ``snapshot`` or an already-parsed mapping.
            registry: Static game data.
            settings: Engine tuning.
            clock: Wall-clock source for timestamps.

        Raises:
            InvalidGameStateError: If the payload is not a valid game state.
        """
        try:
            if isinstance(payload, (str, bytes)):
                state = GameState.model_validate_json(payload)
            else:
                state = GameState.model_validate(payload)
        except PydanticValidationError as exc:
            raise InvalidGameStateError(
                "Saved game could not be restored",
                details={"errors": exc.error_count()},
            ) from exc
        return cls(state, registry, settings=settings, clock=clock)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def registry(self) -> DataRegistry:
        return self._registry

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def is_game_over(self) -> bool:
        return self._state.meta.is_game_over

    def snapshot(self) -> str:
        """Serialize the current state, stamping ``last_saved_at``."""
        self._state = mark_saved(self._state, self._now_ms())
        return self._state.model_dump_json()

    # -------------------------------------------------------------------------
    # Turns
    # -------------------------------------------------------------------------

    def can_perform_activity(
        self,
        activity_id: str,
        params: ActivityParams | Mapping[str, Any] | None = None,
    ) -> ActionCheck:
        """Read-only affordance check for the presentation layer."""
        if self.is_game_over:
            return ActionCheck(allowed=False, reason="Game over.")
        try:
            checked_params = self._coerce_params(params)
        except ValidationError as exc:
            return ActionCheck(allowed=False, reason=exc.message)
        return can_perform_activity(self._state, activity_id, checked_params, self._registry)

    def perform_activity(
        self,
        activity_id: str,
        params: ActivityParams | Mapping[str, Any] | None = None,
    ) -> TurnResult:
        """Run one activity through the full turn pipeline.

        Args:
            activity_id: Activity to perform.
            params: Caller parameters.

        Returns:
            The turn outcome, including the committed state.
        """
        if self.is_game_over:
            return self._game_over_result()

        state = self._state
        try:
            params = self._coerce_params(params)
        except ValidationError as exc:
            logger.debug("Activity rejected", activity=activity_id, reason=exc.message)
            return TurnResult(
                success=False,
                error=exc.message,
                failure=FailureKind.VALIDATION,
                state=state,
            )

        seed = derive_action_seed(
            state.meta.rng_seed,
            state.time.current_day,
            state.history.total_actions,
            stride=self._settings.seed_day_stride,
        )

        result = execute_activity(state, activity_id, params, RNG(seed), self._registry)
        if not result.success or result.delta is None:
            logger.debug("Activity rejected", activity=activity_id, reason=result.error)
            return TurnResult(
                success=False,
                error=result.error,
                failure=result.failure,
                state=state,
            )

        new_state = apply_delta(state, result.delta)
        new_state, day_events, days_advanced, death_reason = self._advance_clock(
            new_state,
            result.delta.time.hours,
            process_days=True,
        )
        events = (*result.delta.events, *day_events)

        if death_reason is not None:
            self._state = new_state
            return TurnResult(
                success=True,
                state=new_state,
                events=events,
                narrative=result.narrative,
                game_over=True,
                death_reason=death_reason,
                days_advanced=days_advanced,
            )

        entry = ActionLog(
            timestamp=self._now_ms(),
            day=new_state.time.current_day,
            action=activity_id,
            params=params.to_log(),
            result=ActionOutcome.SUCCESS,
        )
        new_state = append_action_log(new_state, entry, self._settings.history_limit)
        self._state = new_state

        logger.info(
            "Turn committed",
            activity=activity_id,
            day=new_state.time.current_day,
            hour=new_state.time.current_hour,
            energy=new_state.player.energy,
            money=new_state.player.money,
        )
        return TurnResult(
            success=True,
            state=new_state,
            events=events,
            narrative=result.narrative,
            days_advanced=days_advanced,
        )

    def walk_to(self, destination: GridPosition) -> TurnResult:
        """Walk to a tile. Travel uses no RNG and is not logged to history."""
        if self.is_game_over:
            return self._game_over_result()
        return self._commit_travel(execute_walk(self._state, destination, self._registry))

    def drive_to(self, destination: GridPosition) -> TurnResult:
        """Drive the first working car on the player's tile to another tile."""
        if self.is_game_over:
            return self._game_over_result()
        result = execute_drive(
            self._state,
            destination,
            self._registry,
            fuel_efficiency=self._settings.default_fuel_efficiency,
        )
        return self._commit_travel(result)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _commit_travel(self, result: TravelResult) -> TurnResult:
        if not result.success or result.delta is None or result.new_position is None:
            logger.debug("Travel rejected", reason=result.error)
            return TurnResult(
                success=False,
                error=result.error,
                failure=result.failure,
                state=self._state,
            )

        new_state = apply_delta(self._state, result.delta)
        if result.car_instance_id is not None:
            new_state = consume_fuel(
                new_state,
                result.car_instance_id,
                result.fuel_used,
                result.new_position,
            )
        new_state = move_player(new_state, result.new_position)
        new_state, day_events, days_advanced, death_reason = self._advance_clock(
            new_state,
            result.delta.time.hours,
            process_days=self._settings.process_days_on_travel,
        )
        self._state = new_state

        logger.info("Travel committed", mode=result.mode, x=result.new_position.x, y=result.new_position.y)
        return TurnResult(
            success=True,
            state=new_state,
            events=(*result.delta.events, *day_events),
            narrative=result.narrative,
            game_over=death_reason is not None,
            death_reason=death_reason,
            days_advanced=days_advanced,
        )

    def _advance_clock(
        self,
        state: GameState,
        hours: float,
        *,
        process_days: bool,
    ) -> tuple[GameState, list[GameEvent], int, str | None]:
        """Advance time and run each crossed day boundary in order.

        Returns:
            The new state, day events, days crossed and the death reason
            if the player died.
        """
        time_result = advance_time(state.time, hours)
        state = set_time(state, time_result.new_time)
        events: list[GameEvent] = []
        if not (process_days and time_result.day_changed):
            return state, events, time_result.days_advanced, None

        economy = self._registry.require_economy()
        first_new_day = time_result.new_time.current_day - time_result.days_advanced + 1
        for day in range(first_new_day, time_result.new_time.current_day + 1):
            day_result = process_new_day(state, economy, day=day)
            state = apply_new_day(state, day_result)
            events.extend(day_result.events)

            death = check_death_conditions(state, economy)
            if death.is_dead:
                reason = death.death_reason or "You died."
                state = mark_dead(state, reason)
                events.append(GameEvent(type=EventType.DEATH, message=reason))
                logger.info("Player died", day=day, reason=reason)
                return state, events, time_result.days_advanced, reason

            logger.info(
                "Day rolled over",
                day=day,
                money=state.player.money,
                days_without_food=state.player.days_without_food,
            )

        return state, events, time_result.days_advanced, None

    def _game_over_result(self) -> TurnResult:
        return TurnResult(
            success=False,
            error="Game over.",
            failure=FailureKind.GAME_OVER,
            state=self._state,
            game_over=True,
            death_reason=self._state.meta.death_reason,
        )

    @staticmethod
    def _coerce_params(params: ActivityParams | Mapping[str, Any] | None) -> ActivityParams:
        """Validate caller params, accepting snake_case or camelCase keys.

        Raises:
            ValidationError: If a key is unknown or a value has the wrong type.
        """
        if params is None:
            return ActivityParams()
        if isinstance(params, ActivityParams):
            return params
        try:
            return ActivityParams.model_validate(params)
        except PydanticValidationError as exc:
            error = exc.errors()[0]
            field_name = ".".join(str(part) for part in error["loc"])
            raise ValidationError(
                f"Invalid activity parameter '{field_name}'.",
                field_name=field_name,
                invalid_value=error.get("input"),
            ) from exc

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)


__all__ = [
    "GameSession",
    "validate_player_name",
    "validate_stat_allocation",
]
