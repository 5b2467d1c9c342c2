"""State reducer: merges proposed changes into a new GameState.

Every function returns a new state and leaves its input untouched, so
earlier snapshots stay valid. ``model_copy`` skips validation, so the
clamps that keep state in range are applied here explicitly.
"""

from __future__ import annotations

from shitbox_engine.core.constants import MAX_ENERGY
from shitbox_engine.core.exceptions import InvalidGameStateError
from shitbox_engine.engine.calculations import apply_stat_gains
from shitbox_engine.models.game_state import (
    ActionLog,
    GameState,
    GameTime,
    GridPosition,
)
from shitbox_engine.models.results import NewDayResult, StateDelta


def clamp_energy(energy: int) -> int:
    return max(0, min(MAX_ENERGY, energy))


def apply_delta(state: GameState, delta: StateDelta) -> GameState:
    """Apply a player/inventory delta.

    Energy is clamped to ``[0, MAX_ENERGY]``, the hunger counter and part
    counts never drop below zero, and stat gains are clamped without
    rounding. Time is advanced separately by the caller.
    """
    player = state.player
    change = delta.player
    new_player = player.model_copy(
        update={
            "energy": clamp_energy(player.energy + change.energy),
            "money": player.money + change.money,
            "days_without_food": max(0, player.days_without_food + change.days_without_food),
            "stats": apply_stat_gains(player.stats, change.stats),
        }
    )

    inventory = state.inventory
    new_inventory = inventory.model_copy(
        update={
            "engine_parts": max(0, inventory.engine_parts + delta.inventory.engine_parts),
            "body_parts": max(0, inventory.body_parts + delta.inventory.body_parts),
        }
    )
    return state.model_copy(update={"player": new_player, "inventory": new_inventory})


def set_time(state: GameState, new_time: GameTime) -> GameState:
    return state.model_copy(update={"time": new_time})


def apply_new_day(state: GameState, result: NewDayResult) -> GameState:
    """Apply one day boundary's money change and hunger counter."""
    player = state.player.model_copy(
        update={
            "money": state.player.money + result.money_change,
            "days_without_food": max(0, result.days_without_food),
        }
    )
    return state.model_copy(update={"player": player})


def move_player(state: GameState, position: GridPosition) -> GameState:
    player = state.player.model_copy(update={"position": position})
    return state.model_copy(update={"player": player})


def consume_fuel(
    state: GameState,
    instance_id: str,
    fuel_used: float,
    position: GridPosition,
) -> GameState:
    """Burn fuel from one car and park it at ``position``.

    Raises:
        InvalidGameStateError: If the car is not in the inventory.
    """
    if state.inventory.get_car(instance_id) is None:
        raise InvalidGameStateError(
            f"Car {instance_id} is not in the inventory",
            details={"instance_id": instance_id},
        )

    cars = tuple(
        car.model_copy(update={"fuel": max(0.0, car.fuel - fuel_used), "position": position})
        if car.instance_id == instance_id
        else car
        for car in state.inventory.cars
    )
    inventory = state.inventory.model_copy(update={"cars": cars})
    return state.model_copy(update={"inventory": inventory})


def append_action_log(state: GameState, entry: ActionLog, limit: int) -> GameState:
    """Append to the action log, keeping only the ``limit`` newest entries.

    ``total_actions`` counts every entry ever appended.
    """
    history = state.history
    actions = (*history.actions, entry)[-limit:]
    new_history = history.model_copy(
        update={"actions": actions, "total_actions": history.total_actions + 1}
    )
    return state.model_copy(update={"history": new_history})


def mark_dead(state: GameState, reason: str) -> GameState:
    meta = state.meta.model_copy(update={"is_game_over": True, "death_reason": reason})
    return state.model_copy(update={"meta": meta})


def mark_saved(state: GameState, timestamp: int) -> GameState:
    meta = state.meta.model_copy(update={"last_saved_at": timestamp})
    return state.model_copy(update={"meta": meta})


__all__ = [
    "clamp_energy",
    "apply_delta",
    "set_time",
    "apply_new_day",
    "move_player",
    "consume_fuel",
    "append_action_log",
    "mark_dead",
    "mark_saved",
]
