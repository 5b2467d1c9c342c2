"""Deterministic simulation engine.

Modules:
    rng: Seeded Mulberry32 generator and per-action seed derivation.
    validators: Prerequisite and affordability checks.
    calculations: Energy, money, time and stat-gain math.
    activity: Activity execution and read-only affordance checks.
    travel: Walking and driving between tiles.
    clock: Time advancement, daily survival economics, death checks.
    reducer: Copy-on-write application of deltas to GameState.
    session: GameSession, the per-game turn orchestrator.
"""

from __future__ import annotations

from shitbox_engine.engine.activity import can_perform_activity, execute_activity
from shitbox_engine.engine.clock import (
    advance_time,
    check_death_conditions,
    format_time,
    get_time_description,
    get_time_of_day,
    process_new_day,
)
from shitbox_engine.engine.rng import RNG, derive_action_seed
from shitbox_engine.engine.session import GameSession
from shitbox_engine.engine.travel import (
    can_drive,
    can_walk,
    execute_drive,
    execute_walk,
    get_driving_cost,
    get_walking_cost,
)


__all__ = [
    # RNG
    "RNG",
    "derive_action_seed",
    # Activities
    "execute_activity",
    "can_perform_activity",
    # Travel
    "get_walking_cost",
    "get_driving_cost",
    "can_walk",
    "can_drive",
    "execute_walk",
    "execute_drive",
    # Time
    "advance_time",
    "process_new_day",
    "check_death_conditions",
    "get_time_of_day",
    "format_time",
    "get_time_description",
    # Session
    "GameSession",
]
