"""Shitbox - deterministic simulation core for a life/economy game.

The player manages time, energy, money and stats while moving around a
town, performing activities and trying not to starve. This package is the
state-transition engine only: presentation, persistence and data-file
loading are supplied by the embedding application.

Every outcome is reproducible: a session seed plus the same sequence of
actions always yields the same GameState.

Example:
    >>> from shitbox_engine import DataRegistry, GameSession
    >>>
    >>> registry = DataRegistry.from_payload(economy=economy, activity_files=[misc], map_data=town)
    >>> session = GameSession.new_game("Rusty", {"fitness": 5, "mechanical": 5}, registry, seed=7)
    >>> turn = session.perform_activity("work_warehouse", {"hours": 4})
    >>> print(turn.narrative)

Modules:
    core: Configuration, constants, logging, and exceptions.
    models: Pydantic V2 schemas (state, static definitions, results).
    data: The immutable DataRegistry.
    engine: RNG, rules, travel, time, reducer and session orchestration.
"""

from __future__ import annotations

from shitbox_engine.core.config import Settings, get_settings
from shitbox_engine.core.constants import ENGINE_VERSION
from shitbox_engine.core.exceptions import ShitboxEngineError
from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.rng import RNG
from shitbox_engine.engine.session import GameSession
from shitbox_engine.models.game_state import GameState, GridPosition
from shitbox_engine.models.results import ActivityParams, GameEvent, TurnResult


__version__ = ENGINE_VERSION

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "ShitboxEngineError",
    "DataRegistry",
    "RNG",
    "GameSession",
    "GameState",
    "GridPosition",
    "ActivityParams",
    "GameEvent",
    "TurnResult",
]
