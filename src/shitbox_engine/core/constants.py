"""Engine-wide constants for the Shitbox simulation engine.

Balance values that the economy configuration does not carry live here so
the calculation layer and its tests share one source.
"""

from __future__ import annotations

# =============================================================================
# Engine Metadata
# =============================================================================

ENGINE_VERSION = "0.1.0"
"""Version stamped into every new save."""

# =============================================================================
# Player Limits
# =============================================================================

MAX_ENERGY = 100
"""Energy ceiling; energy is always clamped to [0, MAX_ENERGY]."""

MAX_STAT_LEVEL = 20
"""Highest level any player stat can reach."""

MIN_STAT_LEVEL = 0
"""Lowest level any player stat can reach."""

STARTING_STAT_POINTS = 10
"""Points a new player must spend across the five stats."""

MAX_PLAYER_NAME_LENGTH = 20
"""Longest accepted player name, after trimming whitespace."""

# =============================================================================
# Time
# =============================================================================

HOURS_PER_DAY = 24
"""Hours in one simulated day."""

DEFAULT_START_HOUR = 6
"""Hour of day a new game begins (6 AM)."""

# =============================================================================
# Stat Effects
# =============================================================================

FITNESS_ENERGY_REDUCTION_PER_POINT = 0.02
"""Activity energy cost reduction per fitness point (2%)."""

FITNESS_REST_BONUS_PER_POINT = 0.02
"""Rest recovery bonus per fitness point (2%)."""

EARNINGS_STAT_BONUS_PER_POINT = 0.05
"""Earnings bonus per point of an activity's modifying stat (5%)."""

KNOWLEDGE_STAT_GAIN_BONUS_PER_POINT = 0.03
"""Stat gain bonus per knowledge point (3%)."""

# =============================================================================
# Travel
# =============================================================================

METERS_PER_WALK_ENERGY = 100
"""Walking costs one energy per this many meters before fitness."""

DEFAULT_FUEL_EFFICIENCY = 10.0
"""Fuel burned by a car, in liters per 100 km."""

# =============================================================================
# Session
# =============================================================================

MAX_HISTORY_ENTRIES = 100
"""Action log ring-buffer capacity."""

DEFAULT_SEED_DAY_STRIDE = 1000
"""Seed space reserved per day when deriving per-action seeds."""

UINT32_MASK = 0xFFFFFFFF
"""Mask for 32-bit unsigned wraparound arithmetic."""


__all__ = [
    "ENGINE_VERSION",
    "MAX_ENERGY",
    "MAX_STAT_LEVEL",
    "MIN_STAT_LEVEL",
    "STARTING_STAT_POINTS",
    "MAX_PLAYER_NAME_LENGTH",
    "HOURS_PER_DAY",
    "DEFAULT_START_HOUR",
    "FITNESS_ENERGY_REDUCTION_PER_POINT",
    "FITNESS_REST_BONUS_PER_POINT",
    "EARNINGS_STAT_BONUS_PER_POINT",
    "KNOWLEDGE_STAT_GAIN_BONUS_PER_POINT",
    "METERS_PER_WALK_ENERGY",
    "DEFAULT_FUEL_EFFICIENCY",
    "MAX_HISTORY_ENTRIES",
    "DEFAULT_SEED_DAY_STRIDE",
    "UINT32_MASK",
]
