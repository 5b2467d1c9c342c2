"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Shitbox simulation engine test suite. Static data fixtures use the
same camelCase shape as the game's JSON data files.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest

from shitbox_engine.core.config import EngineSettings
from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.rng import RNG
from shitbox_engine.engine.session import GameSession
from shitbox_engine.models.enums import HousingType
from shitbox_engine.models.game_state import (
    GameMeta,
    GameState,
    GameTime,
    GridPosition,
    Housing,
    Inventory,
    OwnedCar,
    Player,
    PlayerStats,
)


if TYPE_CHECKING:
    from collections.abc import Generator


FIXED_EPOCH_SECONDS = 1_700_000_000.0


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from shitbox_engine.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "SHITBOX_DEBUG": "true",
        "SHITBOX_LOG_LEVEL": "DEBUG",
        "SHITBOX_ENGINE_HISTORY_LIMIT": "25",
        "SHITBOX_ENGINE_PROCESS_DAYS_ON_TRAVEL": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def engine_settings() -> EngineSettings:
    """Engine settings with the documented defaults."""
    return EngineSettings(
        default_fuel_efficiency=10.0,
        history_limit=100,
        seed_day_stride=1000,
        start_hour=6,
        starting_money=0,
        process_days_on_travel=False,
    )


@pytest.fixture
def fixed_clock() -> Callable[[], float]:
    """Wall clock frozen at a known instant."""
    return lambda: FIXED_EPOCH_SECONDS


# =============================================================================
# Static Data Fixtures
# =============================================================================


@pytest.fixture
def economy_payload() -> dict[str, Any]:
    """Economy configuration as found in economy.json."""
    return {
        "version": "1.0",
        "resources": {"maxEnergy": 100, "startingMoney": 0, "startingStatPoints": 10},
        "survival": {"dailyFoodCost": 20, "daysWithoutFoodUntilDeath": 5},
        "rest": {
            "shitboxEnergyPerHour": 8,
            "basicApartmentEnergyPerHour": 12,
            "niceApartmentEnergyPerHour": 15,
            "ownedHomeEnergyPerHour": 15,
            "lightRestEnergyPerHour": 5,
        },
        "statEffects": {
            "fitness": {
                "energyCostReductionPerPoint": 0.02,
                "restEfficiencyBonusPerPoint": 0.02,
                "laborOutputBonusPerPoint": 0.03,
            },
            "knowledge": {"statGainBonusPerPoint": 0.03},
        },
        "newspaper": {"dailyCost": 2},
    }


@pytest.fixture
def activity_payload() -> dict[str, Any]:
    """The misc activity file."""
    return {
        "locationId": "misc",
        "locationName": "Anywhere",
        "activities": [
            {
                "id": "eat",
                "name": "Eat",
                "category": "survival",
                "time": {"type": "fixed", "hours": 1},
                "energy": {"type": "none"},
                "money": {"type": "spend", "mode": "fixed", "base": 20},
                "outcomes": [{"type": "resetFoodCounter"}],
            },
            {
                "id": "sleep",
                "name": "Sleep",
                "time": {"type": "variable", "minHours": 1, "maxHours": 12, "unit": "hour"},
                "energy": {"type": "recover", "housingModifier": True},
                "money": {"type": "none"},
            },
            {
                "id": "wait",
                "name": "Wait",
                "time": {"type": "variable", "minHours": 1, "maxHours": 4},
                "energy": {"type": "recover", "base": 5},
                "money": {"type": "none"},
            },
            {
                "id": "hibernate",
                "name": "Hibernate",
                "time": {"type": "variable", "minHours": 1, "maxHours": 72},
                "energy": {"type": "recover", "base": 1},
                "money": {"type": "none"},
            },
            {
                "id": "work_warehouse",
                "name": "Warehouse Shift",
                "time": {"type": "variable", "minHours": 1, "maxHours": 8},
                "energy": {"type": "perHour", "base": 10},
                "money": {
                    "type": "earn",
                    "mode": "perHour",
                    "base": 15,
                    "variance": 5,
                    "statModifier": {
                        "stat": "fitness",
                        "effect": "increase",
                        "formula": "base * (1 + fitness * 0.05)",
                    },
                },
                "statGain": [{"stat": "fitness", "amount": 0.1, "per": "hour"}],
            },
            {
                "id": "odd_job",
                "name": "Odd Job",
                "time": {"type": "fixed", "hours": 3},
                "energy": {"type": "fixed", "base": 15},
                "money": {"type": "earn", "mode": "fixed", "base": 40},
            },
            {
                "id": "study",
                "name": "Study Manuals",
                "time": {"type": "fixed", "hours": 2},
                "energy": {"type": "fixed", "base": 10},
                "money": {"type": "spend", "mode": "fixed", "base": 30},
                "statGain": [
                    {"stat": "knowledge", "amount": 0.5, "per": "activity"},
                    {"stat": "mechanical", "amount": 0.25, "per": "activity"},
                ],
            },
            {
                "id": "fix_engine",
                "name": "Fix Engine",
                "time": {"type": "fixed", "hours": 2},
                "energy": {"type": "fixed", "base": 20},
                "money": {"type": "none"},
                "prerequisites": [
                    {"type": "ownership", "itemType": "car"},
                    {"type": "item", "itemType": "engineParts"},
                    {"type": "stat", "stat": "mechanical", "minimum": 3},
                ],
            },
            {
                "id": "drive_taxi",
                "name": "Drive Taxi",
                "time": {"type": "fixed", "hours": 4},
                "energy": {"type": "fixed", "base": 10},
                "money": {"type": "earn", "mode": "fixed", "base": 60},
                "prerequisites": [{"type": "license", "requirement": "taxi"}],
            },
            {
                "id": "vip_lounge",
                "name": "VIP Lounge",
                "time": {"type": "fixed", "hours": 1},
                "energy": {"type": "none"},
                "money": {"type": "none"},
                "prerequisites": [
                    {"type": "context", "requirement": "invited"},
                    {"type": "money", "minimum": 100},
                ],
            },
            {
                "id": "buy_listing",
                "name": "Buy Listed Car",
                "time": {"type": "fixed", "hours": 1},
                "energy": {"type": "none"},
                "money": {"type": "spend", "mode": "fixed", "base": 500},
                "outcomes": [{"type": "acquireCar", "source": "listing"}],
            },
            {
                "id": "marathon",
                "name": "Run a Marathon",
                "time": {"type": "fixed", "hours": 5},
                "energy": {"type": "fixed", "base": 150},
                "money": {"type": "spend", "mode": "fixed", "base": 1000},
            },
        ],
    }


@pytest.fixture
def map_payload() -> dict[str, Any]:
    """The town map as found in map.json."""
    return {
        "version": "1.0",
        "townName": "Rustbelt",
        "gridSize": 20,
        "metersPerTile": 100,
        "walkSpeed": 5,
        "driveSpeed": 40,
        "towCost": 75,
        "regions": ["Central", "North", "South", "East", "West"],
        "locations": [
            {
                "id": "home",
                "name": "Your Shitbox",
                "category": "Residential",
                "region": "Central",
                "position": {"x": 0, "y": 0},
                "activitiesFile": "misc",
            },
            {
                "id": "warehouse",
                "name": "Warehouse",
                "category": "Industrial",
                "region": "East",
                "position": {"x": 3, "y": 4},
                "activitiesFile": None,
            },
            {
                "id": "parking_lot",
                "name": "Parking Lot",
                "category": "Parking",
                "region": "Central",
                "position": {"x": 5, "y": 5},
                "entryPoint": {"x": 5, "y": 6},
            },
        ],
    }


@pytest.fixture
def registry(
    economy_payload: dict[str, Any],
    activity_payload: dict[str, Any],
    map_payload: dict[str, Any],
) -> DataRegistry:
    """A fully loaded data registry."""
    return DataRegistry.from_payload(
        economy=economy_payload,
        activity_files=[activity_payload],
        map_data=map_payload,
    )


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Factory for game states with chosen player and inventory values.

    Stats default to zero so calculations are easy to follow.
    """

    def _make(
        *,
        money: float = 0,
        energy: int = 100,
        days_without_food: int = 0,
        stats: dict[str, float] | None = None,
        position: tuple[int, int] = (0, 0),
        housing: HousingType = HousingType.SHITBOX,
        licenses: tuple[str, ...] = (),
        cars: tuple[OwnedCar, ...] = (),
        engine_parts: int = 0,
        day: int = 1,
        hour: int = 6,
        rng_seed: int = 42,
    ) -> GameState:
        return GameState(
            meta=GameMeta(save_id="test-save", rng_seed=rng_seed),
            time=GameTime(current_day=day, current_hour=hour),
            player=Player(
                name="Rusty",
                money=money,
                energy=energy,
                days_without_food=days_without_food,
                stats=PlayerStats(**(stats or {})),
                position=GridPosition(x=position[0], y=position[1]),
                housing=Housing(type=housing),
                licenses=licenses,
            ),
            inventory=Inventory(cars=cars, engine_parts=engine_parts),
        )

    return _make


@pytest.fixture
def state(make_state: Callable[..., GameState]) -> GameState:
    """A fresh player at home with no money and full energy."""
    return make_state()


@pytest.fixture
def starter_car() -> OwnedCar:
    """A running car parked at the map origin."""
    return OwnedCar(
        instance_id="car-1",
        car_id="beater_sedan",
        engine_condition=60,
        body_condition=40,
        fuel=10,
        fuel_capacity=40,
        position=GridPosition(x=0, y=0),
        acquired_day=1,
        acquired_price=800,
    )


@pytest.fixture
def rng() -> RNG:
    """Seeded generator."""
    return RNG(12345)


@pytest.fixture
def session(
    registry: DataRegistry,
    engine_settings: EngineSettings,
    fixed_clock: Callable[[], float],
) -> GameSession:
    """A new game with a fixed seed and frozen clock."""
    return GameSession.new_game(
        "Rusty",
        {"fitness": 5, "mechanical": 3, "knowledge": 2},
        registry,
        seed=42,
        settings=engine_settings,
        clock=fixed_clock,
    )
