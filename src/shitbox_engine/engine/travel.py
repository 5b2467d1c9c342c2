"""Travel between map tiles on foot or by car.

Distances are Manhattan (``|dx| + |dy|``) scaled by the map's tile size;
travel time is distance over the mode's speed. Walking costs energy,
driving burns fuel from the first working car parked on the player's
tile. Like activities, travel proposes a delta and never changes state;
fuel is reported separately because it belongs to one car instance.
"""

from __future__ import annotations

from shitbox_engine.core.constants import DEFAULT_FUEL_EFFICIENCY, METERS_PER_WALK_ENERGY
from shitbox_engine.core.exceptions import LocationNotFoundError
from shitbox_engine.core.logging import get_logger
from shitbox_engine.data.registry import DataRegistry
from shitbox_engine.engine.calculations import round_half_up
from shitbox_engine.models.definitions import EconomyConfig, MapData
from shitbox_engine.models.enums import FailureKind, TravelMode
from shitbox_engine.models.game_state import GameState, GridPosition, OwnedCar
from shitbox_engine.models.results import (
    ActionCheck,
    PlayerDelta,
    StateDelta,
    TimeDelta,
    TravelCost,
    TravelResult,
)


logger = get_logger(__name__)

PARKING_LOT_ID = "parking_lot"


# =============================================================================
# Distance Primitives
# =============================================================================


def calculate_distance(start: GridPosition, end: GridPosition) -> int:
    """Manhattan distance in tiles."""
    return abs(end.x - start.x) + abs(end.y - start.y)


def calculate_distance_meters(start: GridPosition, end: GridPosition, map_data: MapData) -> float:
    return calculate_distance(start, end) * map_data.meters_per_tile


def calculate_travel_time(
    start: GridPosition,
    end: GridPosition,
    mode: TravelMode,
    map_data: MapData,
) -> float:
    """Travel time in hours for the given mode."""
    distance_km = calculate_distance_meters(start, end, map_data) / 1000
    speed = map_data.walk_speed if mode == TravelMode.WALK else map_data.drive_speed
    return distance_km / speed


# =============================================================================
# Costs
# =============================================================================


def calculate_walking_energy_cost(
    distance_meters: float,
    fitness_level: float,
    economy: EconomyConfig,
) -> int:
    """Energy spent walking; at least 1.

    One energy per 100 meters, reduced by the economy's per-point fitness
    reduction.
    """
    reduction = economy.stat_effects.fitness.energy_cost_reduction_per_point
    base_cost = distance_meters / METERS_PER_WALK_ENERGY
    return max(1, round_half_up(base_cost * (1 - fitness_level * reduction)))


def calculate_driving_fuel_cost(
    distance_meters: float,
    fuel_efficiency: float = DEFAULT_FUEL_EFFICIENCY,
) -> float:
    """Liters burned over a distance at ``fuel_efficiency`` L/100km."""
    return (distance_meters / 1000 / 100) * fuel_efficiency


def get_walking_cost(
    start: GridPosition,
    end: GridPosition,
    fitness_level: float,
    map_data: MapData,
    economy: EconomyConfig,
) -> TravelCost:
    distance_meters = calculate_distance_meters(start, end, map_data)
    return TravelCost(
        mode=TravelMode.WALK,
        distance_tiles=calculate_distance(start, end),
        distance_meters=distance_meters,
        time_hours=calculate_travel_time(start, end, TravelMode.WALK, map_data),
        energy_cost=calculate_walking_energy_cost(distance_meters, fitness_level, economy),
    )


def get_driving_cost(
    start: GridPosition,
    end: GridPosition,
    map_data: MapData,
    fuel_efficiency: float = DEFAULT_FUEL_EFFICIENCY,
) -> TravelCost:
    distance_meters = calculate_distance_meters(start, end, map_data)
    return TravelCost(
        mode=TravelMode.DRIVE,
        distance_tiles=calculate_distance(start, end),
        distance_meters=distance_meters,
        time_hours=calculate_travel_time(start, end, TravelMode.DRIVE, map_data),
        fuel_cost=calculate_driving_fuel_cost(distance_meters, fuel_efficiency),
    )


# =============================================================================
# Validation
# =============================================================================


def find_drivable_car(state: GameState) -> OwnedCar | None:
    """First car in inventory order that is parked here and runs."""
    here = state.player.position
    for car in state.inventory.cars:
        if car.position == here and car.is_working:
            return car
    return None


def _check_destination(state: GameState, destination: GridPosition, map_data: MapData) -> str | None:
    if not map_data.contains(destination):
        return "That destination is off the map."
    if destination == state.player.position:
        return "You are already there."
    return None


def can_walk(state: GameState, destination: GridPosition, registry: DataRegistry) -> ActionCheck:
    """Check whether the player can walk to a tile.

    Raises:
        MapNotLoadedError: If no map was supplied.
        EconomyNotLoadedError: If no economy was supplied.
    """
    map_data = registry.require_map()
    economy = registry.require_economy()

    problem = _check_destination(state, destination, map_data)
    if problem is not None:
        return ActionCheck(allowed=False, reason=problem)

    player = state.player
    cost = get_walking_cost(player.position, destination, player.stats.fitness, map_data, economy)
    if player.energy < cost.energy_cost:
        return ActionCheck(
            allowed=False,
            reason=f"Not enough energy. Need {cost.energy_cost}, have {player.energy}",
        )
    return ActionCheck(allowed=True)


def can_drive(
    state: GameState,
    destination: GridPosition,
    registry: DataRegistry,
    *,
    fuel_efficiency: float = DEFAULT_FUEL_EFFICIENCY,
) -> ActionCheck:
    """Check whether the player can drive to a tile.

    Raises:
        MapNotLoadedError: If no map was supplied.
    """
    plan = _plan_drive(state, destination, registry.require_map(), fuel_efficiency)
    if isinstance(plan, str):
        return ActionCheck(allowed=False, reason=plan)
    return ActionCheck(allowed=True)


def _plan_drive(
    state: GameState,
    destination: GridPosition,
    map_data: MapData,
    fuel_efficiency: float,
) -> tuple[OwnedCar, TravelCost] | str:
    """Pick the car and price the trip, or return why driving is refused."""
    problem = _check_destination(state, destination, map_data)
    if problem is not None:
        return problem

    car = find_drivable_car(state)
    if car is None:
        return "No working car at your location"

    cost = get_driving_cost(state.player.position, destination, map_data, fuel_efficiency)
    if car.fuel < cost.fuel_cost:
        return f"Not enough fuel. Need {cost.fuel_cost:.1f}L, have {car.fuel:.1f}L"
    return car, cost


# =============================================================================
# Execution
# =============================================================================


def execute_walk(state: GameState, destination: GridPosition, registry: DataRegistry) -> TravelResult:
    """Walk to a tile.

    Returns:
        The new position and a delta spending energy and time, or a
        failed result.
    """
    if not registry.is_map_loaded:
        return TravelResult.failed("Map data not loaded.", FailureKind.DATA_NOT_LOADED)
    if not registry.is_economy_loaded:
        return TravelResult.failed("Economy data not loaded.", FailureKind.DATA_NOT_LOADED)

    check = can_walk(state, destination, registry)
    if not check.allowed:
        return TravelResult.failed(check.reason or "You cannot walk there.")

    player = state.player
    cost = get_walking_cost(
        player.position,
        destination,
        player.stats.fitness,
        registry.require_map(),
        registry.require_economy(),
    )
    logger.debug("Walk planned", meters=cost.distance_meters, energy=cost.energy_cost)
    return TravelResult(
        success=True,
        mode=TravelMode.WALK,
        new_position=destination,
        delta=StateDelta(
            player=PlayerDelta(energy=-cost.energy_cost),
            time=TimeDelta(hours=cost.time_hours),
        ),
        narrative=(
            f"Walked {round_half_up(cost.distance_meters)}m "
            f"in {round_half_up(cost.time_hours * 60)} minutes."
        ),
        cost=cost,
    )


def execute_drive(
    state: GameState,
    destination: GridPosition,
    registry: DataRegistry,
    *,
    fuel_efficiency: float = DEFAULT_FUEL_EFFICIENCY,
) -> TravelResult:
    """Drive the first working car on the player's tile to another tile.

    Returns:
        The new position, a time-only delta and the fuel burned by which
        car, or a failed result.
    """
    if not registry.is_map_loaded:
        return TravelResult.failed("Map data not loaded.", FailureKind.DATA_NOT_LOADED)

    plan = _plan_drive(state, destination, registry.require_map(), fuel_efficiency)
    if isinstance(plan, str):
        return TravelResult.failed(plan)

    car, cost = plan
    logger.debug("Drive planned", car=car.instance_id, meters=cost.distance_meters, fuel=cost.fuel_cost)
    return TravelResult(
        success=True,
        mode=TravelMode.DRIVE,
        new_position=destination,
        delta=StateDelta(time=TimeDelta(hours=cost.time_hours)),
        narrative=(
            f"Drove {round_half_up(cost.distance_meters)}m "
            f"in {round_half_up(cost.time_hours * 60)} minutes. "
            f"Used {cost.fuel_cost:.1f}L of fuel."
        ),
        car_instance_id=car.instance_id,
        fuel_used=cost.fuel_cost,
        cost=cost,
    )


# =============================================================================
# Towing
# =============================================================================


def get_tow_cost(registry: DataRegistry) -> float:
    return registry.require_map().tow_cost


def get_parking_lot_position(registry: DataRegistry) -> GridPosition:
    """Tile a towed car is delivered to.

    Raises:
        MapNotLoadedError: If no map was supplied.
        LocationNotFoundError: If the map has no parking lot.
    """
    registry.require_map()
    parking_lot = registry.get_location(PARKING_LOT_ID)
    if parking_lot is None:
        raise LocationNotFoundError(
            "Parking lot location not found in map data",
            location_id=PARKING_LOT_ID,
        )
    return parking_lot.arrival_point


# =============================================================================
# Display Helpers
# =============================================================================


def format_distance(meters: float) -> str:
    """Render ``850m`` below a kilometer, ``1.2km`` above."""
    if meters < 1000:
        return f"{round_half_up(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_travel_time(hours: float) -> str:
    """Render ``25 min``, ``1h 30min`` or ``2h``."""
    total_minutes = round_half_up(hours * 60)
    if total_minutes < 60:
        return f"{total_minutes} min"
    whole_hours, minutes = divmod(total_minutes, 60)
    return f"{whole_hours}h {minutes}min" if minutes > 0 else f"{whole_hours}h"


__all__ = [
    "PARKING_LOT_ID",
    "calculate_distance",
    "calculate_distance_meters",
    "calculate_travel_time",
    "calculate_walking_energy_cost",
    "calculate_driving_fuel_cost",
    "get_walking_cost",
    "get_driving_cost",
    "find_drivable_car",
    "can_walk",
    "can_drive",
    "execute_walk",
    "execute_drive",
    "get_tow_cost",
    "get_parking_lot_position",
    "format_distance",
    "format_travel_time",
]
