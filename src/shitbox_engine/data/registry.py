"""Read-only registry of static game data.

The registry is constructed explicitly by whoever loads the data files and
is passed by reference into the session and the engine entry points. It
never changes after construction; the ``with_*`` methods return a new
registry sharing the untouched parts.

Example:
    >>> registry = DataRegistry.from_payload(
    ...     economy=json.loads(economy_text),
    ...     activity_files=[json.loads(misc_text)],
    ...     map_data=json.loads(map_text),
    ... )
    >>> registry.get_activity("eat").money.base
    20.0
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Self

from shitbox_engine.core.exceptions import EconomyNotLoadedError, MapNotLoadedError
from shitbox_engine.core.logging import get_logger
from shitbox_engine.models.definitions import (
    ActivityDefinition,
    ActivityFile,
    EconomyConfig,
    LocationDefinition,
    MapData,
)
from shitbox_engine.models.enums import Region
from shitbox_engine.models.game_state import GridPosition


logger = get_logger(__name__)


class DataRegistry:
    """Immutable container for economy, activity and map data.

    Activities are grouped by the location whose data file declared them.
    When two files declare the same activity id the later one wins the
    id lookup, matching load order.

    Attributes:
        economy: Economy tuning, or None if not supplied.
        map_data: Town map, or None if not supplied.
    """

    __slots__ = (
        "_economy",
        "_map",
        "_activity_files",
        "_activity_by_id",
        "_location_by_id",
        "_location_by_position",
    )

    def __init__(
        self,
        *,
        economy: EconomyConfig | None = None,
        activities: Iterable[ActivityFile] = (),
        map_data: MapData | None = None,
    ) -> None:
        """Initialize the registry and build lookup indexes.

        Args:
            economy: Economy configuration.
            activities: Activity files, in load order.
            map_data: Town map.
        """
        self._economy = economy
        self._map = map_data
        self._activity_files: tuple[ActivityFile, ...] = tuple(activities)

        by_id: dict[str, ActivityDefinition] = {}
        for activity_file in self._activity_files:
            for activity in activity_file.activities:
                by_id[activity.id] = activity
        self._activity_by_id: Mapping[str, ActivityDefinition] = MappingProxyType(by_id)

        by_location: dict[str, LocationDefinition] = {}
        by_position: dict[tuple[int, int], LocationDefinition] = {}
        if map_data is not None:
            for location in map_data.locations:
                by_location[location.id] = location
                by_position[(location.position.x, location.position.y)] = location
        self._location_by_id: Mapping[str, LocationDefinition] = MappingProxyType(by_location)
        self._location_by_position: Mapping[tuple[int, int], LocationDefinition] = (
            MappingProxyType(by_position)
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return (
            f"DataRegistry(economy={self.is_economy_loaded}, "
            f"activities={len(self._activity_by_id)}, map={self.is_map_loaded})"
        )

    @classmethod
    def from_payload(
        cls,
        *,
        economy: Mapping[str, Any] | None = None,
        activity_files: Iterable[Mapping[str, Any]] = (),
        map_data: Mapping[str, Any] | None = None,
    ) -> Self:
        """Build a registry from parsed JSON data files.

        Args:
            economy: Parsed ``economy.json``.
            activity_files: Parsed ``activities/<location>.json`` files.
            map_data: Parsed ``map.json``.

        Returns:
            A new registry.

        Raises:
            pydantic.ValidationError: If a payload does not match its model.
        """
        registry = cls(
            economy=EconomyConfig.model_validate(economy) if economy is not None else None,
            activities=[ActivityFile.model_validate(raw) for raw in activity_files],
            map_data=MapData.model_validate(map_data) if map_data is not None else None,
        )
        logger.info(
            "Data registry built",
            economy_loaded=registry.is_economy_loaded,
            activities=len(registry._activity_by_id),
            map_loaded=registry.is_map_loaded,
        )
        return registry

    # -------------------------------------------------------------------------
    # Copy-on-write
    # -------------------------------------------------------------------------

    def with_economy(self, economy: EconomyConfig | None) -> DataRegistry:
        """Return a registry with the economy replaced."""
        return DataRegistry(economy=economy, activities=self._activity_files, map_data=self._map)

    def with_map(self, map_data: MapData | None) -> DataRegistry:
        """Return a registry with the map replaced."""
        return DataRegistry(economy=self._economy, activities=self._activity_files, map_data=map_data)

    def with_activities(self, *files: ActivityFile) -> DataRegistry:
        """Return a registry with extra activity files appended."""
        return DataRegistry(
            economy=self._economy,
            activities=(*self._activity_files, *files),
            map_data=self._map,
        )

    # -------------------------------------------------------------------------
    # Economy
    # -------------------------------------------------------------------------

    @property
    def economy(self) -> EconomyConfig | None:
        return self._economy

    @property
    def is_economy_loaded(self) -> bool:
        return self._economy is not None

    def require_economy(self) -> EconomyConfig:
        """Get the economy configuration.

        Raises:
            EconomyNotLoadedError: If no economy was supplied.
        """
        if self._economy is None:
            raise EconomyNotLoadedError()
        return self._economy

    # -------------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------------

    def get_activity(self, activity_id: str) -> ActivityDefinition | None:
        return self._activity_by_id.get(activity_id)

    def activities_for_location(self, location_id: str) -> tuple[ActivityDefinition, ...]:
        """Get every activity declared for a location, in file order."""
        result: list[ActivityDefinition] = []
        for activity_file in self._activity_files:
            if activity_file.location_id == location_id:
                result.extend(activity_file.activities)
        return tuple(result)

    def all_activities(self) -> tuple[ActivityDefinition, ...]:
        return tuple(self._activity_by_id.values())

    # -------------------------------------------------------------------------
    # Map
    # -------------------------------------------------------------------------

    @property
    def map_data(self) -> MapData | None:
        return self._map

    @property
    def is_map_loaded(self) -> bool:
        return self._map is not None

    def require_map(self) -> MapData:
        """Get the town map.

        Raises:
            MapNotLoadedError: If no map was supplied.
        """
        if self._map is None:
            raise MapNotLoadedError()
        return self._map

    def get_location(self, location_id: str) -> LocationDefinition | None:
        return self._location_by_id.get(location_id)

    def get_location_at(self, position: GridPosition) -> LocationDefinition | None:
        """Get the location whose position is exactly this tile, if any."""
        return self._location_by_position.get((position.x, position.y))

    def all_locations(self) -> tuple[LocationDefinition, ...]:
        if self._map is None:
            return ()
        return self._map.locations

    def locations_by_region(self) -> dict[Region, list[LocationDefinition]]:
        """Group locations by region.

        Every region the map declares gets a key, even when empty.
        """
        regions = self._map.regions if self._map is not None else tuple(Region)
        grouped: dict[Region, list[LocationDefinition]] = {region: [] for region in regions}
        for location in self.all_locations():
            if location.region in grouped:
                grouped[location.region].append(location)
        return grouped


__all__ = ["DataRegistry"]
