"""In-memory catalogs satisfying the catalog protocols.

Loading catalogs from game files is outside the editor core; callers build
these from whatever they parsed and hand them to validation or the session.
"""

from __future__ import annotations

from collections.abc import Iterable

from rankforge.domain.models import OutfitVariation, Station, Vehicle


class StationCatalog:
    """Stations keyed by name (case-insensitive)."""

    def __init__(self, stations: Iterable[Station] = ()) -> None:
        self._stations = {station.name.casefold(): station for station in stations}

    def __len__(self) -> int:
        return len(self._stations)

    def has_station(self, name: str) -> bool:
        return name.casefold() in self._stations

    def get_station(self, name: str) -> Station | None:
        return self._stations.get(name.casefold())

    def all(self) -> list[Station]:
        return list(self._stations.values())


class VehicleCatalog:
    """Vehicles keyed by model (case-insensitive)."""

    def __init__(self, vehicles: Iterable[Vehicle] = ()) -> None:
        self._vehicles = {vehicle.model.casefold(): vehicle for vehicle in vehicles}

    def __len__(self) -> int:
        return len(self._vehicles)

    def has_vehicle(self, model: str) -> bool:
        return model.casefold() in self._vehicles

    def get_vehicle(self, model: str) -> Vehicle | None:
        return self._vehicles.get(model.casefold())

    def for_agency(self, agency: str) -> list[Vehicle]:
        return [vehicle for vehicle in self._vehicles.values() if vehicle.belongs_to_agency(agency)]


class OutfitCatalog:
    """Outfit variations keyed by combined name (case-insensitive)."""

    def __init__(self, outfits: Iterable[OutfitVariation] = ()) -> None:
        self._outfits = {outfit.combined_name.casefold(): outfit for outfit in outfits}

    def __len__(self) -> int:
        return len(self._outfits)

    def has_outfit(self, combined_name: str) -> bool:
        return combined_name.casefold() in self._outfits

    def get_outfit(self, combined_name: str) -> OutfitVariation | None:
        return self._outfits.get(combined_name.casefold())
