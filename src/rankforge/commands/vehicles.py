"""Bulk vehicle commands covering rank-wide vehicles and station overrides."""

from __future__ import annotations

from collections.abc import Iterable

from rankforge.commands.base import CommandError, RankSnapshotCommand, counted
from rankforge.domain.models import Rank, RankHierarchy, StationAssignment, Vehicle

VehicleSnapshot = tuple[list[Vehicle], list[tuple[StationAssignment, list[Vehicle]]]]


def find_station(rank: Rank, station_name: str) -> StationAssignment | None:
    wanted = station_name.casefold()
    for station in rank.stations:
        if station.station_name.casefold() == wanted:
            return station
    return None


def _append_missing(target: list[Vehicle], vehicle: Vehicle) -> bool:
    if vehicle in target:
        return False
    target.append(vehicle)
    return True


class _VehicleListCommand(RankSnapshotCommand[VehicleSnapshot]):
    def _capture(self, rank: Rank) -> VehicleSnapshot:
        overrides = [(station, list(station.vehicle_overrides)) for station in rank.stations]
        return list(rank.vehicles), overrides

    def _restore(self, rank: Rank, snapshot: VehicleSnapshot) -> None:
        vehicles, overrides = snapshot
        rank.vehicles[:] = vehicles
        for station, saved in overrides:
            station.vehicle_overrides[:] = saved

    def _target_list(self, rank: Rank, station_name: str | None) -> list[Vehicle]:
        if station_name is None:
            return rank.vehicles
        station = find_station(rank, station_name)
        if station is None:
            raise CommandError(f"rank '{rank.name}' has no station '{station_name}'")
        return station.vehicle_overrides


class BulkAddVehiclesCommand(_VehicleListCommand):
    """Add vehicles to a rank, or to one of its stations; duplicates are skipped."""

    def __init__(
        self,
        hierarchy: RankHierarchy,
        rank: Rank,
        vehicles: Iterable[Vehicle],
        *,
        station_name: str | None = None,
    ) -> None:
        super().__init__(hierarchy, rank)
        self.vehicles = list(vehicles)
        self.station_name = station_name
        self.description = f"Add {counted(len(self.vehicles), 'vehicle')} to '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        target = self._target_list(rank, self.station_name)
        for vehicle in self.vehicles:
            _append_missing(target, vehicle)


class BulkRemoveVehiclesCommand(_VehicleListCommand):
    """Remove vehicles (matched by model) from a rank or one of its stations."""

    def __init__(
        self,
        hierarchy: RankHierarchy,
        rank: Rank,
        vehicles: Iterable[Vehicle],
        *,
        station_name: str | None = None,
    ) -> None:
        super().__init__(hierarchy, rank)
        self.vehicles = list(vehicles)
        self.station_name = station_name
        self.description = f"Remove {counted(len(self.vehicles), 'vehicle')} from '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        target = self._target_list(rank, self.station_name)
        doomed = set(self.vehicles)
        target[:] = [vehicle for vehicle in target if vehicle not in doomed]


class RemoveAllVehiclesCommand(_VehicleListCommand):
    """Clear the rank-wide vehicle list."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank) -> None:
        super().__init__(hierarchy, rank)
        self.description = f"Remove all {counted(len(rank.vehicles), 'vehicle')} from '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        rank.vehicles.clear()


class CopyVehiclesFromRankCommand(_VehicleListCommand):
    """Merge another rank's vehicles into the target.

    Station overrides land on the target station with the same name, or on
    the rank-wide list when the target has no such station.
    """

    def __init__(self, hierarchy: RankHierarchy, source: Rank, target: Rank) -> None:
        super().__init__(hierarchy, target)
        self.source = source
        self.added_global: list[Vehicle] = []
        self.added_by_station: dict[str, list[Vehicle]] = {}
        self.description = f"Copy vehicles from '{source.name}' to '{target.name}'"

    def _apply(self, rank: Rank) -> None:
        self.added_global = []
        self.added_by_station = {}
        for vehicle in self.source.vehicles:
            if _append_missing(rank.vehicles, vehicle):
                self.added_global.append(vehicle)
        for source_station in self.source.stations:
            target_station = find_station(rank, source_station.station_name)
            for vehicle in source_station.vehicle_overrides:
                if target_station is None:
                    if _append_missing(rank.vehicles, vehicle):
                        self.added_global.append(vehicle)
                elif _append_missing(target_station.vehicle_overrides, vehicle):
                    self.added_by_station.setdefault(target_station.station_name, []).append(vehicle)


class CopyVehiclesToRankCommand(_VehicleListCommand):
    """Overwrite the target's vehicles and station overrides with the source's."""

    def __init__(self, hierarchy: RankHierarchy, source: Rank, target: Rank) -> None:
        super().__init__(hierarchy, target)
        self.source = source
        models = {vehicle.model.casefold() for vehicle in source.vehicles}
        for station in source.stations:
            models.update(vehicle.model.casefold() for vehicle in station.vehicle_overrides)
        self.description = (
            f"Copy {counted(len(models), 'vehicle')} from '{source.name}' "
            f"to '{target.name}' (overwrite)"
        )

    def _apply(self, rank: Rank) -> None:
        rank.vehicles[:] = list(self.source.vehicles)
        for station in rank.stations:
            station.vehicle_overrides.clear()
        for source_station in self.source.stations:
            target_station = find_station(rank, source_station.station_name)
            for vehicle in source_station.vehicle_overrides:
                if target_station is None:
                    rank.vehicles.append(vehicle)
                else:
                    target_station.vehicle_overrides.append(vehicle)
