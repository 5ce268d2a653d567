"""Bulk station-assignment commands; each undoes by restoring the station list."""

from __future__ import annotations

from collections.abc import Iterable

from rankforge.commands.base import RankSnapshotCommand, counted
from rankforge.domain.models import Rank, RankHierarchy, StationAssignment


def _names(stations: Iterable[StationAssignment]) -> set[str]:
    return {station.station_name.casefold() for station in stations}


class _StationListCommand(RankSnapshotCommand[list[StationAssignment]]):
    def _capture(self, rank: Rank) -> list[StationAssignment]:
        return list(rank.stations)

    def _restore(self, rank: Rank, snapshot: list[StationAssignment]) -> None:
        rank.stations[:] = snapshot


class BulkAddStationsCommand(_StationListCommand):
    """Append the given assignments to a rank."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank, stations: Iterable[StationAssignment]) -> None:
        super().__init__(hierarchy, rank)
        self.stations = list(stations)
        self.description = f"Add {counted(len(self.stations), 'station')} to '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        rank.stations.extend(self.stations)


class AddAllStationsCommand(_StationListCommand):
    """Assign every available station the rank does not have yet."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank, available: Iterable[StationAssignment]) -> None:
        super().__init__(hierarchy, rank)
        self.available = list(available)
        self.added: list[StationAssignment] = []
        self.description = (
            f"Add all {counted(len(self.available), 'available station')} to '{rank.name}'"
        )

    def _apply(self, rank: Rank) -> None:
        present = _names(rank.stations)
        self.added = []
        for station in self.available:
            key = station.station_name.casefold()
            if key in present:
                continue
            present.add(key)
            rank.stations.append(station)
            self.added.append(station)


class BulkRemoveStationsCommand(_StationListCommand):
    """Remove assignments by station name (case-insensitive)."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank, station_names: Iterable[str]) -> None:
        super().__init__(hierarchy, rank)
        self.station_names = list(station_names)
        self.description = f"Remove {counted(len(self.station_names), 'station')} from '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        doomed = {name.casefold() for name in self.station_names}
        rank.stations[:] = [s for s in rank.stations if s.station_name.casefold() not in doomed]


class RemoveAllStationsCommand(_StationListCommand):
    """Clear every station assignment of a rank."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank) -> None:
        super().__init__(hierarchy, rank)
        self.description = f"Remove all {counted(len(rank.stations), 'station')} from '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        rank.stations.clear()


class CopyStationsFromRankCommand(_StationListCommand):
    """Merge copies of another rank's stations that the target is missing."""

    def __init__(self, hierarchy: RankHierarchy, source: Rank, target: Rank) -> None:
        super().__init__(hierarchy, target)
        self.source = source
        self.added: list[StationAssignment] = []
        self.description = f"Copy stations from '{source.name}' to '{target.name}'"

    def _apply(self, rank: Rank) -> None:
        present = _names(rank.stations)
        self.added = []
        for station in self.source.stations:
            key = station.station_name.casefold()
            if key in present:
                continue
            present.add(key)
            copy = station.copy()
            rank.stations.append(copy)
            self.added.append(copy)


class CopyStationsToRankCommand(_StationListCommand):
    """Replace the target's stations with copies of the source's."""

    def __init__(self, hierarchy: RankHierarchy, source: Rank, target: Rank) -> None:
        super().__init__(hierarchy, target)
        self.source = source
        self.description = (
            f"Copy {counted(len(source.stations), 'station')} from '{source.name}' "
            f"to '{target.name}' (overwrite)"
        )

    def _apply(self, rank: Rank) -> None:
        rank.stations[:] = [station.copy() for station in self.source.stations]
