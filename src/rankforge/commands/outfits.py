"""Bulk outfit commands; outfits are combined ``"Outfit.Variation"`` names."""

from __future__ import annotations

from collections.abc import Iterable

from rankforge.commands.base import CommandError, RankSnapshotCommand, counted
from rankforge.commands.vehicles import find_station
from rankforge.domain.models import Rank, RankHierarchy, StationAssignment

OutfitSnapshot = tuple[list[str], list[tuple[StationAssignment, list[str]]]]


def _contains(outfits: Iterable[str], outfit: str) -> bool:
    wanted = outfit.casefold()
    return any(item.casefold() == wanted for item in outfits)


class _OutfitListCommand(RankSnapshotCommand[OutfitSnapshot]):
    def _capture(self, rank: Rank) -> OutfitSnapshot:
        overrides = [(station, list(station.outfit_overrides)) for station in rank.stations]
        return list(rank.outfits), overrides

    def _restore(self, rank: Rank, snapshot: OutfitSnapshot) -> None:
        outfits, overrides = snapshot
        rank.outfits[:] = outfits
        for station, saved in overrides:
            station.outfit_overrides[:] = saved

    def _target_list(self, rank: Rank, station_name: str | None) -> list[str]:
        if station_name is None:
            return rank.outfits
        station = find_station(rank, station_name)
        if station is None:
            raise CommandError(f"rank '{rank.name}' has no station '{station_name}'")
        return station.outfit_overrides


class BulkAddOutfitsCommand(_OutfitListCommand):
    """Add outfits to a rank or one of its stations, skipping ones already there."""

    def __init__(
        self,
        hierarchy: RankHierarchy,
        rank: Rank,
        outfits: Iterable[str],
        *,
        station_name: str | None = None,
    ) -> None:
        super().__init__(hierarchy, rank)
        self.outfits = list(outfits)
        self.station_name = station_name
        self.description = f"Add {counted(len(self.outfits), 'outfit')} to '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        target = self._target_list(rank, self.station_name)
        for outfit in self.outfits:
            if not _contains(target, outfit):
                target.append(outfit)


class BulkRemoveOutfitsCommand(_OutfitListCommand):
    """Remove outfits (case-insensitive) from a rank or one of its stations."""

    def __init__(
        self,
        hierarchy: RankHierarchy,
        rank: Rank,
        outfits: Iterable[str],
        *,
        station_name: str | None = None,
    ) -> None:
        super().__init__(hierarchy, rank)
        self.outfits = list(outfits)
        self.station_name = station_name
        self.description = f"Remove {counted(len(self.outfits), 'outfit')} from '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        target = self._target_list(rank, self.station_name)
        doomed = {outfit.casefold() for outfit in self.outfits}
        target[:] = [outfit for outfit in target if outfit.casefold() not in doomed]


class RemoveAllOutfitsCommand(_OutfitListCommand):
    """Clear the rank-wide outfit list."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank) -> None:
        super().__init__(hierarchy, rank)
        self.description = f"Remove all {counted(len(rank.outfits), 'outfit')} from '{rank.name}'"

    def _apply(self, rank: Rank) -> None:
        rank.outfits.clear()


class CopyOutfitsFromRankCommand(_OutfitListCommand):
    """Union the source's outfits, station overrides included, into the target's list."""

    def __init__(self, hierarchy: RankHierarchy, source: Rank, target: Rank) -> None:
        super().__init__(hierarchy, target)
        self.source = source
        self.added: list[str] = []
        self.description = f"Copy outfits from '{source.name}' to '{target.name}'"

    def _apply(self, rank: Rank) -> None:
        self.added = []
        candidates = list(self.source.outfits)
        for station in self.source.stations:
            candidates.extend(station.outfit_overrides)
        for outfit in candidates:
            if not _contains(rank.outfits, outfit):
                rank.outfits.append(outfit)
                self.added.append(outfit)


class CopyOutfitsToRankCommand(_OutfitListCommand):
    """Overwrite the target's outfits and station overrides with the source's."""

    def __init__(self, hierarchy: RankHierarchy, source: Rank, target: Rank) -> None:
        super().__init__(hierarchy, target)
        self.source = source
        names = {outfit.casefold() for outfit in source.outfits}
        for station in source.stations:
            names.update(outfit.casefold() for outfit in station.outfit_overrides)
        self.description = (
            f"Copy {counted(len(names), 'outfit')} from '{source.name}' "
            f"to '{target.name}' (overwrite)"
        )

    def _apply(self, rank: Rank) -> None:
        rank.outfits[:] = list(self.source.outfits)
        for station in rank.stations:
            station.outfit_overrides.clear()
        for source_station in self.source.stations:
            target_station = find_station(rank, source_station.station_name)
            for outfit in source_station.outfit_overrides:
                if target_station is None:
                    rank.outfits.append(outfit)
                else:
                    target_station.outfit_overrides.append(outfit)
