"""Reference checks against the externally supplied catalogs."""

from __future__ import annotations

from dataclasses import dataclass

from rankforge.domain.enums import IssueCategory, Severity
from rankforge.domain.models import Rank, RankHierarchy
from rankforge.interfaces.catalogs import IOutfitCatalog, IStationCatalog, IVehicleCatalog
from rankforge.validation.issues import ValidationIssue

REFERENCE_VALIDATION = "REFERENCE_VALIDATION"


@dataclass(slots=True)
class CatalogSet:
    """Catalog lookups available to a validation pass; any of them may be absent."""

    stations: IStationCatalog | None = None
    vehicles: IVehicleCatalog | None = None
    outfits: IOutfitCatalog | None = None


def _unknown(rank: Rank, category: IssueCategory, kind: str, item: str) -> ValidationIssue:
    return ValidationIssue(
        severity=Severity.ERROR,
        category=category,
        message=f"Rank '{rank.name}': {kind} '{item}' not found in game data.",
        rank_id=rank.id,
        rank_name=rank.name,
        item_name=item,
        rule_id=REFERENCE_VALIDATION,
        suggested_fix=f"Remove the {kind.lower()} or install the content that provides it.",
    )


def check_rank_references(rank: Rank, catalogs: CatalogSet) -> list[ValidationIssue]:
    """Flag stations, vehicles and outfits of ``rank`` that no catalog knows."""

    issues: list[ValidationIssue] = []

    if catalogs.stations is not None:
        for station in rank.stations:
            if not catalogs.stations.has_station(station.station_name):
                issues.append(_unknown(rank, IssueCategory.STATION, "Station", station.station_name))

    if catalogs.vehicles is not None:
        models = [vehicle.model for vehicle in rank.vehicles]
        for station in rank.stations:
            models.extend(vehicle.model for vehicle in station.vehicle_overrides)
        for model in dict.fromkeys(models):
            if not catalogs.vehicles.has_vehicle(model):
                issues.append(_unknown(rank, IssueCategory.VEHICLE, "Vehicle", model))

    if catalogs.outfits is not None:
        outfits = list(rank.outfits)
        for station in rank.stations:
            outfits.extend(station.outfit_overrides)
        for outfit in dict.fromkeys(outfits):
            if not catalogs.outfits.has_outfit(outfit):
                issues.append(_unknown(rank, IssueCategory.OUTFIT, "Outfit", outfit))

    return issues


def check_station_presence(rank: Rank) -> ValidationIssue | None:
    """A rank written to the output file needs at least one station."""

    if rank.stations:
        return None
    return ValidationIssue(
        severity=Severity.ERROR,
        category=IssueCategory.STATION,
        message=f"Rank '{rank.name}' must have at least one station assigned.",
        rank_id=rank.id,
        rank_name=rank.name,
        rule_id=REFERENCE_VALIDATION,
        suggested_fix="Assign at least one station to this rank.",
    )


def check_reference_rule(
    hierarchy: RankHierarchy,
    catalogs: CatalogSet,
    *,
    require_stations: bool = False,
) -> list[ValidationIssue]:
    """Catalog checks over the flattened ranks, plus the station-presence gate."""

    issues: list[ValidationIssue] = []
    for rank in hierarchy.flatten():
        if require_stations:
            missing = check_station_presence(rank)
            if missing is not None:
                issues.append(missing)
        issues.extend(check_rank_references(rank, catalogs))
    return issues
