"""Catalog Protocol Interfaces.

This module defines the read-only lookups the validation engine and the
editor session use to resolve station names, vehicle models and outfit
combined names against externally loaded game data.
"""

from typing import Protocol

from rankforge.domain.models import OutfitVariation, Station, Vehicle


class IStationCatalog(Protocol):
    """Protocol for the station catalog, keyed by station name."""

    def has_station(self, name: str) -> bool:
        """Return whether a station with this name exists."""
        ...

    def get_station(self, name: str) -> Station | None:
        """Look up a station by name.

        Args:
            name: Station name as stored in a station assignment

        Returns:
            The catalog entry, or None when the name is unknown
        """
        ...


class IVehicleCatalog(Protocol):
    """Protocol for the vehicle catalog, keyed by model."""

    def has_vehicle(self, model: str) -> bool:
        """Return whether a vehicle with this model exists."""
        ...

    def get_vehicle(self, model: str) -> Vehicle | None:
        """Look up a vehicle by model name."""
        ...


class IOutfitCatalog(Protocol):
    """Protocol for the outfit catalog, keyed by combined outfit name."""

    def has_outfit(self, combined_name: str) -> bool:
        """Return whether an outfit variation with this combined name exists."""
        ...

    def get_outfit(self, combined_name: str) -> OutfitVariation | None:
        """Look up an outfit variation by ``"Outfit.Variation"`` name."""
        ...
