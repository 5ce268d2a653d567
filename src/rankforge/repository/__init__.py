"""Storage adapters and in-memory catalog implementations."""

from rankforge.repository.catalogs import OutfitCatalog, StationCatalog, VehicleCatalog
from rankforge.repository.json_store import JsonDismissalStore, MemoryDismissalStore

__all__ = [
    "JsonDismissalStore",
    "MemoryDismissalStore",
    "OutfitCatalog",
    "StationCatalog",
    "VehicleCatalog",
]
