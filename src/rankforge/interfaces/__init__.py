"""Protocol-based interfaces for the collaborators the editor core depends on.

Catalogs and the dismissal store are supplied from outside the core; these
protocols give the contract and let tests inject simple in-memory fakes.
"""

from rankforge.interfaces.catalogs import IOutfitCatalog, IStationCatalog, IVehicleCatalog
from rankforge.interfaces.storage import IDismissalStore

__all__ = [
    "IDismissalStore",
    "IOutfitCatalog",
    "IStationCatalog",
    "IVehicleCatalog",
]
