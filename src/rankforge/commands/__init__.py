"""Command-pattern undo/redo for every edit made to a rank hierarchy.

Each command exposes ``execute``/``undo`` and a human readable
``description``; :class:`UndoRedoManager` keeps them on two bounded stacks.
"""

from rankforge.commands.base import (
    Command,
    CommandError,
    CompositeCommand,
    PropertyChangeCommand,
    RankSnapshotCommand,
)
from rankforge.commands.manager import DEFAULT_CAPACITY, UndoRedoManager
from rankforge.commands.outfits import (
    BulkAddOutfitsCommand,
    BulkRemoveOutfitsCommand,
    CopyOutfitsFromRankCommand,
    CopyOutfitsToRankCommand,
    RemoveAllOutfitsCommand,
)
from rankforge.commands.ranks import (
    AddPayBandCommand,
    AddRankCommand,
    CloneRankCommand,
    MoveRankCommand,
    PromoteRankCommand,
    RemoveAllRanksCommand,
    RemoveRankCommand,
    RenameRankCommand,
)
from rankforge.commands.stations import (
    AddAllStationsCommand,
    BulkAddStationsCommand,
    BulkRemoveStationsCommand,
    CopyStationsFromRankCommand,
    CopyStationsToRankCommand,
    RemoveAllStationsCommand,
)
from rankforge.commands.vehicles import (
    BulkAddVehiclesCommand,
    BulkRemoveVehiclesCommand,
    CopyVehiclesFromRankCommand,
    CopyVehiclesToRankCommand,
    RemoveAllVehiclesCommand,
)

__all__ = [
    "AddAllStationsCommand",
    "AddPayBandCommand",
    "AddRankCommand",
    "BulkAddOutfitsCommand",
    "BulkAddStationsCommand",
    "BulkAddVehiclesCommand",
    "BulkRemoveOutfitsCommand",
    "BulkRemoveStationsCommand",
    "BulkRemoveVehiclesCommand",
    "CloneRankCommand",
    "Command",
    "CommandError",
    "CompositeCommand",
    "CopyOutfitsFromRankCommand",
    "CopyOutfitsToRankCommand",
    "CopyStationsFromRankCommand",
    "CopyStationsToRankCommand",
    "CopyVehiclesFromRankCommand",
    "CopyVehiclesToRankCommand",
    "DEFAULT_CAPACITY",
    "MoveRankCommand",
    "PromoteRankCommand",
    "PropertyChangeCommand",
    "RankSnapshotCommand",
    "RemoveAllOutfitsCommand",
    "RemoveAllRanksCommand",
    "RemoveAllStationsCommand",
    "RemoveAllVehiclesCommand",
    "RemoveRankCommand",
    "RenameRankCommand",
    "UndoRedoManager",
]
