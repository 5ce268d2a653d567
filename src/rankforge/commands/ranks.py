"""Commands that change the shape of the rank tree.

Every command remembers the ids and indexes it touched. ``undo`` checks that
the rank it is about to remove is still at the recorded position and raises
:class:`~rankforge.commands.base.CommandError` otherwise, so commands are
only valid when undone in stack order.
"""

from __future__ import annotations

from rankforge.commands.base import CommandError, counted, resolve_rank
from rankforge.domain.models import Rank, RankHierarchy, RankID

NameSnapshot = list[tuple[RankID, str]]


def _band_names(parent: Rank) -> NameSnapshot:
    return [(band.id, band.name) for band in parent.pay_bands]


def _restore_band_names(parent: Rank, snapshot: NameSnapshot) -> None:
    names = dict(snapshot)
    for band in parent.pay_bands:
        if band.id in names:
            band.name = names[band.id]


def _expect_at(sequence: list[Rank], index: int, rank_id: RankID, action: str) -> None:
    if not 0 <= index < len(sequence) or sequence[index].id != rank_id:
        raise CommandError(f"cannot {action}: rank {rank_id} is not at index {index}")


def _check_insert_index(sequence: list[Rank], index: int) -> None:
    if not 0 <= index <= len(sequence):
        raise CommandError(f"invalid insert index {index} for {len(sequence)} item(s)")


class AddRankCommand:
    """Insert a new top-level rank at a fixed index."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank, index: int) -> None:
        self._hierarchy = hierarchy
        self.rank = rank
        self.index = index
        self.description = f"Add rank '{rank.name}' at index {index}"

    def execute(self) -> None:
        _check_insert_index(self._hierarchy.ranks, self.index)
        self._hierarchy.insert_rank(self.index, self.rank)

    def undo(self) -> None:
        _expect_at(self._hierarchy.ranks, self.index, self.rank.id, "undo add rank")
        self._hierarchy.pop_rank(self.index)


class AddPayBandCommand:
    """Insert a pay band into a parent and renumber its siblings."""

    def __init__(self, hierarchy: RankHierarchy, parent: Rank, band: Rank, index: int | None = None) -> None:
        self._hierarchy = hierarchy
        self.parent_id = parent.id
        self.band = band
        self._requested_index = index
        self.index = -1
        self._names: NameSnapshot = []
        self._was_parent = parent.is_parent
        self.description = f"Add pay band '{band.name}' to '{parent.name}'"

    def execute(self) -> None:
        parent = resolve_rank(self._hierarchy, self.parent_id)
        if parent.is_pay_band:
            raise CommandError("pay bands cannot have pay bands of their own")
        index = self._requested_index
        if index is None or not 0 <= index <= len(parent.pay_bands):
            index = len(parent.pay_bands)
        self._names = _band_names(parent)
        self._was_parent = parent.is_parent
        self._hierarchy.insert_pay_band(parent, index, self.band)
        self.index = index

    def undo(self) -> None:
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _expect_at(parent.pay_bands, self.index, self.band.id, "undo add pay band")
        self._hierarchy.pop_pay_band(parent, self.index)
        _restore_band_names(parent, self._names)
        parent.is_parent = self._was_parent


class CloneRankCommand:
    """Insert a deep copy of a rank (or of a pay band, inside the same parent)."""

    def __init__(self, hierarchy: RankHierarchy, source: Rank, index: int | None = None) -> None:
        self._hierarchy = hierarchy
        self.source_id = source.id
        self.clone = source.clone()
        parent = hierarchy.parent_of(source)
        self.parent_id = parent.id if parent is not None else None
        self.index = index if index is not None else hierarchy.index_of(source) + 1
        self._names: NameSnapshot = []
        if parent is None:
            self.description = f"Clone rank '{source.name}' to '{self.clone.name}'"
        else:
            self.description = f"Clone pay band '{source.name}' in '{parent.name}'"

    def execute(self) -> None:
        if self.parent_id is None:
            _check_insert_index(self._hierarchy.ranks, self.index)
            self._hierarchy.insert_rank(self.index, self.clone)
            return
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _check_insert_index(parent.pay_bands, self.index)
        self._names = _band_names(parent)
        self._hierarchy.insert_pay_band(parent, self.index, self.clone)

    def undo(self) -> None:
        if self.parent_id is None:
            _expect_at(self._hierarchy.ranks, self.index, self.clone.id, "undo clone")
            self._hierarchy.pop_rank(self.index)
            return
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _expect_at(parent.pay_bands, self.index, self.clone.id, "undo clone")
        self._hierarchy.pop_pay_band(parent, self.index)
        _restore_band_names(parent, self._names)


class MoveRankCommand:
    """Move a rank among its siblings; moving a pay band renumbers the bands."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank, from_index: int, to_index: int) -> None:
        self._hierarchy = hierarchy
        self.rank_id = rank.id
        self.parent_id = rank.parent_id
        self.from_index = from_index
        self.to_index = to_index
        self._names: NameSnapshot = []
        direction = "up" if to_index < from_index else "down"
        self.description = f"Move '{rank.name}' {direction} (from index {from_index} to {to_index})"

    def _siblings(self) -> tuple[Rank | None, list[Rank]]:
        if self.parent_id is None:
            return None, self._hierarchy.ranks
        parent = resolve_rank(self._hierarchy, self.parent_id)
        return parent, parent.pay_bands

    def _move(self, from_index: int, to_index: int) -> None:
        parent, siblings = self._siblings()
        _expect_at(siblings, from_index, self.rank_id, "move rank")
        if not 0 <= to_index < len(siblings):
            raise CommandError(f"invalid target index {to_index}")
        siblings.insert(to_index, siblings.pop(from_index))
        if parent is not None:
            self._hierarchy.renumber_pay_bands(parent)

    def execute(self) -> None:
        parent, _ = self._siblings()
        if parent is not None:
            self._names = _band_names(parent)
        self._move(self.from_index, self.to_index)

    def undo(self) -> None:
        self._move(self.to_index, self.from_index)
        parent, _ = self._siblings()
        if parent is not None:
            _restore_band_names(parent, self._names)


class PromoteRankCommand:
    """Turn a pay band into a top-level rank placed right after its old parent."""

    def __init__(self, hierarchy: RankHierarchy, band: Rank) -> None:
        parent = hierarchy.parent_of(band)
        if parent is None:
            raise CommandError(f"'{band.name}' is not a pay band")
        self._hierarchy = hierarchy
        self.band = band
        self.parent_id = parent.id
        self.band_index = hierarchy.index_of(band)
        self.insert_index = hierarchy.index_of(parent) + 1
        self._names: NameSnapshot = []
        self.description = f"Promote pay band '{band.name}' from '{parent.name}' to parent rank"

    def execute(self) -> None:
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _expect_at(parent.pay_bands, self.band_index, self.band.id, "promote")
        _check_insert_index(self._hierarchy.ranks, self.insert_index)
        self._names = _band_names(parent)
        self._hierarchy.pop_pay_band(parent, self.band_index)
        self._hierarchy.insert_rank(self.insert_index, self.band)

    def undo(self) -> None:
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _expect_at(self._hierarchy.ranks, self.insert_index, self.band.id, "undo promote")
        self._hierarchy.pop_rank(self.insert_index)
        self._hierarchy.insert_pay_band(parent, self.band_index, self.band)
        _restore_band_names(parent, self._names)


class RemoveRankCommand:
    """Remove a top-level rank or a pay band, keeping it for undo."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank) -> None:
        self._hierarchy = hierarchy
        self.rank = rank
        parent = hierarchy.parent_of(rank)
        self.parent_id = parent.id if parent is not None else None
        self.index = hierarchy.index_of(rank)
        if self.index < 0:
            raise CommandError(f"'{rank.name}' is not part of the hierarchy")
        self._names: NameSnapshot = []
        self._was_parent = parent.is_parent if parent is not None else False
        if parent is None:
            self.description = f"Remove rank '{rank.name}'"
        else:
            self.description = f"Remove pay band '{rank.name}' from '{parent.name}'"

    def execute(self) -> None:
        if self.parent_id is None:
            _expect_at(self._hierarchy.ranks, self.index, self.rank.id, "remove rank")
            self._hierarchy.pop_rank(self.index)
            return
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _expect_at(parent.pay_bands, self.index, self.rank.id, "remove pay band")
        self._names = _band_names(parent)
        self._was_parent = parent.is_parent
        self._hierarchy.pop_pay_band(parent, self.index)

    def undo(self) -> None:
        if self.parent_id is None:
            _check_insert_index(self._hierarchy.ranks, self.index)
            self._hierarchy.insert_rank(self.index, self.rank)
            return
        parent = resolve_rank(self._hierarchy, self.parent_id)
        _check_insert_index(parent.pay_bands, self.index)
        self._hierarchy.insert_pay_band(parent, self.index, self.rank)
        _restore_band_names(parent, self._names)
        parent.is_parent = self._was_parent


class RemoveAllRanksCommand:
    """Clear the hierarchy, keeping the whole top-level list for undo."""

    def __init__(self, hierarchy: RankHierarchy) -> None:
        self._hierarchy = hierarchy
        self._snapshot: list[Rank] = []
        self.description = f"Remove all {counted(len(hierarchy.ranks), 'rank')}"

    def execute(self) -> None:
        self._snapshot = list(self._hierarchy.ranks)
        self._hierarchy.replace_ranks([])

    def undo(self) -> None:
        self._hierarchy.replace_ranks(self._snapshot)


class RenameRankCommand:
    """Rename a rank; a parent's pay bands follow the new name."""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank, new_name: str, old_name: str | None = None) -> None:
        self._hierarchy = hierarchy
        self.rank_id = rank.id
        self.old_name = rank.name if old_name is None else old_name
        self.new_name = new_name
        self._names: NameSnapshot = []
        self.description = f"Change Name of '{self.old_name}' from {self.old_name} to {new_name}"

    def execute(self) -> None:
        rank = resolve_rank(self._hierarchy, self.rank_id)
        self._names = _band_names(rank)
        rank.name = self.new_name
        if rank.pay_bands:
            self._hierarchy.renumber_pay_bands(rank)

    def undo(self) -> None:
        rank = resolve_rank(self._hierarchy, self.rank_id)
        rank.name = self.old_name
        _restore_band_names(rank, self._names)
