"""Tests for the undo/redo manager and the rank-structure commands."""

from __future__ import annotations

import pytest

from rankforge.commands import (
    AddPayBandCommand,
    AddRankCommand,
    CloneRankCommand,
    CommandError,
    CompositeCommand,
    MoveRankCommand,
    PromoteRankCommand,
    PropertyChangeCommand,
    RemoveAllRanksCommand,
    RemoveRankCommand,
    RenameRankCommand,
    UndoRedoManager,
)
from rankforge.domain.models import Rank, RankHierarchy


class _Counter:
    """Command adding a fixed step to a shared total."""

    def __init__(self, total: list[int], step: int = 1) -> None:
        self.total = total
        self.step = step
        self.description = f"add {step}"

    def execute(self) -> None:
        self.total[0] += self.step

    def undo(self) -> None:
        self.total[0] -= self.step


class _Exploding:
    description = "explode"

    def execute(self) -> None:
        raise CommandError("boom")

    def undo(self) -> None:
        raise CommandError("boom")


def _names(hierarchy: RankHierarchy) -> list[str]:
    return [rank.name for rank in hierarchy.ranks]


def _band_names(rank: Rank) -> list[str]:
    return [band.name for band in rank.pay_bands]


def _hierarchy() -> tuple[RankHierarchy, Rank, Rank]:
    rookie = Rank(name="Rookie", required_points=0, salary=1000)
    officer = Rank(name="Officer", required_points=100, salary=1500)
    for _ in range(3):
        officer.add_pay_band()
    return RankHierarchy([rookie, officer]), rookie, officer


class TestUndoRedoManager:
    """Tests for the bounded undo/redo stacks."""

    def test_execute_undo_redo(self):
        """Commands move between the undo and redo stacks."""
        total = [0]
        manager = UndoRedoManager()

        manager.execute(_Counter(total, 5))
        assert total == [5]
        assert manager.undo_description == "add 5"

        assert manager.undo()
        assert total == [0]
        assert manager.redo_description == "add 5"

        assert manager.redo()
        assert total == [5]
        assert not manager.can_redo

    def test_undo_and_redo_on_empty_stacks(self):
        """Undo and redo report False when there is nothing to do."""
        manager = UndoRedoManager()

        assert not manager.undo()
        assert not manager.redo()
        assert manager.undo_description is None

    def test_stack_is_bounded_and_drops_oldest(self):
        """The oldest command is evicted once capacity is reached."""
        total = [0]
        manager = UndoRedoManager(capacity=50)

        for step in range(1, 52):
            manager.execute(_Counter(total, step))

        assert manager.undo_count == 50
        history = manager.undo_history()
        assert history[0] == "add 51"
        assert history[-1] == "add 2"

        while manager.undo():
            pass
        assert total == [1]
        assert manager.redo_count == 50

    def test_new_command_clears_redo(self):
        """Executing a new command discards the redo stack."""
        total = [0]
        manager = UndoRedoManager()
        manager.execute(_Counter(total))
        manager.undo()

        manager.execute(_Counter(total, 2))

        assert not manager.can_redo
        assert manager.undo_count == 1

    def test_failing_command_leaves_stacks_untouched(self):
        """A raising command is not recorded."""
        total = [0]
        manager = UndoRedoManager()
        manager.execute(_Counter(total))

        with pytest.raises(CommandError):
            manager.execute(_Exploding())

        assert manager.undo_count == 1
        assert manager.undo_description == "add 1"

    def test_listeners_are_notified(self):
        """Subscribers hear about every stack change."""
        calls: list[str] = []
        manager = UndoRedoManager()
        manager.subscribe(lambda: calls.append("changed"))

        manager.execute(_Counter([0]))
        manager.undo()
        manager.redo()
        manager.clear()

        assert calls == ["changed"] * 4
        assert manager.undo_count == 0

    def test_capacity_must_be_positive(self):
        """A zero capacity is rejected."""
        with pytest.raises(ValueError, match="capacity must be positive"):
            UndoRedoManager(capacity=0)


class TestGenericCommands:
    """Composite and property-change commands."""

    def test_composite_runs_in_order_and_undoes_in_reverse(self):
        """Composite commands undo their parts in reverse order."""
        log: list[str] = []

        def setter(tag):
            return lambda value: log.append(f"{tag}={value}")

        composite = CompositeCommand(
            "Property changes",
            [
                PropertyChangeCommand(setter("a"), 1, 2, "A", "x"),
                PropertyChangeCommand(setter("b"), 3, 4, "B", "x"),
            ],
        )

        composite.execute()
        composite.undo()

        assert log == ["a=2", "b=4", "b=3", "a=1"]
        assert composite.command_count == 2
        assert composite.sub_descriptions == ["Change A of 'x' from 1 to 2", "Change B of 'x' from 3 to 4"]

    def test_composite_rolls_back_on_failure(self):
        """Parts already run are undone when a later part raises."""
        total = [0]
        composite = CompositeCommand("batch")
        composite.add(_Counter(total, 3))
        composite.add(_Exploding())

        with pytest.raises(CommandError):
            composite.execute()

        assert total == [0]

    def test_empty_composite_is_a_no_op(self):
        """An empty composite changes nothing."""
        composite = CompositeCommand("nothing")

        composite.execute()
        composite.undo()

        assert composite.command_count == 0


class TestRankCommands:
    """Structural rank commands, each executed and undone."""

    def test_add_rank(self):
        """Adding a rank inserts it at the index and undo removes it."""
        hierarchy, _, _ = _hierarchy()
        new = Rank(name="Sergeant", required_points=500)
        command = AddRankCommand(hierarchy, new, 2)

        command.execute()
        assert _names(hierarchy) == ["Rookie", "Officer", "Sergeant"]
        assert new.id in hierarchy
        assert command.description == "Add rank 'Sergeant' at index 2"

        command.undo()
        assert _names(hierarchy) == ["Rookie", "Officer"]
        assert new.id not in hierarchy

    def test_undo_after_out_of_band_change_raises(self):
        """Undo refuses to act when the rank moved underneath it."""
        hierarchy, _, _ = _hierarchy()
        manager = UndoRedoManager()
        manager.execute(AddRankCommand(hierarchy, Rank(name="Sergeant"), 0))
        hierarchy.insert_rank(0, Rank(name="Intruder"))

        with pytest.raises(CommandError):
            manager.undo()

        assert manager.undo_count == 1
        assert not manager.can_redo

    def test_add_first_pay_band_to_leaf(self):
        """The first band turns a leaf rank into a parent."""
        hierarchy, rookie, _ = _hierarchy()
        band = Rank(name="placeholder")
        command = AddPayBandCommand(hierarchy, rookie, band)

        command.execute()
        assert rookie.is_parent
        assert _band_names(rookie) == ["Rookie I"]
        assert band.parent_id == rookie.id

        command.undo()
        assert not rookie.is_parent
        assert rookie.pay_bands == []
        assert band.id not in hierarchy

    def test_add_pay_band_in_the_middle_renumbers(self):
        """Inserting a band renumbers the bands after it."""
        hierarchy, _, officer = _hierarchy()
        originals = list(officer.pay_bands)
        band = Rank(name="placeholder")
        command = AddPayBandCommand(hierarchy, officer, band, 1)

        command.execute()
        assert officer.pay_bands[1] is band
        assert _band_names(officer) == ["Officer I", "Officer II", "Officer III", "Officer IV"]

        command.undo()
        assert officer.pay_bands == originals
        assert _band_names(officer) == ["Officer I", "Officer II", "Officer III"]

    def test_add_pay_band_to_pay_band_is_rejected(self):
        """Pay bands cannot hold pay bands."""
        hierarchy, _, officer = _hierarchy()

        with pytest.raises(CommandError):
            AddPayBandCommand(hierarchy, officer.pay_bands[0], Rank(name="x")).execute()

    def test_clone_top_level_rank(self):
        """Cloning a rank places the copy right after it."""
        hierarchy, rookie, _ = _hierarchy()
        command = CloneRankCommand(hierarchy, rookie)

        command.execute()
        assert _names(hierarchy) == ["Rookie", "Rookie (Copy)", "Officer"]
        assert command.description == "Clone rank 'Rookie' to 'Rookie (Copy)'"

        command.undo()
        assert _names(hierarchy) == ["Rookie", "Officer"]

    def test_clone_pay_band(self):
        """Cloning a band keeps it inside the same parent."""
        hierarchy, _, officer = _hierarchy()
        command = CloneRankCommand(hierarchy, officer.pay_bands[0])

        command.execute()
        assert len(officer.pay_bands) == 4
        assert officer.pay_bands[1] is command.clone
        assert command.description == "Clone pay band 'Officer I' in 'Officer'"

        command.undo()
        assert _band_names(officer) == ["Officer I", "Officer II", "Officer III"]

    def test_move_rank(self):
        """Moving a rank swaps it with its neighbour and undo restores it."""
        hierarchy, rookie, _ = _hierarchy()
        command = MoveRankCommand(hierarchy, rookie, 0, 1)

        command.execute()
        assert _names(hierarchy) == ["Officer", "Rookie"]
        assert command.description == "Move 'Rookie' down (from index 0 to 1)"

        command.undo()
        assert _names(hierarchy) == ["Rookie", "Officer"]

    def test_move_checks_source_index(self):
        """A move from the wrong index raises."""
        hierarchy, rookie, _ = _hierarchy()

        with pytest.raises(CommandError):
            MoveRankCommand(hierarchy, rookie, 1, 0).execute()

    def test_promote_pay_band(self):
        """Promotion lifts a band out of its parent to the top level."""
        hierarchy, _, officer = _hierarchy()
        band = officer.pay_bands[1]
        command = PromoteRankCommand(hierarchy, band)

        command.execute()
        assert _names(hierarchy) == ["Rookie", "Officer", "Officer II"]
        assert band.parent_id is None
        assert _band_names(officer) == ["Officer I", "Officer II"]
        assert command.description == "Promote pay band 'Officer II' from 'Officer' to parent rank"

        command.undo()
        assert _names(hierarchy) == ["Rookie", "Officer"]
        assert officer.pay_bands[1] is band
        assert band.parent_id == officer.id
        assert _band_names(officer) == ["Officer I", "Officer II", "Officer III"]

    def test_promote_top_level_rank_is_rejected(self):
        """Only pay bands can be promoted."""
        hierarchy, rookie, _ = _hierarchy()

        with pytest.raises(CommandError, match="is not a pay band"):
            PromoteRankCommand(hierarchy, rookie)

    def test_remove_top_level_rank(self):
        """Removing a rank is undone at the same index."""
        hierarchy, rookie, _ = _hierarchy()
        command = RemoveRankCommand(hierarchy, rookie)

        command.execute()
        assert _names(hierarchy) == ["Officer"]
        assert rookie.id not in hierarchy

        command.undo()
        assert hierarchy.ranks[0] is rookie
        assert rookie.id in hierarchy

    def test_remove_pay_band(self):
        """Removing a band renumbers the remaining bands."""
        hierarchy, _, officer = _hierarchy()
        first = officer.pay_bands[0]
        command = RemoveRankCommand(hierarchy, first)

        command.execute()
        assert _band_names(officer) == ["Officer I", "Officer II"]
        assert command.description == "Remove pay band 'Officer I' from 'Officer'"

        command.undo()
        assert officer.pay_bands[0] is first
        assert _band_names(officer) == ["Officer I", "Officer II", "Officer III"]

    def test_remove_all_ranks(self):
        """Removing all ranks can be undone in one step."""
        hierarchy, rookie, officer = _hierarchy()
        command = RemoveAllRanksCommand(hierarchy)

        command.execute()
        assert len(hierarchy) == 0
        assert officer.pay_bands[0].id not in hierarchy
        assert command.description == "Remove all 2 ranks"

        command.undo()
        assert hierarchy.ranks == [rookie, officer]
        assert officer.pay_bands[0].id in hierarchy

    def test_rename_parent_renumbers_bands(self):
        """Renaming a parent renames its bands too."""
        hierarchy, _, officer = _hierarchy()
        command = RenameRankCommand(hierarchy, officer, "Deputy")

        command.execute()
        assert _band_names(officer) == ["Deputy I", "Deputy II", "Deputy III"]
        assert command.description == "Change Name of 'Officer' from Officer to Deputy"

        command.undo()
        assert officer.name == "Officer"
        assert _band_names(officer) == ["Officer I", "Officer II", "Officer III"]

    def test_command_on_removed_rank_raises(self):
        """Commands fail once their target has been removed."""
        hierarchy, rookie, _ = _hierarchy()
        rename = RenameRankCommand(hierarchy, rookie, "Cadet")
        hierarchy.pop_rank(0)

        with pytest.raises(CommandError, match="no longer part of the hierarchy"):
            rename.execute()
