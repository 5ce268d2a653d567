"""Edit Session for rankforge.

This module ties the hierarchy, the undo/redo manager and validation together.
Every edit goes through a command; after each execute, undo or redo the
hierarchy is validated again so callers always see a current result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rankforge.codec.xml_codec import serialize
from rankforge.commands.base import Command, CommandError, CompositeCommand, PropertyChangeCommand, resolve_rank
from rankforge.commands.manager import UndoRedoManager
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
from rankforge.config import Settings
from rankforge.domain.enums import Severity, ValidationContext
from rankforge.domain.models import Rank, RankHierarchy, RankID, roman_numeral
from rankforge.services.dismissal import ValidationDismissalService
from rankforge.validation.bubbling import NodeStatus, node_status
from rankforge.validation.engine import validate
from rankforge.validation.issues import ValidationResult
from rankforge.validation.references import CatalogSet

logger = logging.getLogger(__name__)

PROPERTY_CHANGES = "Property changes"


def _midpoint(low: int, high: int) -> int:
    # Truncates toward zero so a descending pair still lands between the two.
    return low + int((high - low) / 2)


@dataclass(slots=True)
class PendingEdit:
    """Uncommitted name/XP/salary values for one rank."""

    rank_id: RankID
    original_name: str
    original_required_points: int
    original_salary: int
    name: str
    required_points: int
    salary: int

    @property
    def is_dirty(self) -> bool:
        return (
            self.name != self.original_name
            or self.required_points != self.original_required_points
            or self.salary != self.original_salary
        )


class EditSession:
    """One open rank hierarchy with undo/redo and live validation."""

    def __init__(
        self,
        hierarchy: RankHierarchy | None = None,
        catalogs: CatalogSet | None = None,
        settings: Settings | None = None,
        dismissals: ValidationDismissalService | None = None,
    ):
        self.settings = settings or Settings()
        self.hierarchy = hierarchy if hierarchy is not None else RankHierarchy()
        self.catalogs = catalogs or CatalogSet()
        self.dismissals = dismissals
        self.history = UndoRedoManager(self.settings.undo_capacity)
        self.pending: PendingEdit | None = None
        self.result = ValidationResult()
        self.revalidate()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def revalidate(self, context: ValidationContext = ValidationContext.FULL) -> ValidationResult:
        """Validate the hierarchy and store the result on the session.

        Args:
            context: Validation context to run

        Returns:
            The fresh ValidationResult
        """
        self.result = validate(self.hierarchy, context=context, catalogs=self.catalogs)
        if self.result.has_errors:
            logger.info("validation found %d error(s)", self.result.error_count)
        return self.result

    @property
    def visible_result(self) -> ValidationResult:
        """The latest result minus any issues the user dismissed."""
        if self.dismissals is None:
            return self.result
        return self.dismissals.filter_result(self.result)

    def node_status(self, rank: Rank, *, is_expanded: bool = True) -> NodeStatus:
        return node_status(rank, self.visible_result, is_expanded=is_expanded)

    def can_generate(self) -> bool:
        """Whether the hierarchy is clean enough to write out.

        Runs the pre-generate checks, which also require every rank to have
        a station.
        """
        result = validate(self.hierarchy, context=ValidationContext.PRE_GENERATE, catalogs=self.catalogs)
        return not result.has_errors

    def export_xml(self) -> str:
        return serialize(self.hierarchy.ranks)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def execute(self, command: Command) -> None:
        """Run a command through the undo manager and re-validate."""
        self.history.execute(command)
        logger.info("executed '%s'", command.description)
        self.revalidate()

    def undo(self) -> bool:
        description = self.history.undo_description
        if not self.history.undo():
            return False
        logger.info("undid '%s'", description)
        self.revalidate()
        return True

    def redo(self) -> bool:
        description = self.history.redo_description
        if not self.history.redo():
            return False
        logger.info("redid '%s'", description)
        self.revalidate()
        return True

    # ------------------------------------------------------------------
    # Rank tree edits
    # ------------------------------------------------------------------

    def add_rank(self, selected: Rank | None = None) -> Rank:
        """Add a top-level rank after ``selected`` with sensible defaults.

        The first rank starts at 0 XP. Later ranks sit halfway to the next
        rank, or one XP step above the last rank when appended at the end.

        Args:
            selected: Currently selected rank or pay band (ignored when empty)

        Returns:
            The newly added rank
        """
        ranks = self.hierarchy.ranks
        if not ranks:
            rank = Rank(name="New Rank 1", required_points=0, salary=self.settings.new_rank_salary)
            self.execute(AddRankCommand(self.hierarchy, rank, 0))
            return rank

        anchor = selected if selected is not None else ranks[-1]
        anchor = self.hierarchy.parent_of(anchor) or anchor
        index = self.hierarchy.index_of(anchor)
        if index < 0:
            raise CommandError(f"'{anchor.name}' is not part of the hierarchy")

        previous = anchor.pay_bands[-1] if anchor.pay_bands else anchor
        if index < len(ranks) - 1:
            following = ranks[index + 1]
            if following.pay_bands:
                following = following.pay_bands[0]
            required_points = _midpoint(previous.required_points, following.required_points)
            salary = _midpoint(previous.salary, following.salary)
        else:
            required_points = previous.required_points + self.settings.new_rank_xp_step
            salary = previous.salary + previous.salary // 10

        rank = Rank(name=f"New Rank {len(ranks) + 1}", required_points=required_points, salary=salary)
        self.execute(AddRankCommand(self.hierarchy, rank, index + 1))
        return rank

    def add_pay_band(self, selected: Rank) -> Rank:
        """Add a pay band to ``selected`` (or after it, when it is a band).

        Args:
            selected: A top-level rank or one of its pay bands

        Returns:
            The newly added pay band
        """
        parent = self.hierarchy.parent_of(selected)
        if parent is None:
            parent = selected
            index = len(parent.pay_bands)
            if parent.pay_bands:
                last = parent.pay_bands[-1]
                required_points, salary = last.required_points, last.salary
            else:
                required_points, salary = parent.required_points, parent.salary
        else:
            index = self.hierarchy.index_of(selected) + 1
            if index < len(parent.pay_bands):
                following = parent.pay_bands[index]
                required_points = _midpoint(selected.required_points, following.required_points)
                salary = _midpoint(selected.salary, following.salary)
            else:
                required_points, salary = selected.required_points, selected.salary

        band = Rank(
            name=f"{parent.name} {roman_numeral(index + 1)}",
            required_points=required_points,
            salary=salary,
        )
        self.execute(AddPayBandCommand(self.hierarchy, parent, band, index))
        return band

    def clone(self, rank: Rank) -> Rank:
        command = CloneRankCommand(self.hierarchy, rank)
        self.execute(command)
        return command.clone

    def move_up(self, rank: Rank) -> bool:
        """Move a top-level rank one place up; pay bands keep their order."""
        if rank.is_pay_band:
            return False
        index = self.hierarchy.index_of(rank)
        if index <= 0:
            return False
        self.execute(MoveRankCommand(self.hierarchy, rank, index, index - 1))
        return True

    def move_down(self, rank: Rank) -> bool:
        """Move a top-level rank one place down; pay bands keep their order."""
        if rank.is_pay_band:
            return False
        index = self.hierarchy.index_of(rank)
        if index < 0 or index >= len(self.hierarchy.ranks) - 1:
            return False
        self.execute(MoveRankCommand(self.hierarchy, rank, index, index + 1))
        return True

    def promote(self, band: Rank) -> None:
        self.execute(PromoteRankCommand(self.hierarchy, band))

    def remove(self, rank: Rank) -> None:
        self.execute(RemoveRankCommand(self.hierarchy, rank))

    def remove_all(self) -> bool:
        if not self.hierarchy.ranks:
            return False
        self.execute(RemoveAllRanksCommand(self.hierarchy))
        return True

    # ------------------------------------------------------------------
    # Property edits
    # ------------------------------------------------------------------

    def begin_edit(self, rank: Rank) -> PendingEdit:
        """Start buffering property edits for ``rank``.

        Any edit still pending for another rank is committed first.
        """
        if self.pending is not None and self.pending.rank_id != rank.id:
            self.commit_changes()
        self.pending = PendingEdit(
            rank_id=rank.id,
            original_name=rank.name,
            original_required_points=rank.required_points,
            original_salary=rank.salary,
            name=rank.name,
            required_points=rank.required_points,
            salary=rank.salary,
        )
        return self.pending

    def _setter(self, rank_id: RankID, attribute: str):
        def apply(value: object) -> None:
            setattr(resolve_rank(self.hierarchy, rank_id), attribute, value)

        return apply

    def commit_changes(self) -> CompositeCommand | None:
        """Turn the pending edit into one undoable command.

        Returns:
            The executed composite, or None when nothing changed
        """
        pending, self.pending = self.pending, None
        if pending is None or not pending.is_dirty:
            return None

        rank = resolve_rank(self.hierarchy, pending.rank_id)
        composite = CompositeCommand(PROPERTY_CHANGES)
        if pending.name != pending.original_name:
            composite.add(RenameRankCommand(self.hierarchy, rank, pending.name, pending.original_name))
        if pending.required_points != pending.original_required_points:
            composite.add(
                PropertyChangeCommand(
                    self._setter(rank.id, "required_points"),
                    pending.original_required_points,
                    pending.required_points,
                    "RequiredPoints",
                    pending.original_name,
                )
            )
        if pending.salary != pending.original_salary:
            composite.add(
                PropertyChangeCommand(
                    self._setter(rank.id, "salary"),
                    pending.original_salary,
                    pending.salary,
                    "Salary",
                    pending.original_name,
                )
            )
        self.execute(composite)
        return composite

    def discard_changes(self) -> None:
        self.pending = None

    def worst_severity(self) -> Severity:
        return self.visible_result.worst_severity
