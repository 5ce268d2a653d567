"""Command protocol and the generic commands shared by every editor surface."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, Protocol, TypeVar

from rankforge.domain.models import Rank, RankHierarchy, RankID

T = TypeVar("T")


class Command(Protocol):
    """A reversible unit of mutation."""

    description: str

    def execute(self) -> None:
        """Apply the mutation (also used to redo it)."""
        ...

    def undo(self) -> None:
        """Reverse the most recent :meth:`execute`."""
        ...


class CommandError(RuntimeError):
    """Raised when a command's target no longer matches the hierarchy."""


def counted(count: int, noun: str) -> str:
    """``counted(1, "station") == "1 station"``; other counts are pluralized."""

    return f"{count} {noun}{'' if count == 1 else 's'}"


def resolve_rank(hierarchy: RankHierarchy, rank_id: RankID) -> Rank:
    """Look a rank up by id, raising :class:`CommandError` when it is gone."""

    rank = hierarchy.get(rank_id)
    if rank is None:
        raise CommandError(f"rank {rank_id} is no longer part of the hierarchy")
    return rank


class CompositeCommand:
    """Ordered group of commands that the undo stack treats as one entry."""

    def __init__(self, description: str, commands: Iterable[Command] = ()) -> None:
        self.description = description
        self._commands: list[Command] = list(commands)

    def add(self, command: Command) -> None:
        self._commands.append(command)

    @property
    def command_count(self) -> int:
        return len(self._commands)

    @property
    def sub_descriptions(self) -> list[str]:
        return [command.description for command in self._commands]

    def execute(self) -> None:
        done: list[Command] = []
        try:
            for command in self._commands:
                command.execute()
                done.append(command)
        except CommandError:
            for command in reversed(done):
                command.undo()
            raise

    def undo(self) -> None:
        for command in reversed(self._commands):
            command.undo()


class PropertyChangeCommand(Generic[T]):
    """Set a single value through ``setter``, remembering the previous one."""

    def __init__(
        self,
        setter: Callable[[T], None],
        old_value: T,
        new_value: T,
        property_name: str,
        target_description: str,
    ) -> None:
        self._setter = setter
        self.old_value = old_value
        self.new_value = new_value
        self.property_name = property_name
        self.description = (
            f"Change {property_name} of '{target_description}' from {old_value} to {new_value}"
        )

    def execute(self) -> None:
        self._setter(self.new_value)

    def undo(self) -> None:
        self._setter(self.old_value)


class RankSnapshotCommand(Generic[T]):
    """Base for list-level edits on one rank that undo by restoring a snapshot.

    Subclasses capture whatever lists they touch in :meth:`_capture`, mutate in
    :meth:`_apply` and put the captured state back in :meth:`_restore`.
    """

    description = ""

    def __init__(self, hierarchy: RankHierarchy, rank: Rank) -> None:
        self._hierarchy = hierarchy
        self.rank_id = rank.id
        self._snapshot: T | None = None

    def _capture(self, rank: Rank) -> T:
        raise NotImplementedError

    def _apply(self, rank: Rank) -> None:
        raise NotImplementedError

    def _restore(self, rank: Rank, snapshot: T) -> None:
        raise NotImplementedError

    def execute(self) -> None:
        rank = resolve_rank(self._hierarchy, self.rank_id)
        self._snapshot = self._capture(rank)
        self._apply(rank)

    def undo(self) -> None:
        if self._snapshot is None:
            raise CommandError(f"cannot undo '{self.description}' before it was executed")
        rank = resolve_rank(self._hierarchy, self.rank_id)
        self._restore(rank, self._snapshot)
        self._snapshot = None
