"""Bounded undo/redo stacks driving :class:`~rankforge.commands.base.Command` objects."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from rankforge.commands.base import Command

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50

StacksChangedCallback = Callable[[], None]


class UndoRedoManager:
    """Execute commands and keep the history needed to undo and redo them.

    Both stacks hold at most ``capacity`` commands; when the undo stack is
    full the oldest command is dropped. A command that raises during
    ``execute``/``undo`` leaves both stacks as they were.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._undo: deque[Command] = deque(maxlen=capacity)
        self._redo: deque[Command] = deque(maxlen=capacity)
        self._listeners: list[StacksChangedCallback] = []

    # -- notifications ------------------------------------------------------

    def subscribe(self, callback: StacksChangedCallback) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: StacksChangedCallback) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # -- state --------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_count(self) -> int:
        return len(self._undo)

    @property
    def redo_count(self) -> int:
        return len(self._redo)

    @property
    def undo_description(self) -> str | None:
        return self._undo[-1].description if self._undo else None

    @property
    def redo_description(self) -> str | None:
        return self._redo[-1].description if self._redo else None

    def undo_history(self) -> list[str]:
        """Descriptions on the undo stack, most recent first."""

        return [command.description for command in reversed(self._undo)]

    # -- operations ---------------------------------------------------------

    def execute(self, command: Command) -> None:
        command.execute()
        if len(self._undo) == self.capacity:
            logger.debug("undo stack full, dropping '%s'", self._undo[0].description)
        self._undo.append(command)
        self._redo.clear()
        logger.debug("executed '%s'", command.description)
        self._notify()

    def undo(self) -> bool:
        if not self._undo:
            return False
        command = self._undo[-1]
        command.undo()
        self._undo.pop()
        self._redo.append(command)
        logger.debug("undid '%s'", command.description)
        self._notify()
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        command = self._redo[-1]
        command.execute()
        self._redo.pop()
        self._undo.append(command)
        logger.debug("redid '%s'", command.description)
        self._notify()
        return True

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._notify()
