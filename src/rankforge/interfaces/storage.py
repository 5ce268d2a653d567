"""Persistence Protocol for dismissed validation issues."""

from typing import Protocol


class IDismissalStore(Protocol):
    """Protocol for loading and saving dismissed-issue keys."""

    def load(self) -> set[str]:
        """Return every persisted dismissal key (empty when nothing is stored)."""
        ...

    def save(self, keys: set[str]) -> None:
        """Replace the persisted keys with ``keys``."""
        ...
