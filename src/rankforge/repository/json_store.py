"""JSON-backed storage for dismissed validation issues."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter


class JsonDismissalStore:
    """Persist dismissal keys as a sorted JSON array on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._adapter: TypeAdapter[list[str]] = TypeAdapter(list[str])

    def load(self) -> set[str]:
        """Return the stored keys, or an empty set when nothing was saved yet."""

        if not self.path.exists():
            return set()
        return set(self._adapter.validate_json(self.path.read_bytes()))

    def save(self, keys: set[str]) -> None:
        """Write ``keys`` to disk, replacing any previous content."""

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(self._adapter.dump_json(sorted(keys), indent=2))

    def delete(self) -> None:
        """Remove the store file if it exists."""

        if self.path.exists():
            self.path.unlink()


class MemoryDismissalStore:
    """Dismissal store kept in memory; handy for tests and throwaway sessions."""

    def __init__(self, keys: set[str] | None = None) -> None:
        self.keys: set[str] = set(keys or ())

    def load(self) -> set[str]:
        return set(self.keys)

    def save(self, keys: set[str]) -> None:
        self.keys = set(keys)
