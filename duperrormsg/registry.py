"""Per-pass map of normalized message -> occurrences, in traversal order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .shapes import Position


@dataclass(frozen=True)
class Occurrence:
    position: Position
    construct: str


class DuplicateRegistry:
    """
    Append-only for the lifetime of one analysis pass.

    Keys are kept in first-occurrence order (dict insertion order), so
    groups() is stable across runs for the same input.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, list[Occurrence]] = {}

    def record(self, key: str, occurrence: Occurrence) -> None:
        self._occurrences.setdefault(key, []).append(occurrence)

    def groups(self) -> Iterator[tuple[str, list[Occurrence]]]:
        """Yield (key, occurrences) for every key seen more than once."""
        for key, occurrences in self._occurrences.items():
            if len(occurrences) > 1:
                yield key, list(occurrences)

    def __len__(self) -> int:
        return len(self._occurrences)
