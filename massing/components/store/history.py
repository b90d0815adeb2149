"""Undo history: a stack of building-collection snapshots"""
from typing import List, Optional, Tuple

from massing.models.building import Building

Snapshot = Tuple[Building, ...]


class History:
    """
    Unbounded LIFO stack of building-collection snapshots

    Snapshots are tuples of immutable Building values, so storing one is
    already a deep copy: no later edit can reach into a stored snapshot.
    """

    def __init__(self):
        self._stack: List[Snapshot] = []

    def push(self, snapshot: Snapshot) -> None:
        self._stack.append(tuple(snapshot))

    def pop(self) -> Optional[Snapshot]:
        """Remove and return the latest snapshot, None when empty"""
        if not self._stack:
            return None
        return self._stack.pop()

    def clear(self) -> None:
        self._stack.clear()

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)
