"""Snapshot helpers.

The element store has no identity of its own: it is whatever snapshot the
history currently points at. A snapshot is a tuple of frozen elements, so two
snapshots share every element neither of them changed.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from sketchboard.elements import Element

Snapshot = Tuple[Element, ...]


def append(snapshot: Snapshot, element: Element) -> Snapshot:
    return tuple(snapshot) + (element,)


def find(snapshot: Iterable[Element], element_id: int) -> Optional[Element]:
    for element in snapshot:
        if element.id == element_id:
            return element
    return None


def replace(snapshot: Snapshot, element: Element) -> Snapshot:
    """Swap in ``element`` for the entry with the same id."""
    out = []
    found = False
    for existing in snapshot:
        if existing.id == element.id:
            out.append(element)
            found = True
        else:
            out.append(existing)
    if not found:
        raise KeyError(element.id)
    return tuple(out)


def remove(snapshot: Snapshot, element_id: int) -> Snapshot:
    return tuple(element for element in snapshot if element.id != element_id)


class IdAllocator:
    """Hands out increasing element ids that are never reused.

    ``observe`` lifts the floor above every id in a snapshot (after an import,
    say) but never lowers it, so undoing a creation does not free its id.
    """

    def __init__(self, start: int = 0):
        self._next = int(start)

    @property
    def next_id(self) -> int:
        return self._next

    def allocate(self) -> int:
        value = self._next
        self._next += 1
        return value

    def observe(self, snapshot: Iterable[Element]) -> None:
        ids = [element.id for element in snapshot]
        if ids:
            self._next = max(self._next, max(ids) + 1)


__all__ = ["Snapshot", "append", "find", "replace", "remove", "IdAllocator"]
