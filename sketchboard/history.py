"""Snapshot history with undo/redo."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sketchboard.store import Snapshot

logger = logging.getLogger(__name__)


class History:
    """Ordered snapshots plus a cursor into them.

    ``push(..., overwrite=True)`` replaces the snapshot under the cursor and
    is meant for continuous feedback (dragging, drawing). A plain ``push``
    drops any redo entries and appends a new snapshot. Undo and redo only move
    the cursor.
    """

    def __init__(self, initial: Iterable = (), limit: Optional[int] = None):
        if limit is not None and limit < 1:
            raise ValueError("History limit must be at least 1")
        self._entries: List[Snapshot] = [tuple(initial)]
        self._index = 0
        self._limit = limit

    @property
    def current(self) -> Snapshot:
        return self._entries[self._index]

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, snapshot: Iterable, overwrite: bool = False) -> None:
        snapshot = tuple(snapshot)
        if overwrite:
            self._entries[self._index] = snapshot
            return
        dropped = len(self._entries) - self._index - 1
        del self._entries[self._index + 1 :]
        self._entries.append(snapshot)
        self._index += 1
        if dropped:
            logger.debug("Discarded %d redo entries", dropped)
        # Cap history to avoid unbounded growth
        if self._limit is not None and len(self._entries) > self._limit:
            excess = len(self._entries) - self._limit
            del self._entries[:excess]
            self._index -= excess

    def undo(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        logger.debug("Undo -> entry %d of %d", self._index, len(self._entries))
        return True

    def redo(self) -> bool:
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        logger.debug("Redo -> entry %d of %d", self._index, len(self._entries))
        return True

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1


__all__ = ["History"]
