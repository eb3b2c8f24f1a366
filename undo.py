"""
TinyGraph - Undo/Redo System
Snapshot history: every mutating gesture records the resulting graph state.
"""

import logging
from typing import Optional

from models import GraphSnapshot

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Two bounded stacks of snapshots. The top of the undo stack is the current
    state; the bottom entry is the sentinel that undo never pops.
    """

    MAX_HISTORY = 100

    def __init__(self, initial: Optional[GraphSnapshot] = None, capacity: int = MAX_HISTORY):
        self.capacity = max(2, capacity)
        self._undo_stack: list[GraphSnapshot] = []
        self._redo_stack: list[GraphSnapshot] = []
        self.reset(initial or GraphSnapshot())

    def record(self, snapshot: GraphSnapshot) -> None:
        """Push a new state. Any redo branch is discarded."""
        self._redo_stack.clear()
        self._undo_stack.append(snapshot)

        # Limit stack size, keeping the sentinel at the bottom
        if len(self._undo_stack) > self.capacity:
            self._undo_stack.pop(1)
            logger.debug(f"History full, dropped oldest entry above the sentinel (capacity {self.capacity})")

    def undo(self) -> Optional[GraphSnapshot]:
        """Step back. Returns the state to restore, or None at the sentinel."""
        if not self.can_undo():
            return None
        self._redo_stack.append(self._undo_stack.pop())
        return self._undo_stack[-1]

    def redo(self) -> Optional[GraphSnapshot]:
        """Step forward. Returns the state to restore, or None if nothing was undone."""
        if not self.can_redo():
            return None
        snapshot = self._redo_stack.pop()
        self._undo_stack.append(snapshot)
        return snapshot

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 1

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def reset(self, sentinel: GraphSnapshot) -> None:
        """Clear all history, keeping `sentinel` as the only entry."""
        self._undo_stack = [sentinel]
        self._redo_stack.clear()

    @property
    def current(self) -> GraphSnapshot:
        return self._undo_stack[-1]

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)
