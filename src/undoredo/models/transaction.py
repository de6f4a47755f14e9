"""Transactions: groups of undo/redo entries replayed as one unit."""

from __future__ import annotations

from typing import Any

from .constants import ExecuteType
from .record import UndoRedoEntry


class UndoRedoTransaction(UndoRedoEntry):
    """Ordered container of records and/or nested transactions.

    Operations are kept most recent first, so replaying in list order undoes
    a batch of edits in reverse recording order, the same way the stack does.

    A transaction is opened and closed through UndoRedoManager:

        with manager.transaction("Paint three cubes"):
            paint(cube_a)
            paint(cube_b)
            paint(cube_c)
        # One undo entry; undo() reverts cube_c, then cube_b, then cube_a
    """

    def __init__(self, name: str | None = ""):
        self._name = name or ""
        self._operations: list[UndoRedoEntry] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def operations_count(self) -> int:
        return len(self._operations)

    @property
    def operations(self) -> tuple[UndoRedoEntry, ...]:
        """Child entries, most recent first."""
        return tuple(self._operations)

    @property
    def top_operation(self) -> UndoRedoEntry | None:
        """Most recently added child, or None when empty."""
        if not self._operations:
            return None
        return self._operations[0]

    @property
    def top_data(self) -> Any:
        top = self.top_operation
        if top is None:
            return None
        return top.top_data

    def is_empty(self) -> bool:
        return not self._operations

    def add_undo_redo_operation(self, operation: UndoRedoEntry) -> None:
        """Add a child entry ahead of all existing ones."""
        self._operations.insert(0, operation)

    def execute(self, mode: ExecuteType = ExecuteType.DEFAULT) -> bool:
        """Replay child entries.

        Args:
            mode: DEFAULT runs every child, most recent first. TOP_ONLY runs
                  just the most recent child, BOTTOM_ONLY just the oldest.

        Returns:
            False if TOP_ONLY/BOTTOM_ONLY found nothing to run
        """
        if mode == ExecuteType.TOP_ONLY:
            return self._run_by_index(0, mode)
        if mode == ExecuteType.BOTTOM_ONLY:
            return self._run_by_index(len(self._operations) - 1, mode)

        # Snapshot: children may push into a transaction during replay
        for operation in list(self._operations):
            operation.execute(mode)
        return True

    def _run_by_index(self, index: int, mode: ExecuteType) -> bool:
        if index < 0 or index >= len(self._operations):
            return False

        self._operations[index].execute(mode)
        return True

    def __repr__(self) -> str:
        return f"UndoRedoTransaction({self._name!r}, {len(self._operations)} operations)"
