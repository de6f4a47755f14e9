"""Undo/redo manager with transaction support.

The manager owns two bounded stacks of UndoRedoEntry objects:
- undo_stack: entries that reverse the most recent edits
- redo_stack: entries that reverse the most recent undos

Key behaviors:
- Recording is directional: a push during an undo replay lands on the redo
  stack, any other push lands on the undo stack
- A push outside a replay invalidates the redo history
- While a transaction is open, pushes are grouped into one placeholder entry
- Observers are told after every change whether each stack has entries

The manager is plain shared state with no locking. Use it from one thread,
or serialize access externally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any, TypeVar

from ..models.constants import ExecuteType, StackKind
from ..models.record import UndoRedoEntry, UndoRedoRecord, operation_name
from ..models.transaction import UndoRedoTransaction
from ..settings import UndoSettings
from ..utils.debug_trace import logger, perf_timer

T = TypeVar("T")

StackObserver = Callable[[bool], None]


class UndoRedoManager:
    """Records reversible operations and replays them on request.

    Usage:
        manager = UndoRedoManager()

        def set_color(color):
            manager.push(set_color, swatch.color, "Set color")
            swatch.color = color

        set_color("red")
        manager.undo()  # set_color("white"), which records the redo entry
        manager.redo()  # set_color("red")

        # Group several edits into one undo step
        with manager.transaction("Recolor"):
            set_color("green")
            set_color("blue")
    """

    def __init__(self, settings: UndoSettings | None = None):
        """Initialize the manager.

        Args:
            settings: Capacity and recording options. Defaults to UndoSettings().
        """
        self.settings = settings or UndoSettings()

        # Stacks, most recent entry last
        self._undo_stack: list[UndoRedoEntry] = []
        self._redo_stack: list[UndoRedoEntry] = []

        # Replay direction flags
        self._undo_in_progress = False
        self._redo_in_progress = False

        # Open transaction and the placeholders reserved for it on each stack
        self._current_transaction: UndoRedoTransaction | None = None
        self._placeholders: dict[StackKind, UndoRedoTransaction | None] = {
            StackKind.UNDO: None,
            StackKind.REDO: None,
        }

        # Observer callbacks - called with "stack now has entries"
        self._undo_observers: list[StackObserver] = []
        self._redo_observers: list[StackObserver] = []

    # --- Configuration ---

    @property
    def max_items(self) -> int:
        """Maximum entries per stack. Zero or less disables trimming."""
        return self.settings.max_items

    @max_items.setter
    def max_items(self, value: int) -> None:
        # Takes effect on the next push
        self.settings.max_items = value

    # --- Stack State ---

    @property
    def undo_operation_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_operation_count(self) -> int:
        return len(self._redo_stack)

    @property
    def has_undo_operations(self) -> bool:
        return len(self._undo_stack) != 0

    @property
    def has_redo_operations(self) -> bool:
        return len(self._redo_stack) != 0

    @property
    def undo_entries(self) -> tuple[UndoRedoEntry, ...]:
        """Undo stack contents, most recent first."""
        return tuple(reversed(self._undo_stack))

    @property
    def redo_entries(self) -> tuple[UndoRedoEntry, ...]:
        """Redo stack contents, most recent first."""
        return tuple(reversed(self._redo_stack))

    @property
    def current_transaction(self) -> UndoRedoTransaction | None:
        return self._current_transaction

    @property
    def is_undo_in_progress(self) -> bool:
        return self._undo_in_progress

    @property
    def is_redo_in_progress(self) -> bool:
        return self._redo_in_progress

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.has_undo_operations

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.has_redo_operations

    def _stack(self, kind: StackKind) -> list[UndoRedoEntry]:
        return self._undo_stack if kind == StackKind.UNDO else self._redo_stack

    # --- Transactions ---

    def start_transaction(self, tran: UndoRedoTransaction) -> bool:
        """Open a transaction that collects subsequent pushes.

        Reserves an empty placeholder on both stacks. If a transaction is
        already open this does nothing, so nested transactions fold into the
        outermost one.

        Returns:
            True if tran became the current transaction
        """
        if self._current_transaction is not None:
            logger.debug(f"Transaction {tran.name!r} folded into {self._current_transaction.name!r}")
            return False

        self._current_transaction = tran
        for kind in StackKind:
            self._reserve_placeholder(kind)
        return True

    def end_transaction(self, tran: UndoRedoTransaction | None) -> bool:
        """Close tran if it is the current transaction.

        Placeholders that received no operations are removed from the
        stacks. Closing any other transaction is ignored.

        Returns:
            True if the transaction was closed
        """
        if tran is None or tran is not self._current_transaction:
            return False

        self._current_transaction = None
        for kind in StackKind:
            placeholder = self._placeholders[kind]
            self._placeholders[kind] = None
            stack = self._stack(kind)
            if placeholder is not None and stack and stack[-1] is placeholder and placeholder.is_empty():
                stack.pop()
        return True

    @contextmanager
    def transaction(self, name: str = "") -> Generator[UndoRedoTransaction, None, None]:
        """Context manager grouping every push inside it into one undo step.

        The transaction is ended on every exit path, including exceptions.
        Nested blocks are folded into the outermost one.

        Args:
            name: Label shown in stack information

        Yields:
            The transaction handle (current_transaction while the block runs)
        """
        tran = UndoRedoTransaction(name)
        self.start_transaction(tran)
        try:
            yield tran
        finally:
            self.end_transaction(tran)

    def _reserve_placeholder(self, kind: StackKind) -> UndoRedoTransaction:
        """Push a fresh empty placeholder for the current transaction."""
        placeholder = UndoRedoTransaction(self._current_transaction.name)
        self._stack(kind).append(placeholder)
        self._placeholders[kind] = placeholder
        return placeholder

    def _open_placeholder(self, kind: StackKind) -> UndoRedoTransaction:
        """Placeholder at the top of the stack, re-reserved if it was cleared."""
        placeholder = self._placeholders[kind]
        stack = self._stack(kind)
        if placeholder is None or not stack or stack[-1] is not placeholder:
            placeholder = self._reserve_placeholder(kind)
        return placeholder

    # --- Recording ---

    def push(
        self,
        operation: Callable[[T], Any],
        data: T,
        description: str = "",
        *,
        snapshot: bool | None = None,
    ) -> UndoRedoRecord[T]:
        """Record how to reverse an edit that was just made.

        1. Outside a replay, or during a redo, the record goes to the undo stack
        2. During an undo, the record goes to the redo stack
        3. Outside a replay, the redo stack is cleared
        4. Inside a transaction, the record joins the transaction placeholder

        Args:
            operation: One-argument callable that reverses the edit
            data: Payload for operation, usually the pre-edit state
            description: Label shown in stack information
            snapshot: Deep-copy data. Defaults to settings.snapshot_data.

        Returns:
            The record that was stored

        Raises:
            TypeError: If operation is missing or not callable
        """
        if snapshot is None:
            snapshot = self.settings.snapshot_data
        record = UndoRedoRecord(operation, data, description, snapshot=snapshot)

        kind = StackKind.REDO if self._undo_in_progress else StackKind.UNDO
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Adding to {kind.name.lower()} stack {operation_name(operation)} with data {data!r}")

        if not self._undo_in_progress and not self._redo_in_progress:
            # A new edit invalidates the redo history
            self._redo_stack.clear()
            self._notify(StackKind.REDO)

        if self._current_transaction is None:
            self._stack(kind).append(record)
        else:
            self._open_placeholder(kind).add_undo_redo_operation(record)

        self._trim(kind)
        self._notify(kind)
        return record

    def _trim(self, kind: StackKind) -> None:
        """Drop the oldest entries beyond max_items."""
        stack = self._stack(kind)
        max_items = self.settings.max_items
        if max_items <= 0 or len(stack) <= max_items:
            return

        excess = len(stack) - max_items
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Removing {excess} oldest {kind.name.lower()} entries: {stack[:excess]!r}")
        del stack[:excess]

    # --- Undo/Redo ---

    def undo(self) -> bool:
        """Replay the most recent undo entry.

        Returns:
            True if an entry was replayed without error
        """
        return self._replay(StackKind.UNDO)

    def redo(self) -> bool:
        """Replay the most recent redo entry.

        Returns:
            True if an entry was replayed without error
        """
        return self._replay(StackKind.REDO)

    def _replay(self, kind: StackKind) -> bool:
        """Pop and execute the top entry of a stack.

        Flags, the transaction opened for the entry, and the status
        notification are always cleaned up, whatever the outcome.
        """
        label = kind.name.lower()
        stack = self._stack(kind)
        opened: UndoRedoTransaction | None = None

        self._set_in_progress(kind, True)
        try:
            if not stack:
                logger.warning(f"Nothing in the {label} stack")
                return False

            entry = stack.pop()

            # Replay a transaction as a transaction so its pushes regroup
            if isinstance(entry, UndoRedoTransaction) and self.start_transaction(entry):
                opened = entry

            with perf_timer(label, entry_count=len(stack) + 1, enabled=self.settings.debug_perf or None):
                entry.execute(ExecuteType.DEFAULT)
            return True
        except Exception:
            logger.warning(f"{label.capitalize()} failed", exc_info=True)
            return False
        finally:
            self._set_in_progress(kind, False)
            if opened is not None:
                self.end_transaction(opened)
            self._notify(kind)

    def _set_in_progress(self, kind: StackKind, value: bool) -> None:
        if kind == StackKind.UNDO:
            self._undo_in_progress = value
        else:
            self._redo_in_progress = value

    def clear(self) -> None:
        """Discard all undo and redo entries."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._notify(StackKind.UNDO)
        self._notify(StackKind.REDO)

    # --- Introspection ---

    def get_undo_stack_top(self, data_type: type[T] | None = None) -> T | None:
        """Payload the next undo would run with, without popping.

        For a transaction, this is the payload of its most recent operation.

        Args:
            data_type: Expected payload type. Checked when given.

        Returns:
            The payload, or None if the stack or top transaction is empty

        Raises:
            TypeError: If the payload is not an instance of data_type
        """
        return self._stack_top(StackKind.UNDO, data_type)

    def get_redo_stack_top(self, data_type: type[T] | None = None) -> T | None:
        """Payload the next redo would run with. See get_undo_stack_top."""
        return self._stack_top(StackKind.REDO, data_type)

    def _stack_top(self, kind: StackKind, data_type: type[T] | None) -> T | None:
        stack = self._stack(kind)
        if not stack:
            return None

        data = stack[-1].top_data
        if data is None:
            return None
        if data_type is not None and not isinstance(data, data_type):
            raise TypeError(
                f"Top of {kind.name.lower()} stack holds {type(data).__name__}, "
                f"not {data_type.__name__}"
            )
        return data

    def get_undo_stack_information(self) -> list[str]:
        """Labels of all undo entries, most recent first."""
        return [entry.name or "" for entry in reversed(self._undo_stack)]

    def get_redo_stack_information(self) -> list[str]:
        """Labels of all redo entries, most recent first."""
        return [entry.name or "" for entry in reversed(self._redo_stack)]

    def get_undo_description(self) -> str | None:
        """Get description of next undo action."""
        if self._undo_stack:
            return self._undo_stack[-1].name
        return None

    def get_redo_description(self) -> str | None:
        """Get description of next redo action."""
        if self._redo_stack:
            return self._redo_stack[-1].name
        return None

    # --- Observers ---

    def add_undo_observer(self, callback: StackObserver) -> None:
        """Add callback fired with True/False when the undo stack may have changed."""
        if callback not in self._undo_observers:
            self._undo_observers.append(callback)

    def remove_undo_observer(self, callback: StackObserver) -> None:
        """Remove undo stack observer."""
        if callback in self._undo_observers:
            self._undo_observers.remove(callback)

    def add_redo_observer(self, callback: StackObserver) -> None:
        """Add callback fired with True/False when the redo stack may have changed."""
        if callback not in self._redo_observers:
            self._redo_observers.append(callback)

    def remove_redo_observer(self, callback: StackObserver) -> None:
        """Remove redo stack observer."""
        if callback in self._redo_observers:
            self._redo_observers.remove(callback)

    def _notify(self, kind: StackKind) -> None:
        """Tell observers of one stack whether it has entries."""
        if kind == StackKind.UNDO:
            observers, has_items = self._undo_observers, self.has_undo_operations
        else:
            observers, has_items = self._redo_observers, self.has_redo_operations

        for callback in list(observers):
            try:
                callback(has_items)
            except Exception:
                # Don't let one observer's error break others
                logger.exception(f"{kind.name.capitalize()} stack observer {callback!r} failed")
