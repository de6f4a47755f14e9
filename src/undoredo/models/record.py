"""Undo/redo records: single reversible operations.

An UndoRedoRecord closes over the function that reverses an edit and the
payload that function needs (usually the state before the edit). Records and
transactions share the UndoRedoEntry interface so the manager's stacks can
hold either without caring which.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..utils.debug_trace import logger
from .constants import ExecuteType

T = TypeVar("T")


def operation_name(operation: Callable) -> str:
    """Best-effort display name for a reversal callable (for log output)."""
    return getattr(operation, "__qualname__", None) or getattr(operation, "__name__", None) or repr(operation)


def snapshot_payload(data: T) -> T:
    """Deep-copy a payload so later edits to the original can't leak into it.

    Payloads that can't be copied (locks, OS handles, some widgets) are kept
    by reference.
    """
    try:
        return copy.deepcopy(data)
    except Exception as e:
        # Anything from copy.Error to RecursionError in a proxy's __getattr__
        logger.debug(f"{type(data).__name__} payload kept by reference, deepcopy failed: {e!r}")
        return data


class UndoRedoEntry(ABC):
    """Anything that can sit on an undo or redo stack."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable label ("" if none was given)."""

    @property
    @abstractmethod
    def top_data(self) -> Any:
        """Payload of the entry that would run first, or None."""

    @abstractmethod
    def execute(self, mode: ExecuteType = ExecuteType.DEFAULT) -> bool:
        """Replay the entry.

        Returns:
            True if something was executed
        """


class UndoRedoRecord(UndoRedoEntry, Generic[T]):
    """A single reversible operation.

    Holds the reversal callable, the payload it is called with and a label.
    The record never changes after construction; executing it twice calls the
    operation twice.

    Usage:
        record = UndoRedoRecord(set_color, "white", "set-color-red")
        record.execute()  # set_color("white")
    """

    def __init__(
        self,
        operation: Callable[[T], Any],
        data: T,
        description: str | None = "",
        snapshot: bool = True,
    ):
        """Initialize the record.

        Args:
            operation: One-argument callable that performs the reversal.
            data: Payload passed to operation on replay.
            description: Label shown in stack information.
            snapshot: Deep-copy data now instead of keeping a live reference.

        Raises:
            TypeError: If operation is missing or not callable.
        """
        if operation is None or not callable(operation):
            raise TypeError(f"Undo/redo operation must be callable, got {operation!r}")

        self._operation = operation
        self._data = snapshot_payload(data) if snapshot else data
        self._description = description or ""

    @property
    def name(self) -> str:
        return self._description

    @property
    def operation(self) -> Callable[[T], Any]:
        return self._operation

    @property
    def data(self) -> T:
        """Payload captured when the record was created."""
        return self._data

    @property
    def top_data(self) -> T:
        return self._data

    def execute(self, mode: ExecuteType = ExecuteType.DEFAULT) -> bool:
        """Call the operation with the captured payload. mode is ignored."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Undo/redo operation {operation_name(self._operation)} "
                f"with data {self._data!r} - {self._description}"
            )
        self._operation(self._data)
        return True

    def __repr__(self) -> str:
        return f"UndoRedoRecord({self._description!r}, {operation_name(self._operation)}, {self._data!r})"
