"""In-process undo/redo engine with transaction support.

Host code performs an edit, then pushes a record describing how to reverse
it. The manager keeps bounded undo and redo stacks and replays records on
request:

- UndoRedoManager: owns both stacks, the open transaction and observers
- UndoRedoRecord: one reversal callable plus its frozen payload
- UndoRedoTransaction: a group of records replayed as one undo step
"""

from .data.undo_manager import UndoRedoManager
from .models.constants import DEFAULT_MAX_ITEMS, ExecuteType, StackKind
from .models.record import UndoRedoEntry, UndoRedoRecord
from .models.transaction import UndoRedoTransaction
from .settings import UndoSettings
from .utils.debug_trace import setup_debug_logging

__all__ = [
    "DEFAULT_MAX_ITEMS",
    "ExecuteType",
    "StackKind",
    "UndoRedoEntry",
    "UndoRedoManager",
    "UndoRedoRecord",
    "UndoRedoTransaction",
    "UndoSettings",
    "setup_debug_logging",
]
