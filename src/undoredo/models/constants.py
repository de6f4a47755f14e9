# ==============================================================================
# Undo/Redo Configuration
# ==============================================================================

from enum import IntEnum

# Default maximum number of entries retained on each stack
DEFAULT_MAX_ITEMS = 10


class ExecuteType(IntEnum):
    """How a transaction replays its child operations."""

    DEFAULT = 0  # All children, most recently recorded first
    TOP_ONLY = 1  # Only the most recently recorded child
    BOTTOM_ONLY = 2  # Only the first recorded child


class StackKind(IntEnum):
    """Identifies one of the two manager stacks."""

    UNDO = 0
    REDO = 1
