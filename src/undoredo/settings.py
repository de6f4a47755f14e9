from dataclasses import dataclass

from .models.constants import DEFAULT_MAX_ITEMS


@dataclass
class UndoSettings:
    """Undo/redo manager configuration.

    Attributes:
        max_items: Entries kept on each stack. Zero or less means unbounded.
                   Changes apply at the next push.
        snapshot_data: Deep-copy payloads when they are recorded.
        debug_perf: Log this manager's replay timing, whatever DEBUG_PERF says.
    """

    max_items: int = DEFAULT_MAX_ITEMS
    snapshot_data: bool = True
    debug_perf: bool = False

    @property
    def is_bounded(self) -> bool:
        """Check if the stacks are trimmed on push."""
        return self.max_items > 0
