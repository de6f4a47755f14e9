"""Demo state: a coloured swatch and a list of boxes.

Every mutator records its inverse with the manager before changing state.
Inverses are the mutators themselves, so replaying an entry records the
opposite entry on the other stack.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..data.undo_manager import UndoRedoManager

DEFAULT_COLOR = "white"
PALETTE = ("red", "green", "blue")


@dataclass(eq=False)
class Box:
    """A box placed on the swatch. Compared by identity."""

    name: str
    color: str


class SwatchController:
    """Tk-free model behind the demo window.

    Usage:
        controller = SwatchController(UndoRedoManager())
        controller.set_color("red")
        controller.manager.undo()  # back to white
    """

    def __init__(self, manager: UndoRedoManager, color: str = DEFAULT_COLOR):
        self.manager = manager
        self.color = color
        self.boxes: list[Box] = []
        self._box_counter = 0

        # Observer callbacks - called after any state change
        self._observers: list[Callable[[], None]] = []

    def set_color(self, color: str) -> None:
        """Change the swatch colour, recording the previous colour."""
        self.manager.push(self.set_color, self.color, f"Set color {color}")
        self.color = color
        self._notify_observers()

    def cycle_colors(self, colors: Iterable[str] = PALETTE) -> None:
        """Apply several colours as a single undo step."""
        with self.manager.transaction("Cycle colors"):
            for color in colors:
                self.set_color(color)

    def create_box(self, box: Box | None = None) -> Box:
        """Add a box (a new one, or a previously destroyed one on redo)."""
        if box is None:
            self._box_counter += 1
            box = Box(f"Box {self._box_counter}", self.color)

        self.boxes.append(box)
        # The box itself is the payload; keep the reference so identity survives replay
        self.manager.push(self.destroy_box, box, f"Create {box.name}", snapshot=False)
        self._notify_observers()
        return box

    def destroy_box(self, box: Box) -> None:
        """Remove a box, recording how to bring it back."""
        self.boxes.remove(box)
        self.manager.push(self.create_box, box, f"Destroy {box.name}", snapshot=False)
        self._notify_observers()

    def destroy_last_box(self) -> bool:
        """Remove the most recently created box, if any."""
        if not self.boxes:
            return False
        self.destroy_box(self.boxes[-1])
        return True

    # --- Observers ---

    def add_observer(self, callback: Callable[[], None]) -> None:
        """Add observer callback."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[], None]) -> None:
        """Remove observer callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in self._observers:
            callback()
