"""Tk window for the undo/redo demo.

Shows a colour swatch with its boxes, buttons for each edit, Undo/Redo
buttons driven by the manager's stack observers, and a tksheet history
panel listing both stacks.

Keys: u / Ctrl+Z undo, r / Ctrl+Y redo.
"""

from __future__ import annotations

import tkinter as tk
from itertools import zip_longest
from tkinter import ttk

from tksheet import Sheet

from ..data.undo_manager import UndoRedoManager
from ..settings import UndoSettings
from ..utils.debug_trace import log_perf, logger, setup_debug_logging
from .swatch import PALETTE, SwatchController

# Column indices
COL_UNDO = 0
COL_REDO = 1

SWATCH_SIZE = 240
BOX_SIZE = 36
BOX_GAP = 8


class HistoryPanel(ttk.Frame):
    """Read-only table of undo and redo labels, most recent first."""

    def __init__(self, parent, manager: UndoRedoManager):
        super().__init__(parent)
        self._manager = manager
        self._create_widgets()

    def _create_widgets(self) -> None:
        self.sheet = Sheet(
            self,
            headers=["Undo", "Redo"],
            show_row_index=True,
            height=SWATCH_SIZE,
            width=320,
        )
        self.sheet.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)
        self.sheet.enable_bindings("single_select", "column_width_resize")
        self.sheet.set_column_widths([140, 140])

    def refresh(self) -> None:
        """Reload both stacks into the table."""
        rows = zip_longest(
            self._manager.get_undo_stack_information(),
            self._manager.get_redo_stack_information(),
            fillvalue="",
        )
        self.sheet.set_sheet_data([list(row) for row in rows], reset_col_positions=False)


class SwatchWindow:
    """Main window for the undo/redo demo."""

    def __init__(self, root: tk.Tk | None = None, settings: UndoSettings | None = None):
        self.root = root or tk.Tk()
        self.root.title("Undo/Redo Demo")

        self.manager = UndoRedoManager(settings)
        self.controller = SwatchController(self.manager)

        self._create_widgets()
        self._bind_keys()

        self.manager.add_undo_observer(self._on_undo_status_changed)
        self.manager.add_redo_observer(self._on_redo_status_changed)
        self.controller.add_observer(self._redraw)

        self._on_undo_status_changed(self.manager.has_undo_operations)
        self._on_redo_status_changed(self.manager.has_redo_operations)
        self._redraw()

    def _create_widgets(self) -> None:
        """Create all window widgets."""
        main = ttk.Frame(self.root, padding=8)
        main.pack(fill=tk.BOTH, expand=True)

        # Swatch
        self.canvas = tk.Canvas(
            main,
            width=SWATCH_SIZE,
            height=SWATCH_SIZE,
            highlightthickness=1,
            highlightbackground="#9E9E9E",
        )
        self.canvas.grid(row=0, column=0, sticky="n")

        # History
        self.history = HistoryPanel(main, self.manager)
        self.history.grid(row=0, column=1, rowspan=2, sticky="nsew", padx=(8, 0))

        # Buttons
        buttons = ttk.Frame(main)
        buttons.grid(row=1, column=0, sticky="ew", pady=(8, 0))

        for color in PALETTE:
            ttk.Button(
                buttons,
                text=color.capitalize(),
                command=lambda c=color: self.controller.set_color(c),
            ).pack(side=tk.TOP, fill=tk.X)

        ttk.Button(buttons, text="Cycle (one step)", command=self.controller.cycle_colors).pack(
            side=tk.TOP, fill=tk.X
        )
        ttk.Button(buttons, text="Add Box", command=self.controller.create_box).pack(side=tk.TOP, fill=tk.X)
        ttk.Button(buttons, text="Remove Box", command=self.controller.destroy_last_box).pack(
            side=tk.TOP, fill=tk.X
        )

        history_buttons = ttk.Frame(buttons)
        history_buttons.pack(side=tk.TOP, fill=tk.X, pady=(8, 0))
        self.undo_button = ttk.Button(history_buttons, text="Undo", command=self.undo)
        self.undo_button.pack(side=tk.LEFT, expand=True, fill=tk.X)
        self.redo_button = ttk.Button(history_buttons, text="Redo", command=self.redo)
        self.redo_button.pack(side=tk.LEFT, expand=True, fill=tk.X)
        ttk.Button(history_buttons, text="Clear", command=self.clear).pack(side=tk.LEFT, expand=True, fill=tk.X)

        self.status_var = tk.StringVar(value="")
        ttk.Label(main, textvariable=self.status_var).grid(row=2, column=0, columnspan=2, sticky="w")

        main.columnconfigure(1, weight=1)
        main.rowconfigure(1, weight=1)

    def _bind_keys(self) -> None:
        self.root.bind("<KeyPress-u>", lambda e: self.undo())
        self.root.bind("<KeyPress-r>", lambda e: self.redo())
        self.root.bind("<Control-z>", lambda e: self.undo())
        self.root.bind("<Control-Z>", lambda e: self.undo())
        self.root.bind("<Control-y>", lambda e: self.redo())
        self.root.bind("<Control-Y>", lambda e: self.redo())

    # --- Actions ---

    def undo(self) -> None:
        description = self.manager.get_undo_description()
        if self.manager.undo():
            self.status_var.set(f"Undid: {description or '(unnamed)'}")
        self._redraw()

    def redo(self) -> None:
        description = self.manager.get_redo_description()
        if self.manager.redo():
            self.status_var.set(f"Redid: {description or '(unnamed)'}")
        self._redraw()

    def clear(self) -> None:
        self.manager.clear()
        self.status_var.set("History cleared")
        self._redraw()

    # --- Display ---

    def _on_undo_status_changed(self, has_items: bool) -> None:
        self.undo_button.state(["!disabled"] if has_items else ["disabled"])

    def _on_redo_status_changed(self, has_items: bool) -> None:
        self.redo_button.state(["!disabled"] if has_items else ["disabled"])

    @log_perf
    def _redraw(self) -> None:
        """Repaint the swatch and reload the history table."""
        self.canvas.delete("all")
        self.canvas.configure(background=self.controller.color)

        per_row = max(1, (SWATCH_SIZE - BOX_GAP) // (BOX_SIZE + BOX_GAP))
        for idx, box in enumerate(self.controller.boxes):
            x = BOX_GAP + (idx % per_row) * (BOX_SIZE + BOX_GAP)
            y = BOX_GAP + (idx // per_row) * (BOX_SIZE + BOX_GAP)
            self.canvas.create_rectangle(x, y, x + BOX_SIZE, y + BOX_SIZE, fill=box.color, outline="black")

        self.history.refresh()

    def run(self) -> None:
        """Run the demo window."""
        self.root.mainloop()


def main() -> None:
    """Entry point for the demo."""
    setup_debug_logging()
    logger.info("Starting undo/redo demo")
    SwatchWindow().run()


if __name__ == "__main__":
    main()
