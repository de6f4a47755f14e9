"""Colour-swatch demo for the undo/redo engine.

SwatchController holds the demo state and records its own inverse
operations. SwatchWindow is the Tk front end.
"""

from .swatch import Box, SwatchController

__all__ = ["Box", "SwatchController"]
