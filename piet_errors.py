"""
Piet interpreter errors
"""

from typing import Optional, Tuple


class PietError(Exception):
    """Base class for errors that abort a Piet run."""


class UnrecognizedColor(PietError, ValueError):
    """Codel color is not one of the 20 Piet colors."""

    def __init__(self, color: Tuple[int, int, int],
                 coord: Optional[Tuple[int, int]] = None):
        self.color = tuple(color)
        self.coord = coord
        r, g, b = self.color
        where = f" at {coord}" if coord is not None else ""
        super().__init__(f"Unrecognized color #{r:02x}{g:02x}{b:02x}{where}")


class InputExhausted(PietError, EOFError):
    """Character input requested after the input stream ended."""


class UnsupportedOperation(PietError, NotImplementedError):
    """Operation argument has no defined semantics here (negative rolls/rotations)."""
