"""
Grid geometry for the board.
"""

from typing import Tuple

Position = Tuple[int, int]


class Grid:
    """
    A bounded rectangle of cells, 1-indexed on both axes.

    Attributes:
        width: number of columns
        height: number of rows
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 1 <= x <= self.width and 1 <= y <= self.height

    def wrap(self, pos: Position) -> Position:
        """Wrap each axis independently back onto the board."""
        x, y = pos
        return ((x - 1) % self.width + 1, (y - 1) % self.height + 1)

    def clamp(self, pos: Position) -> Position:
        """Return the nearest in-bounds cell."""
        x, y = pos
        return (
            min(max(x, 1), self.width),
            min(max(y, 1), self.height),
        )

    def __repr__(self):
        return f"<Grid {self.width}x{self.height}>"
