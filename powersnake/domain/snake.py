"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        alive: whether the snake is still alive
        death_reason: 'wall' or 'self'
        death_tick: the tick number when the snake died
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("A snake needs at least one segment.")
        self.positions = deque(positions)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def occupies(self, pos: Tuple[int, int], exclude_tail: bool = False) -> bool:
        """
        Check whether any segment sits on pos.

        With exclude_tail the last segment is skipped, since it vacates its
        cell on a tick where the snake does not grow.
        """
        limit = len(self.positions) - 1 if exclude_tail else len(self.positions)
        for i, segment in enumerate(self.positions):
            if i >= limit:
                break
            if segment == pos:
                return True
        return False

    def push_head(self, pos: Tuple[int, int]) -> None:
        self.positions.appendleft(pos)

    def pop_tail(self) -> Tuple[int, int]:
        return self.positions.pop()

    def __len__(self):
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self)} alive={self.alive}>"
